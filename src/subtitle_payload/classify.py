from __future__ import annotations

import logging
import re

from .constants import BINARY_CAPABLE_EXTENSIONS, BINARY_SNIFF_BYTES
from .results import SubtitleKind

MICRODVD_HEAD_RE = re.compile(r"^\{[0-9]+\}\{[0-9]+\}")

log = logging.getLogger("subtitle_payload.classify")


def classify_entry(name: str, data: bytes) -> SubtitleKind:
    """Tell MicroDVD ``.sub`` text apart from VobSub-style binary containers."""
    if not name.lower().endswith(BINARY_CAPABLE_EXTENSIONS):
        return SubtitleKind.TEXT

    try:
        sample = bytes(data[:BINARY_SNIFF_BYTES]).decode("latin-1")
    except Exception as exc:
        log.warning("classify_entry: could not sample %s: %s", name, exc)
        return SubtitleKind.BINARY

    if MICRODVD_HEAD_RE.match(sample):
        return SubtitleKind.TEXT
    return SubtitleKind.BINARY
