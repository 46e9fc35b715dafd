"""Mojibake and replacement-character detection for decoded subtitle text."""

from __future__ import annotations

import re
from typing import Optional

from .constants import GARBLED_THRESHOLD

REPLACEMENT_CHAR = "\uFFFD"

GARBLED_PATTERNS = (
    re.compile("\uFFFD\uFFFD"),
    re.compile("\uFFFD[A-Za-z]"),
    re.compile("[A-Za-z]\uFFFD"),
    re.compile("\uFFFD\uFFFD\uFFFD"),
    re.compile("\uFFFE"),
    re.compile("\uFFFF"),
    # UTF-8 read as cp1252: lead byte 0xC3 / 0xC2 followed by a continuation byte
    re.compile("\u00C3[\u00A0-\u00BF]"),
    re.compile("\u00C2[\u00A0-\u00BF]"),
)


def garbled_count(text: str) -> int:
    total = text.count(REPLACEMENT_CHAR)
    for pattern in GARBLED_PATTERNS:
        total += len(pattern.findall(text))
    return total


def is_garbled(text: Optional[str], threshold: Optional[float] = None) -> bool:
    """Return True when more than ``threshold`` of ``text`` looks corrupted.

    Empty input counts as garbled so callers fall through to recovery.
    """
    if not text:
        return True
    limit = GARBLED_THRESHOLD if threshold is None else threshold
    return garbled_count(text) / len(text) > limit
