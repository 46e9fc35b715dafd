from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional, Tuple

from .constants import HEXDUMP_LIMIT, HEXDUMP_ROW, MIN_PRINTABLE_RUN
from .garbled import is_garbled
from .microdvd import microdvd_to_srt, srt_filename
from .results import ErrorKind, ExtractionResult, Failure, Outcome, Success
from .sanitize import sanitize_text

MICRODVD_ANYWHERE_RE = re.compile(r"\{(\d+)\}\{(\d+)\}([^\n\r]*)")
SRT_BLOCK_RE = re.compile(
    r"(\d+)\s*\r?\n(\d{2}:\d{2}:\d{2},\d{3})\s*-->\s*(\d{2}:\d{2}:\d{2},\d{3})\r?\n"
    r"([\s\S]*?)(?=\r?\n\r?\n\d+\s*\r?\n|\s*\Z)",
    re.ASCII,
)
PRINTABLE_RUN_RE = re.compile(
    r"[\w\s.,!?;:'\"()\[\]{}<>/\\|@#$%^&*+=_-]{" + str(MIN_PRINTABLE_RUN) + ",}", re.ASCII
)
LETTER_RUN_RE = re.compile(r"[a-zA-Z]{3,}")

log = logging.getLogger("subtitle_payload.recovery")

Candidate = Tuple[str, str, Optional[str]]  # content, filename, encoding


def raw_text(data: bytes) -> str:
    """One character per byte; lossy, but never fails and keeps offsets."""
    return bytes(data).decode("latin-1")


def hexdump(data: bytes, limit: int = HEXDUMP_LIMIT) -> str:
    rows: List[str] = []
    view = bytes(data[: max(limit, 0)])
    for offset in range(0, len(view), HEXDUMP_ROW):
        block = view[offset : offset + HEXDUMP_ROW]
        hex_part = " ".join(f"{b:02x}" for b in block)
        ascii_part = "".join(chr(b) if 32 <= b < 127 else "." for b in block)
        rows.append(f"{offset:08x}: {hex_part.ljust(HEXDUMP_ROW * 3)} {ascii_part}\n")
    return "".join(rows)


def _accept(text: str, threshold: Optional[float]) -> Optional[str]:
    if not text:
        return None
    cleaned = sanitize_text(text)
    if not cleaned.strip() or is_garbled(cleaned, threshold):
        return None
    return cleaned


def recover_pattern_lines(
    data: bytes, filename: str, fps: Optional[float] = None, threshold: Optional[float] = None
) -> Outcome[Candidate]:
    raw = raw_text(data)
    lower = filename.lower()

    if lower.endswith(".sub"):
        lines = [f"{{{m.group(1)}}}{{{m.group(2)}}}{m.group(3)}" for m in MICRODVD_ANYWHERE_RE.finditer(raw)]
        if not lines:
            return Outcome.skip("no MicroDVD cues in raw bytes")
        converted = _accept(microdvd_to_srt("\n".join(lines), fps), threshold)
        if converted is None:
            return Outcome.skip("MicroDVD cues unusable")
        return Outcome.ok((converted, srt_filename(filename), None))

    if lower.endswith(".srt"):
        blocks = [
            f"{m.group(1)}\n{m.group(2)} --> {m.group(3)}\n{m.group(4)}"
            for m in SRT_BLOCK_RE.finditer(raw)
        ]
        if not blocks:
            return Outcome.skip("no SRT blocks in raw bytes")
        text = _accept("\n\n".join(blocks), threshold)
        if text is None:
            return Outcome.skip("SRT blocks unusable")
        return Outcome.ok((text, filename, None))

    return Outcome.skip("no pattern for this file type")


def recover_printable_runs(
    data: bytes, filename: str, fps: Optional[float] = None, threshold: Optional[float] = None
) -> Outcome[Candidate]:
    runs = [run for run in PRINTABLE_RUN_RE.findall(raw_text(data)) if LETTER_RUN_RE.search(run)]
    if not runs:
        return Outcome.skip("no printable runs")
    text = _accept("\n\n".join(runs), threshold)
    if text is None:
        return Outcome.skip("printable runs unusable")
    return Outcome.ok((text, filename, None))


def recover_forced_utf8(
    data: bytes, filename: str, fps: Optional[float] = None, threshold: Optional[float] = None
) -> Outcome[Candidate]:
    text = sanitize_text(bytes(data).decode("utf-8", errors="replace"))
    if not text.strip():
        return Outcome.skip("forced UTF-8 decode is empty")
    if is_garbled(text, threshold):
        log.warning("recover_forced_utf8: %s still looks garbled, returning it anyway", filename)
    return Outcome.ok((text, filename, "utf-8"))


STAGES: Tuple[Callable[..., Outcome[Candidate]], ...] = (
    recover_pattern_lines,
    recover_printable_runs,
    recover_forced_utf8,
)


def recover(
    data: bytes,
    filename: str,
    fps: Optional[float] = None,
    threshold: Optional[float] = None,
    hexdump_limit: int = HEXDUMP_LIMIT,
) -> ExtractionResult:
    for stage in STAGES:
        try:
            outcome = stage(data, filename, fps, threshold)
        except Exception as exc:
            log.warning("recover: %s failed on %s: %s", stage.__name__, filename, exc)
            continue
        if outcome.is_ok and outcome.value is not None:
            content, name, encoding = outcome.value
            log.info("recover: %s recovered %s", stage.__name__, name)
            return Success(content=content, filename=name, encoding=encoding)
        log.debug("recover: %s skipped: %s", stage.__name__, outcome.reason)

    log.error("recover: every stage failed for %s (%d bytes)", filename, len(data))
    return Failure(
        error="subtitle payload is empty or unreadable",
        kind=ErrorKind.UNRECOVERABLE_PAYLOAD,
        filename=filename,
        details=f"File size: {len(data)} bytes. hexdump:\n{hexdump(data, hexdump_limit)}",
    )
