"""MicroDVD (``{start}{end}text``) to SRT conversion."""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from pathlib import PurePosixPath
from typing import List, Optional

from .constants import DEFAULT_FPS
from .results import ErrorKind
from .settings import settings

MICRODVD_LINE_RE = re.compile(r"^\{(\d+)\}\{(\d+)\}(.*)")
MICRODVD_HEAD_RE = re.compile(r"^\{[0-9]+\}\{[0-9]+\}")
FPS_HEADER_RE = re.compile(r"^\{1\}\{1\}(\d+(?:[\.,]\d+)?)\s*$")

log = logging.getLogger("subtitle_payload.microdvd")


def looks_like_microdvd(text: str) -> bool:
    return bool(text) and MICRODVD_HEAD_RE.match(text) is not None


def frame_to_time(frame: int, fps: float = DEFAULT_FPS) -> str:
    # Decimal keeps 3/25 at exactly 120 ms instead of 119.999...
    millis = int(Decimal(int(frame)) * 1000 / Decimal(str(fps)))
    hours, millis = divmod(millis, 3_600_000)
    minutes, millis = divmod(millis, 60_000)
    seconds, millis = divmod(millis, 1000)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{millis:03d}"


def _header_fps(line: str) -> Optional[float]:
    match = FPS_HEADER_RE.match(line.strip())
    if not match:
        return None
    fps = float(match.group(1).replace(",", "."))
    return fps if fps > 0 else None


def microdvd_to_srt(text: str, fps: Optional[float] = None) -> str:
    """Convert MicroDVD cues to numbered SRT blocks.

    Lines that are not cues are dropped. A leading ``{1}{1}23.976`` cue is the
    file's frame rate, not dialogue; it is used when ``fps`` is not given.
    If anything goes wrong the input is returned untouched.
    """
    try:
        lines = [line for line in text.split("\n") if line.strip()]
        header = _header_fps(lines[0]) if lines else None
        if header is not None:
            lines = lines[1:]
        rate = fps if fps is not None else (header or settings.default_fps)
        if rate <= 0:
            raise ValueError(f"invalid frame rate {rate!r}")

        blocks: List[str] = []
        for line in lines:
            match = MICRODVD_LINE_RE.match(line)
            if not match:
                continue
            start = frame_to_time(int(match.group(1)), rate)
            end = frame_to_time(int(match.group(2)), rate)
            body = match.group(3).rstrip("\r").replace("|", "\n")
            blocks.append(f"{len(blocks) + 1}\n{start} --> {end}\n{body}\n\n")
        return "".join(blocks)
    except Exception as exc:
        log.warning("microdvd_to_srt: %s, keeping original text: %s", ErrorKind.MALFORMED_CONVERSION_INPUT.value, exc)
        return text


def srt_filename(filename: str) -> str:
    if filename.lower().endswith(".sub"):
        return filename[:-4] + ".srt"
    return str(PurePosixPath(filename).with_suffix(".srt")) if filename else "subtitle.srt"
