"""Entry points: archive bytes or unwrapped subtitle bytes in, one result out."""

from __future__ import annotations

import logging
import os
from typing import Optional

from .archive import select_entry
from .cache import TTLCache, content_key
from .classify import classify_entry
from .encoding import trial_decode
from .garbled import is_garbled
from .microdvd import looks_like_microdvd, microdvd_to_srt, srt_filename
from .recovery import recover
from .results import ErrorKind, ExtractionResult, Failure, Outcome, Success, SuccessBinary, SubtitleKind
from .sanitize import sanitize_text
from .settings import settings

DEFAULT_FILENAME = "subtitle.srt"

log = logging.getLogger("subtitle_payload.engine")


def _normalize_encoding(preferred_encoding: Optional[str]) -> Optional[str]:
    value = (preferred_encoding or "").strip().lower()
    return value or None


def _decode(data: bytes, filename: str, preferred: Optional[str], fps: Optional[float]) -> ExtractionResult:
    if classify_entry(filename, data) is SubtitleKind.BINARY:
        log.info("decode_text: passing %s through as binary", filename)
        return SuccessBinary(filename=filename, buffer=bytes(data))

    threshold = settings.garbled_threshold
    outcome = trial_decode(data, preferred, threshold)
    if outcome.is_ok and outcome.value is not None:
        attempt = outcome.value
        text, name = attempt.decoded_text, filename
        if name.lower().endswith(".sub") and looks_like_microdvd(text):
            text = sanitize_text(microdvd_to_srt(text, fps))
            name = srt_filename(name)
        # strict UTF-8 is final, U+FFFD included
        if text.strip() and (attempt.strict_utf8 or not is_garbled(text, threshold)):
            return Success(content=text, filename=name, encoding=attempt.encoding_name)
        log.warning(
            "decode_text: %s decoded as %s is unusable, trying recovery",
            filename,
            attempt.encoding_name,
        )
    else:
        log.warning("decode_text: no candidate encoding for %s: %s", filename, outcome.reason)

    return recover(data, filename, fps, threshold, settings.hexdump_limit)


def decode_text(
    data: bytes,
    filename: Optional[str],
    preferred_encoding: Optional[str] = None,
    *,
    fps: Optional[float] = None,
    cache: Optional[TTLCache] = None,
) -> ExtractionResult:
    """Decode an already unwrapped subtitle entry.

    Returns ``Success`` with clean UTF-8 text, ``SuccessBinary`` for opaque
    containers such as VobSub, or ``Failure`` with a hex dump when nothing
    readable could be recovered.
    """
    name = os.path.basename(filename or "") or DEFAULT_FILENAME
    preferred = _normalize_encoding(preferred_encoding)

    key = None
    if cache is not None:
        key = content_key(data, "decode", name, preferred, fps)
        cached = cache.get(key)
        if cached is not None:
            return cached

    try:
        result = _decode(data, name, preferred, fps)
    except Exception as exc:
        log.exception("decode_text: unexpected error on %s", name)
        result = Failure(
            error=f"Failed to extract text from {name}",
            kind=ErrorKind.UNRECOVERABLE_PAYLOAD,
            filename=name,
            details=str(exc),
        )

    if key is not None:
        cache.set(key, result)
    return result


def extract_from_archive(
    payload: bytes,
    preferred_encoding: Optional[str] = None,
    *,
    fps: Optional[float] = None,
    cache: Optional[TTLCache] = None,
) -> ExtractionResult:
    """Pick the subtitle entry out of an archive and decode it."""
    key = None
    if cache is not None:
        key = content_key(payload, "archive", _normalize_encoding(preferred_encoding), fps)
        cached = cache.get(key)
        if cached is not None:
            return cached

    try:
        outcome = select_entry(payload)
    except Exception as exc:
        log.exception("extract_from_archive: unexpected error reading archive")
        outcome = Outcome.fatal(
            Failure(
                error="Failed to read subtitle archive",
                kind=ErrorKind.UNPARSEABLE_ARCHIVE,
                details=str(exc),
            )
        )

    if outcome.is_ok and outcome.value is not None:
        entry = outcome.value
        result = decode_text(entry.data, entry.name, preferred_encoding, fps=fps)
    else:
        result = outcome.failure or Failure(
            error="no subtitle file found", kind=ErrorKind.EMPTY_ARCHIVE
        )

    if key is not None:
        cache.set(key, result)
    return result
