"""Encoding trial engine: decide which code page a subtitle was written in.

Valid UTF-8 is accepted straight away. Otherwise every label in
``ENCODING_CATALOG`` (after an optional caller preference) is decoded
leniently and scored on how much the result looks like a subtitle file;
the best score wins.
"""

from __future__ import annotations

import codecs
import logging
import re
from typing import Iterable, List, Optional

from charset_normalizer import from_bytes

from .constants import (
    ARABIC_CODEPAGES,
    CODEC_ALIASES,
    ENCODING_CATALOG,
    LINE_LENGTH_MAX,
    LINE_LENGTH_MIN,
    MIN_READABLE_LENGTH,
    P_GARBLED,
    W_ARABIC_CODEPAGE,
    W_CLEAN,
    W_DIGITS,
    W_LETTERS,
    W_LINE_LENGTH,
    W_PUNCTUATION,
    W_SEQUENCE_NUMBER,
    W_TIMESTAMP,
)
from .garbled import is_garbled
from .results import DecodeAttempt, ErrorKind, Outcome
from .sanitize import sanitize_text

DIGITS_RE = re.compile(r"\d+", re.ASCII)
LATIN_RE = re.compile(r"[A-Za-z]")
ARABIC_RUN_RE = re.compile(
    "[\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\uFB50-\uFDFF\uFE70-\uFEFF]{3,}"
)
PUNCTUATION_RE = re.compile(r"[.,!?;:]")
SRT_TIMESTAMP_RE = re.compile(
    r"\d{2}:\d{2}:\d{2},\d{3}\s*-->\s*\d{2}:\d{2}:\d{2},\d{3}", re.ASCII
)
LEADING_SEQUENCE_RE = re.compile(r"^\s*\d+\s*\n", re.ASCII)

log = logging.getLogger("subtitle_payload.encoding")


def resolve_codec(label: str) -> codecs.CodecInfo:
    """Look up a codec by web label, raising ``LookupError`` when unknown."""
    key = (label or "").strip().lower()
    return codecs.lookup(CODEC_ALIASES.get(key, key))


def is_utf8_label(label: Optional[str]) -> bool:
    return (label or "").strip().lower() in {"utf-8", "utf8"}


def decode_strict_utf8(data: bytes) -> Optional[str]:
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError:
        return None


def decode_lenient(data: bytes, label: str) -> str:
    return resolve_codec(label).decode(bytes(data), "replace")[0]


def has_arabic_run(text: str) -> bool:
    return ARABIC_RUN_RE.search(text) is not None


def readability_score(text: str) -> int:
    if not text or len(text) < MIN_READABLE_LENGTH:
        return 0

    score = 0
    if DIGITS_RE.search(text):
        score += W_DIGITS
    if LATIN_RE.search(text) or has_arabic_run(text):
        score += W_LETTERS
    if PUNCTUATION_RE.search(text):
        score += W_PUNCTUATION
    if any(LINE_LENGTH_MIN < len(line) < LINE_LENGTH_MAX for line in text.split("\n")):
        score += W_LINE_LENGTH
    if SRT_TIMESTAMP_RE.search(text):
        score += W_TIMESTAMP
    if LEADING_SEQUENCE_RE.match(text):
        score += W_SEQUENCE_NUMBER
    return score


def score_candidate(label: str, text: str, threshold: Optional[float] = None) -> DecodeAttempt:
    readability = readability_score(text)
    garbled = is_garbled(text, threshold)
    quality = readability + (P_GARBLED if garbled else W_CLEAN)
    if label.lower() in ARABIC_CODEPAGES and has_arabic_run(text):
        quality += W_ARABIC_CODEPAGE
    return DecodeAttempt(
        encoding_name=label,
        decoded_text=text,
        quality_score=quality,
        is_garbled=garbled,
        readability=readability,
    )


def candidate_labels(preferred: Optional[str] = None) -> List[str]:
    labels: Iterable[str] = ENCODING_CATALOG
    if preferred:
        labels = [preferred, *ENCODING_CATALOG]
    return list(dict.fromkeys(labels))


class _DetectorGuess:
    """Lazily ask charset_normalizer for its best guess, at most once."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._resolved = False
        self._codec: Optional[str] = None

    def matches(self, label: str) -> bool:
        if not self._resolved:
            self._resolved = True
            try:
                match = from_bytes(bytes(self._data)).best()
                if match is not None:
                    self._codec = codecs.lookup(match.encoding).name
            except Exception as exc:
                log.debug("charset_normalizer failed: %s", exc)
        if self._codec is None:
            return False
        try:
            return resolve_codec(label).name == self._codec
        except LookupError:
            return False


def _prefer(
    candidate: DecodeAttempt,
    best: Optional[DecodeAttempt],
    guess: _DetectorGuess,
    preferred: Optional[str] = None,
) -> bool:
    if best is None or candidate.quality_score > best.quality_score:
        return True
    if candidate.quality_score < best.quality_score:
        return False
    if is_utf8_label(candidate.encoding_name):
        return True
    if is_utf8_label(best.encoding_name) or best.encoding_name == preferred:
        return False
    return guess.matches(candidate.encoding_name) and not guess.matches(best.encoding_name)


def trial_decode(
    data: bytes,
    preferred_encoding: Optional[str] = None,
    garbled_threshold: Optional[float] = None,
) -> Outcome[DecodeAttempt]:
    preferred = (preferred_encoding or "").strip().lower() or None

    if preferred is None or is_utf8_label(preferred):
        strict = decode_strict_utf8(data)
        if strict is not None:
            attempt = score_candidate("utf-8", sanitize_text(strict), garbled_threshold)
            attempt.strict_utf8 = True
            return Outcome.ok(attempt)

    guess = _DetectorGuess(data)
    best: Optional[DecodeAttempt] = None
    for label in candidate_labels(preferred):
        try:
            decoded = decode_lenient(data, label)
        except (LookupError, UnicodeError, ValueError, TypeError) as exc:
            log.debug("trial_decode: %s rejected: %s", label, exc)
            continue
        if not decoded.strip():
            continue

        attempt = score_candidate(label, sanitize_text(decoded), garbled_threshold)
        if _prefer(attempt, best, guess, preferred):
            best = attempt

    if best is None:
        log.info("trial_decode: %s", ErrorKind.NO_CANDIDATE_ENCODING.value)
        return Outcome.skip(ErrorKind.NO_CANDIDATE_ENCODING.value)

    log.debug(
        "trial_decode: picked %s (quality=%d, garbled=%s)",
        best.encoding_name,
        best.quality_score,
        best.is_garbled,
    )
    return Outcome.ok(best)
