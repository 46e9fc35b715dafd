"""Turn subtitle downloads (archives or raw files) into clean UTF-8 text."""

from .engine import decode_text, extract_from_archive
from .results import (
    ArchiveEntry,
    ErrorKind,
    ExtractionResult,
    Failure,
    Success,
    SuccessBinary,
    SubtitleExtractionError,
)

__version__ = "0.1.0"

__all__ = [
    "ArchiveEntry",
    "ErrorKind",
    "ExtractionResult",
    "Failure",
    "Success",
    "SuccessBinary",
    "SubtitleExtractionError",
    "decode_text",
    "extract_from_archive",
]
