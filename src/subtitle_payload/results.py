"""Result and outcome types shared by the extraction stages."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, TypeVar, Union

T = TypeVar("T")


class SubtitleExtractionError(RuntimeError):
    """Raised when a downloaded payload does not contain a usable subtitle."""


class ArchiveParseError(SubtitleExtractionError):
    """Raised when an archive buffer cannot be opened or read."""


class ErrorKind(str, enum.Enum):
    EMPTY_ARCHIVE = "empty_archive"
    UNPARSEABLE_ARCHIVE = "unparseable_archive"
    NO_CANDIDATE_ENCODING = "no_candidate_encoding"
    UNRECOVERABLE_PAYLOAD = "unrecoverable_payload"
    MALFORMED_CONVERSION_INPUT = "malformed_conversion_input"


class SubtitleKind(str, enum.Enum):
    TEXT = "text"
    BINARY = "binary"


@dataclass(frozen=True)
class ArchiveEntry:
    name: str
    data: bytes = field(repr=False)


@dataclass
class DecodeAttempt:
    encoding_name: str
    decoded_text: str = field(repr=False)
    quality_score: int
    is_garbled: bool
    readability: int = 0
    strict_utf8: bool = False


@dataclass(frozen=True)
class Success:
    content: str
    filename: str
    encoding: Optional[str] = None

    success = True
    binary = False

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "success": True,
            "binary": False,
            "content": self.content,
            "filename": self.filename,
        }
        if self.encoding:
            payload["encoding"] = self.encoding
        return payload


@dataclass(frozen=True)
class SuccessBinary:
    filename: str
    buffer: bytes = field(repr=False)

    success = True
    binary = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "binary": True,
            "filename": self.filename,
            "content": f"Binary subtitle format: {self.filename}",
        }


@dataclass(frozen=True)
class Failure:
    error: str
    kind: ErrorKind
    filename: Optional[str] = None
    details: Optional[str] = None

    success = False
    binary = False

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"success": False, "error": self.error}
        if self.filename:
            payload["filename"] = self.filename
        if self.details is not None:
            payload["details"] = self.details
        return payload


ExtractionResult = Union[Success, SuccessBinary, Failure]


class OutcomeStatus(str, enum.Enum):
    OK = "ok"
    SKIP = "skip"
    FATAL = "fatal"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Tagged result of a single pipeline stage.

    ``ok`` carries a value, ``skip`` means the stage produced nothing usable
    and the next stage should run, ``fatal`` carries a terminal ``Failure``.
    """

    status: OutcomeStatus
    value: Optional[T] = None
    failure: Optional[Failure] = None
    reason: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> "Outcome[T]":
        return cls(OutcomeStatus.OK, value=value)

    @classmethod
    def skip(cls, reason: str) -> "Outcome[T]":
        return cls(OutcomeStatus.SKIP, reason=reason)

    @classmethod
    def fatal(cls, failure: Failure) -> "Outcome[T]":
        return cls(OutcomeStatus.FATAL, failure=failure, reason=failure.error)

    @property
    def is_ok(self) -> bool:
        return self.status is OutcomeStatus.OK
