from __future__ import annotations

import io
import logging
import os
import tempfile
import zipfile
import zlib
from typing import List, Optional, Sequence

import py7zr
import rarfile
from rarfile import Error as RarError, RarCannotExec

from .constants import ALL_SUBTITLE_EXTENSIONS, TEXT_SUBTITLE_EXTENSIONS
from .results import ArchiveEntry, ArchiveParseError, ErrorKind, Failure, Outcome

RAR_MAGIC = b"Rar!\x1a\x07"
SEVEN_ZIP_MAGIC = b"7z\xbc\xaf\x27\x1c"

log = logging.getLogger("subtitle_payload.archive")


def _has_extension(name: str, extensions: Sequence[str]) -> bool:
    lower = name.lower()
    return any(lower.endswith(ext) for ext in extensions)


def is_subtitle_name(name: str) -> bool:
    return _has_extension(name, ALL_SUBTITLE_EXTENSIONS)


def _read_zip(data: bytes) -> List[ArchiveEntry]:
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        entries = []
        for info in archive.infolist():
            if info.is_dir():
                continue
            entries.append(ArchiveEntry(info.filename, archive.read(info)))
        return entries


def _read_rar(data: bytes) -> List[ArchiveEntry]:
    with rarfile.RarFile(io.BytesIO(data)) as archive:
        entries = []
        for info in archive.infolist():
            if info.is_dir():
                continue
            entries.append(ArchiveEntry(info.filename, archive.read(info)))
        return entries


def _read_7z(data: bytes) -> List[ArchiveEntry]:
    with py7zr.SevenZipFile(io.BytesIO(data)) as archive:
        names = [info.filename for info in archive.list() if not info.is_directory]
        with tempfile.TemporaryDirectory(prefix="subtitle_payload_") as workdir:
            archive.extractall(path=workdir)
            entries = []
            for name in names:
                path = os.path.join(workdir, name)
                if not os.path.isfile(path):
                    continue
                with open(path, "rb") as handle:
                    entries.append(ArchiveEntry(name, handle.read()))
            return entries


def parse_archive(data: bytes) -> List[ArchiveEntry]:
    """Split an archive buffer into its file entries, in archive order.

    The container is sniffed from its magic bytes. Anything unrecognised is
    still offered to ``zipfile``, which tolerates data prepended to the
    central directory (self-extracting archives and similar wrappers).
    """
    head = bytes(data[:8])
    try:
        if head.startswith(RAR_MAGIC):
            return _read_rar(data)
        if head.startswith(SEVEN_ZIP_MAGIC):
            return _read_7z(data)
        return _read_zip(data)
    except (RarError, RarCannotExec) as exc:
        raise ArchiveParseError(
            "RAR archive extraction failed. Install 'unrar', 'unar', or 'bsdtar' on the host."
        ) from exc
    except (zipfile.BadZipFile, zipfile.LargeZipFile, py7zr.Bad7zFile) as exc:
        raise ArchiveParseError(f"Unsupported or corrupt archive: {exc}") from exc
    except (OSError, EOFError, ValueError, NotImplementedError) as exc:
        raise ArchiveParseError(f"Archive could not be read: {exc}") from exc
    except (zlib.error, RuntimeError) as exc:
        # encrypted zip entries and broken deflate streams
        raise ArchiveParseError(f"Archive entry could not be extracted: {exc}") from exc


def pick_best(entries: Sequence[ArchiveEntry]) -> Optional[ArchiveEntry]:
    for entry in entries:
        if _has_extension(entry.name, TEXT_SUBTITLE_EXTENSIONS):
            return entry
    for entry in entries:
        if _has_extension(entry.name, ALL_SUBTITLE_EXTENSIONS):
            return entry
    return entries[0] if entries else None


def select_entry(data: bytes) -> Outcome[ArchiveEntry]:
    try:
        entries = parse_archive(data)
    except ArchiveParseError as exc:
        log.warning("select_entry: %s", exc)
        details = str(exc.__cause__) if exc.__cause__ is not None else None
        return Outcome.fatal(
            Failure(error=str(exc), kind=ErrorKind.UNPARSEABLE_ARCHIVE, details=details)
        )

    target = pick_best(entries)
    if target is None:
        return Outcome.fatal(Failure(error="archive is empty", kind=ErrorKind.EMPTY_ARCHIVE))

    log.info("select_entry: picked %s out of %d entries", target.name, len(entries))
    return Outcome.ok(target)
