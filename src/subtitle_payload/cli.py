"""Command line front end for the subtitle payload engine."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .archive import is_subtitle_name
from .engine import decode_text, extract_from_archive
from .results import ExtractionResult, Failure, SuccessBinary
from .settings import settings


def _run(data: bytes, path: Path, args: argparse.Namespace) -> ExtractionResult:
    if args.filename or is_subtitle_name(path.name):
        return decode_text(data, args.filename or path.name, args.encoding, fps=args.fps)
    return extract_from_archive(data, args.encoding, fps=args.fps)


def _write(result: ExtractionResult, output: str | None) -> None:
    if isinstance(result, SuccessBinary):
        payload = result.buffer
    else:
        payload = result.content.encode("utf-8")
    if output:
        Path(output).write_bytes(payload)
    else:
        sys.stdout.buffer.write(payload)
        sys.stdout.flush()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Extract and decode a downloaded subtitle payload.")
    parser.add_argument("file", type=str, help="Archive or subtitle file to process.")
    parser.add_argument("--filename", help="Treat FILE as an unwrapped subtitle with this name.")
    parser.add_argument("--encoding", help="Preferred source encoding, e.g. windows-1251.")
    parser.add_argument("--fps", type=float, help="Frame rate for MicroDVD conversion.")
    parser.add_argument("--output", "-o", help="Write the subtitle here instead of stdout.")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper(), stream=sys.stderr)

    path = Path(args.file)
    result = _run(path.read_bytes(), path, args)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    elif isinstance(result, Failure):
        print(f"error: {result.error}", file=sys.stderr)
        if result.details:
            print(result.details, file=sys.stderr)
    else:
        _write(result, args.output)

    return 1 if isinstance(result, Failure) else 0


if __name__ == "__main__":
    sys.exit(main())
