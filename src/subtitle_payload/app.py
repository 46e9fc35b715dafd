from __future__ import annotations

import hashlib
import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse, Response

from . import __version__
from .cache import TTLCache
from .engine import decode_text, extract_from_archive
from .results import ExtractionResult, Failure, SuccessBinary
from .settings import settings

# ---------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------
logging.basicConfig(level=settings.log_level.upper())
log = logging.getLogger("subtitle_payload.app")
charset_logger = logging.getLogger("charset_normalizer")
charset_logger.setLevel(logging.WARNING)
charset_logger.propagate = False

app = FastAPI(title="Subtitle Payload Extraction")

RESULT_CACHE = TTLCache(default_ttl=settings.cache_ttl, max_size=settings.cache_max_size)


async def _read_body(request: Request) -> bytes:
    body = await request.body()
    if len(body) > settings.max_payload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Payload exceeds {settings.max_payload_bytes} bytes",
        )
    return body


def _media_type(filename: str) -> str:
    if filename.lower().endswith(".srt"):
        return "application/x-subrip; charset=utf-8"
    return "text/plain; charset=utf-8"


def _to_response(result: ExtractionResult) -> Response:
    if isinstance(result, Failure):
        log.warning("extraction failed: %s (%s)", result.error, result.kind.value)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"error": result.error, "filename": result.filename, "details": result.details},
        )

    if isinstance(result, SuccessBinary):
        content = result.buffer
        media_type = "application/octet-stream"
    else:
        content = result.content.encode("utf-8")
        media_type = _media_type(result.filename)

    headers = {
        "Content-Disposition": f'attachment; filename="{result.filename}"',
        "ETag": f'W/"{hashlib.md5(content).hexdigest()}"',
        "Access-Control-Allow-Origin": "*",
    }
    encoding = getattr(result, "encoding", None)
    if encoding:
        headers["X-Subtitle-Encoding"] = encoding
    return Response(content=content, media_type=media_type, headers=headers)


@app.get("/healthz")
async def healthz() -> JSONResponse:
    return JSONResponse({"status": "ok", "version": __version__})


@app.post("/extract")
async def extract(
    request: Request,
    encoding: Optional[str] = Query(None),
    fps: Optional[float] = Query(None, gt=0),
) -> Response:
    body = await _read_body(request)
    return _to_response(extract_from_archive(body, encoding, fps=fps, cache=RESULT_CACHE))


@app.post("/decode")
async def decode(
    request: Request,
    filename: str = Query(...),
    encoding: Optional[str] = Query(None),
    fps: Optional[float] = Query(None, gt=0),
) -> Response:
    body = await _read_body(request)
    return _to_response(decode_text(body, filename, encoding, fps=fps, cache=RESULT_CACHE))
