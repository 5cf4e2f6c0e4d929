"""Extraction endpoint: source URL in, master/player links out."""

from __future__ import annotations

import asyncio
from typing import cast

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse

from videolinks.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["extract"])

_USAGE_HTML = """
<h1>Video Link Extractor API</h1>
<p>Use the /api/extract endpoint with a 'url' query parameter.</p>
<p>Example: <a href="/api/extract?url=https://example.com">/api/extract?url=https://example.com</a></p>
"""


@router.get("/", response_class=HTMLResponse)
async def usage() -> HTMLResponse:
    return HTMLResponse(_USAGE_HTML)


@router.get("/api/extract")
async def extract(request: Request, url: str | None = None) -> JSONResponse:
    """Resolve *url* to its player link and master HLS manifest.

    Status codes:
        200: at least one of ``masterLink`` / ``plyrLink`` was found.
        400: ``url`` query parameter missing.
        404: nothing found; body still carries the timing fields.
        500: unexpected failure (including the request deadline).
    """
    if not url:
        return JSONResponse(
            status_code=400,
            content={"error": "URL query parameter is required."},
        )

    state = cast(AppState, request.app.state)
    structlog.contextvars.bind_contextvars(source_url=url)
    try:
        extractor = state.extractor_factory()
        result = await asyncio.wait_for(
            extractor.extract(url),
            timeout=state.config.request_timeout_seconds,
        )
    except TimeoutError:
        log.error(
            "extract_deadline_exceeded",
            timeout=state.config.request_timeout_seconds,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Failed to extract video links.",
                "details": (
                    "Extraction exceeded "
                    f"{state.config.request_timeout_seconds:g} seconds."
                ),
            },
        )
    except Exception as exc:
        log.error("extract_failed", error=str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to extract video links.", "details": str(exc)},
        )
    finally:
        structlog.contextvars.unbind_contextvars("source_url")

    if not result.found_anything:
        return JSONResponse(
            status_code=404,
            content={
                "message": "No video links found.",
                "source": url,
                **result.to_dict(),
            },
        )
    return JSONResponse(status_code=200, content=result.to_dict())
