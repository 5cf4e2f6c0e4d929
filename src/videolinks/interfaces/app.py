"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from starlette.responses import Response

from videolinks.infrastructure.config import AppConfig
from videolinks.interfaces.app_state import AppState
from videolinks.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def create_app(config: AppConfig) -> FastAPI:
    """Create FastAPI app: configuration ONLY, NO resource initialization.

    Resources (HTTP client, browser engine, extractor factory) are created
    in lifespan().
    """
    app = FastAPI(
        title="videolinks",
        description="Resolves video pages to player links and HLS manifests",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    from videolinks.interfaces.api.extract import router as extract_router

    app.include_router(extract_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str | bool]:
        """Liveness probe, returns 200 as long as the process is running."""
        engine = getattr(app.state, "browser_engine", None)
        return {
            "status": "ok",
            "browser": bool(engine is not None and engine.is_running),
        }

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                query=str(request.url.query),
                status_code=status_code,
                duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
