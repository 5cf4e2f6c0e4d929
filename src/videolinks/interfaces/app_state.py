"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from videolinks.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from videolinks.application.use_cases.extract_links import VideoLinkExtractor
    from videolinks.infrastructure.browser import PlaywrightBrowserEngine


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure (shared, stateless per request)
    http_client: httpx.AsyncClient
    browser_engine: PlaywrightBrowserEngine

    # Builds a fresh extractor for every request.
    extractor_factory: Callable[[], VideoLinkExtractor]
