"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

import functools
from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from videolinks.application.use_cases.extract_links import (
    ExtractionSettings,
    VideoLinkExtractor,
)
from videolinks.domain.ports.browser import BrowserEnginePort
from videolinks.domain.ports.markup_query import MarkupQueryPort
from videolinks.domain.ports.page_fetcher import PageFetcherPort
from videolinks.infrastructure.browser import PlaywrightBrowserEngine
from videolinks.infrastructure.common import SoupMarkupQuery
from videolinks.infrastructure.config.schema import AppConfig
from videolinks.infrastructure.http import HttpxPageFetcher
from videolinks.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def extraction_settings(config: AppConfig) -> ExtractionSettings:
    return ExtractionSettings(
        max_retries=config.max_retries,
        navigation_timeout_ms=config.playwright_navigation_timeout_ms,
        settle_ms=config.playwright_settle_ms,
        dynamic_timeout_seconds=config.dynamic_timeout_seconds,
        manifest_markers=tuple(config.manifest_markers),
    )


def _build_extractor(
    *,
    fetcher: PageFetcherPort,
    markup: MarkupQueryPort,
    engine: BrowserEnginePort,
    settings: ExtractionSettings,
) -> VideoLinkExtractor:
    return VideoLinkExtractor(
        fetcher=fetcher, markup=markup, engine=engine, settings=settings
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    state = cast(AppState, app.state)
    config = state.config

    state.http_client = httpx.AsyncClient(
        follow_redirects=config.http_follow_redirects,
        timeout=config.http_timeout_seconds,
    )
    state.browser_engine = PlaywrightBrowserEngine(
        headless=config.playwright_headless,
        max_contexts=config.playwright_max_contexts,
        user_agent=config.http_user_agent,
        stealth=config.playwright_stealth,
        block_resources=config.playwright_block_resources,
    )
    fetcher = HttpxPageFetcher(
        state.http_client,
        user_agent=config.http_user_agent,
        timeout_seconds=config.http_timeout_seconds,
    )
    # Every call returns a new extractor with its own collector.
    state.extractor_factory = functools.partial(
        _build_extractor,
        fetcher=fetcher,
        markup=SoupMarkupQuery(),
        engine=state.browser_engine,
        settings=extraction_settings(config),
    )
    log.info(
        "app_startup",
        max_contexts=config.playwright_max_contexts,
        max_retries=config.max_retries,
    )

    try:
        yield
    finally:
        await state.browser_engine.cleanup()
        await state.http_client.aclose()
        log.info("app_shutdown")
