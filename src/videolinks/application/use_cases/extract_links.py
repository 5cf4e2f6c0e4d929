"""Video link extraction use case.

source URL -> static resolution -> (dynamic resolution) -> ExtractionResult.

One :class:`VideoLinkExtractor` is created per request; its collector is
private to that instance.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime

import structlog

from videolinks.application.use_cases.dynamic_resolve import DynamicResolver
from videolinks.application.use_cases.static_resolve import StaticResolver
from videolinks.domain.entities.extraction import (
    ExtractionResult,
    SourceFetchError,
    StageOutcome,
)
from videolinks.domain.entities.link_collector import LinkCollector
from videolinks.domain.ports.browser import BrowserEnginePort
from videolinks.domain.ports.markup_query import MarkupQueryPort
from videolinks.domain.ports.page_fetcher import PageFetcherPort

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ExtractionSettings:
    """Tunables consumed by :class:`VideoLinkExtractor`."""

    max_retries: int = 2
    navigation_timeout_ms: int = 4_000
    settle_ms: int = 500
    dynamic_timeout_seconds: float = 15.0
    manifest_markers: tuple[str, ...] = ()


class VideoLinkExtractor:
    """Drives the two-stage pipeline for source URLs.

    An attempt that raises (source page unreachable, unparseable markup)
    is retried immediately and without backoff.  Player-page and browser
    failures never abort an attempt.  After ``max_retries`` extra attempts
    the result is all-null with a zero duration.
    """

    def __init__(
        self,
        *,
        fetcher: PageFetcherPort,
        markup: MarkupQueryPort,
        engine: BrowserEnginePort,
        settings: ExtractionSettings | None = None,
        clock: Callable[[], float] = time.perf_counter,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._settings = settings or ExtractionSettings()
        self._clock = clock
        self._now = now
        self.collector = LinkCollector(self._settings.manifest_markers)
        self._static = StaticResolver(
            fetcher=fetcher, markup=markup, collector=self.collector
        )
        self._dynamic = DynamicResolver(
            engine=engine,
            collector=self.collector,
            navigation_timeout_ms=self._settings.navigation_timeout_ms,
            settle_ms=self._settings.settle_ms,
            timeout_seconds=self._settings.dynamic_timeout_seconds,
        )

    async def extract(self, source_url: str) -> ExtractionResult:
        attempts = self._settings.max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return await self._attempt(source_url)
            except Exception as exc:  # noqa: BLE001
                cause = exc.cause if isinstance(exc, SourceFetchError) else exc
                outcome = StageOutcome.failed(cause)
                log.warning(
                    "extraction_attempt_failed",
                    url=source_url,
                    attempt=attempt,
                    max_attempts=attempts,
                    status=outcome.status.value,
                    error=outcome.error,
                    error_type=type(cause).__name__,
                )

        log.error("extraction_retries_exhausted", url=source_url, attempts=attempts)
        return ExtractionResult.empty(self._now())

    async def extract_many(self, source_urls: Iterable[str]) -> list[ExtractionResult]:
        """Extract several sources within this session, one after another."""
        return [await self.extract(url) for url in source_urls]

    async def _attempt(self, source_url: str) -> ExtractionResult:
        started = self._clock()

        static = await self._static.resolve(source_url)

        if static.player_link is not None:
            await self._resolve_dynamic(static.player_link, source_url)

        result = ExtractionResult.build(
            master_link=self.collector.master_link_for(source_url),
            plyr_link=self.collector.player_link_for(source_url),
            elapsed_seconds=self._clock() - started,
            now=self._now(),
        )
        log.info(
            "extraction_finished",
            url=source_url,
            master_link=result.master_link,
            plyr_link=result.plyr_link,
            duration=result.duration,
            player_page=static.player_page.status.value,
        )
        return result

    async def _resolve_dynamic(self, player_link: str, source_url: str) -> None:
        if self.collector.master_link_for(source_url) is not None:
            log.info("dynamic_skipped", url=source_url, reason="static_master_found")
            return
        outcome = await self._dynamic.resolve(player_link, source_url)
        log.debug(
            "dynamic_stage_finished",
            url=source_url,
            status=outcome.status.value,
            recorded=outcome.recorded,
        )
