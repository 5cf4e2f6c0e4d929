"""Shared test fixtures for the videolinks test suite."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import pytest

from videolinks.application.use_cases.extract_links import (
    ExtractionSettings,
    VideoLinkExtractor,
)
from videolinks.infrastructure.common import SoupMarkupQuery

# ---------------------------------------------------------------------------
# Fakes for the ports
# ---------------------------------------------------------------------------


@dataclass
class FakeFetcher:
    """PageFetcherPort double serving canned bodies per URL.

    A value that is an exception instance is raised instead of returned.
    """

    pages: dict[str, Any] = field(default_factory=dict)
    calls: list[tuple[str, dict[str, str]]] = field(default_factory=list)

    async def fetch(self, url: str, headers: Mapping[str, str] | None = None) -> str:
        self.calls.append((url, dict(headers or {})))
        body = self.pages.get(url)
        if body is None:
            raise ConnectionError(f"no route to {url}")
        if isinstance(body, BaseException):
            raise body
        return body

    def calls_to(self, url: str) -> int:
        return sum(1 for called, _ in self.calls if called == url)


@dataclass
class FakeBrowsingContext:
    """BrowsingContextPort double returning canned inspection output."""

    harvested: list[str] = field(default_factory=list)
    navigate_error: BaseException | None = None
    evaluate_error: BaseException | None = None
    navigations: list[tuple[str, str, int]] = field(default_factory=list)
    scripts: list[str] = field(default_factory=list)
    closed: bool = False

    async def navigate(
        self,
        url: str,
        *,
        wait_until: str = "domcontentloaded",
        timeout_ms: int = 30_000,
    ) -> None:
        self.navigations.append((url, wait_until, timeout_ms))
        if self.navigate_error is not None:
            raise self.navigate_error

    async def evaluate(self, script: str) -> Any:
        self.scripts.append(script)
        if self.evaluate_error is not None:
            raise self.evaluate_error
        return list(self.harvested)

    async def close(self) -> None:
        self.closed = True


@dataclass
class FakeBrowserEngine:
    """BrowserEnginePort double with a launch counter."""

    context: FakeBrowsingContext = field(default_factory=FakeBrowsingContext)
    launch_error: BaseException | None = None
    launches: int = 0

    async def launch(self) -> FakeBrowsingContext:
        self.launches += 1
        if self.launch_error is not None:
            raise self.launch_error
        return self.context


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture()
def engine() -> FakeBrowserEngine:
    return FakeBrowserEngine()


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2026, 3, 7, 14, 5, 9)


@pytest.fixture()
def make_extractor(fetcher: FakeFetcher, engine: FakeBrowserEngine, fixed_now: datetime):
    """Factory building an extractor over the fakes with a zero settle wait."""

    def _make(**overrides: Any) -> VideoLinkExtractor:
        settings = ExtractionSettings(
            **{"settle_ms": 0, "dynamic_timeout_seconds": 5.0, **overrides}
        )
        return VideoLinkExtractor(
            fetcher=fetcher,
            markup=SoupMarkupQuery(),
            engine=engine,
            settings=settings,
            now=lambda: fixed_now,
        )

    return _make
