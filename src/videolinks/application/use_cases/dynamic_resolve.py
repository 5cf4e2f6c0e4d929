"""Dynamic resolution: load the player page in a browser and inspect the DOM."""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager

import structlog

from videolinks.domain.entities.extraction import StageOutcome
from videolinks.domain.entities.link_collector import LinkCollector
from videolinks.domain.entities.manifest import (
    HTTP_URL_RE,
    MANIFEST_MARKER,
    MANIFEST_URL_RE,
)
from videolinks.domain.ports.browser import BrowserEnginePort, BrowsingContextPort

log = structlog.get_logger(__name__)

# Read-only: collects attribute values mentioning a manifest marker and
# URLs from inline script text, deduplicated in first-seen order.
_INSPECT_TEMPLATE = """() => {
  const markers = %(markers)s;
  const extra = %(extra)s;
  const pattern = new RegExp(%(pattern)s, "gi");
  const urlPattern = new RegExp(%(url_pattern)s, "gi");
  const out = [];
  document.querySelectorAll("*").forEach((el) => {
    for (const attr of Array.from(el.attributes)) {
      if (markers.some((m) => attr.value.includes(m))) out.push(attr.value);
    }
  });
  document.querySelectorAll("script").forEach((s) => {
    const text = s.textContent || "";
    out.push(...(text.match(pattern) || []));
    if (extra.length) {
      for (const url of text.match(urlPattern) || []) {
        if (extra.some((m) => url.includes(m))) out.push(url);
      }
    }
  });
  return [...new Set(out)];
}"""


def build_inspect_script(extra_markers: Iterable[str] = ()) -> str:
    """Render the DOM inspection script for the given CDN markers."""
    extra = [marker for marker in extra_markers if marker]
    return _INSPECT_TEMPLATE % {
        "markers": json.dumps([MANIFEST_MARKER, *extra]),
        "extra": json.dumps(extra),
        "pattern": json.dumps(MANIFEST_URL_RE.pattern),
        "url_pattern": json.dumps(HTTP_URL_RE.pattern),
    }


INSPECT_SCRIPT = build_inspect_script()


class DynamicResolver:
    """Harvests manifest URLs from the rendered player page.

    Never raises: every failure is logged and reported as a degraded
    outcome so the caller keeps whatever the static stage found.
    """

    def __init__(
        self,
        *,
        engine: BrowserEnginePort,
        collector: LinkCollector,
        navigation_timeout_ms: int = 4_000,
        settle_ms: int = 500,
        timeout_seconds: float = 15.0,
    ) -> None:
        self._engine = engine
        self._collector = collector
        self._navigation_timeout_ms = navigation_timeout_ms
        self._settle_seconds = settle_ms / 1000
        self._timeout_seconds = timeout_seconds
        self._script = build_inspect_script(collector.extra_markers)

    async def resolve(self, player_link: str, source_url: str) -> StageOutcome:
        try:
            found = await asyncio.wait_for(
                self._inspect(player_link), timeout=self._timeout_seconds
            )
        except Exception as exc:  # noqa: BLE001
            log.warning(
                "dynamic_resolution_failed",
                url=source_url,
                player_link=player_link,
                error=str(exc) or type(exc).__name__,
            )
            return StageOutcome.degraded(exc)

        recorded = self._collector.record_all(source_url, found)
        log.debug(
            "dynamic_scan_done",
            url=source_url,
            harvested=len(found),
            recorded=recorded,
        )
        return StageOutcome(recorded=recorded)

    @asynccontextmanager
    async def _context(self) -> AsyncIterator[BrowsingContextPort]:
        context = await self._engine.launch()
        try:
            yield context
        finally:
            await context.close()

    async def _inspect(self, player_link: str) -> list[str]:
        async with self._context() as context:
            try:
                await context.navigate(
                    player_link,
                    wait_until="domcontentloaded",
                    timeout_ms=self._navigation_timeout_ms,
                )
            except Exception as exc:  # noqa: BLE001
                # Partial DOM may still hold links.
                log.warning(
                    "dynamic_navigation_failed",
                    player_link=player_link,
                    error=str(exc),
                )

            await asyncio.sleep(self._settle_seconds)
            harvested = await context.evaluate(self._script)

        return [str(item) for item in harvested or () if item]
