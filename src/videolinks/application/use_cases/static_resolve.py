"""Static resolution: fetch markup, find the player, regex-scan for manifests.

No script is executed in this stage.
"""

from __future__ import annotations

import structlog

from videolinks.domain.entities.extraction import (
    SourceFetchError,
    StageOutcome,
    StaticResolution,
)
from videolinks.domain.entities.link_collector import LinkCollector
from videolinks.domain.entities.manifest import (
    PLAYER_HANDLER_MARKER,
    find_manifest_urls,
    parse_player_link,
)
from videolinks.domain.ports.markup_query import MarkupQueryPort
from videolinks.domain.ports.page_fetcher import PageFetcherPort

log = structlog.get_logger(__name__)

PLAYER_HANDLER_SELECTOR = f'[onclick*="{PLAYER_HANDLER_MARKER}"]'


class StaticResolver:
    """Finds the player link of a source page and scans the player page.

    Source-page fetch failures propagate as :class:`SourceFetchError`.
    Player-page fetch failures are logged and reported as a degraded stage.
    """

    def __init__(
        self,
        *,
        fetcher: PageFetcherPort,
        markup: MarkupQueryPort,
        collector: LinkCollector,
    ) -> None:
        self._fetcher = fetcher
        self._markup = markup
        self._collector = collector

    async def resolve(self, source_url: str) -> StaticResolution:
        try:
            html = await self._fetcher.fetch(source_url)
        except Exception as exc:
            log.warning("source_page_fetch_failed", url=source_url, error=str(exc))
            raise SourceFetchError(source_url, exc) from exc

        handler = self._markup.first_attr(html, PLAYER_HANDLER_SELECTOR, "onclick")
        player_link = parse_player_link(handler)
        if player_link is None:
            log.info(
                "player_link_not_found",
                url=source_url,
                handler_present=handler is not None,
            )
            return StaticResolution()

        self._collector.set_player_link(source_url, player_link)
        log.debug("player_link_found", url=source_url, player_link=player_link)

        try:
            player_html = await self._fetcher.fetch(
                player_link, headers={"Referer": source_url}
            )
        except Exception as exc:  # noqa: BLE001
            log.warning(
                "player_page_fetch_failed",
                url=source_url,
                player_link=player_link,
                error=str(exc),
            )
            return StaticResolution(
                player_link=player_link,
                player_page=StageOutcome.degraded(exc),
            )

        recorded = self._collector.record_all(
            source_url,
            find_manifest_urls(player_html, self._collector.extra_markers),
        )
        log.debug("static_scan_done", url=source_url, recorded=recorded)
        return StaticResolution(
            player_link=player_link,
            player_page=StageOutcome(recorded=recorded),
            manifests_found=recorded,
        )
