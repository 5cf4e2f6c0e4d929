"""Per-session store of player links and candidate manifest URLs."""

from __future__ import annotations

from collections.abc import Iterable

from videolinks.domain.entities.manifest import is_manifest_url, is_master_url


class LinkCollector:
    """Append-only collection of candidate manifests, keyed by source URL.

    Candidates are kept in a ``dict`` used as an insertion-ordered set, so
    the first-seen URL wins every tie.  The master link is recomputed on
    each query and is therefore always consistent with the candidates.

    One collector belongs to one extractor instance; it is never shared
    between requests.
    """

    def __init__(self, extra_markers: Iterable[str] = ()) -> None:
        self._extra_markers = tuple(extra_markers)
        self._candidates: dict[str, dict[str, None]] = {}
        self._player_links: dict[str, str] = {}

    @property
    def extra_markers(self) -> tuple[str, ...]:
        return self._extra_markers

    def record(self, source_url: str, candidate_url: str) -> bool:
        """Store *candidate_url* for *source_url*.

        Returns ``True`` only when the URL was newly stored.  URLs that do
        not look like manifests are ignored silently.
        """
        if not is_manifest_url(candidate_url, self._extra_markers):
            return False
        bucket = self._candidates.setdefault(source_url, {})
        if candidate_url in bucket:
            return False
        bucket[candidate_url] = None
        return True

    def record_all(self, source_url: str, candidate_urls: Iterable[str]) -> int:
        return sum(1 for url in candidate_urls if self.record(source_url, url))

    def set_player_link(self, source_url: str, player_link: str) -> None:
        # First write wins.
        self._player_links.setdefault(source_url, player_link)

    def candidates_for(self, source_url: str) -> list[str]:
        return list(self._candidates.get(source_url, ()))

    def master_link_for(self, source_url: str) -> str | None:
        candidates = self.candidates_for(source_url)
        for url in candidates:
            if is_master_url(url):
                return url
        return candidates[0] if candidates else None

    def player_link_for(self, source_url: str) -> str | None:
        return self._player_links.get(source_url)
