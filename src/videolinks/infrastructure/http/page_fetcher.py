"""httpx-backed page fetcher."""

from __future__ import annotations

from collections.abc import Mapping

import httpx
import structlog

log = structlog.get_logger(__name__)


class HttpxPageFetcher:
    """Fetches page bodies through a shared ``httpx.AsyncClient``.

    Every request carries the configured User-Agent and timeout; caller
    headers (e.g. ``Referer``) are merged on top.  Non-2xx responses raise
    ``httpx.HTTPStatusError``, transport failures raise ``httpx.HTTPError``.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        user_agent: str,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._http = http_client
        self._user_agent = user_agent
        self._timeout = timeout_seconds

    async def fetch(self, url: str, headers: Mapping[str, str] | None = None) -> str:
        request_headers = {"User-Agent": self._user_agent}
        if headers:
            request_headers.update(headers)

        resp = await self._http.get(
            url, headers=request_headers, timeout=self._timeout
        )
        resp.raise_for_status()
        log.debug(
            "page_fetched",
            url=url,
            status=resp.status_code,
            size_bytes=len(resp.content),
        )
        return resp.text
