"""Port for fetching raw page bodies."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class PageFetcherPort(Protocol):
    """Fetches a URL and returns the response body as text.

    Implementations apply their own timeout and User-Agent, and raise on
    transport errors or non-success status codes.
    """

    async def fetch(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> str: ...
