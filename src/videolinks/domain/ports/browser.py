"""Ports for the script-executing browsing engine."""

from __future__ import annotations

from typing import Any, Literal, Protocol, runtime_checkable

WaitUntil = Literal["commit", "domcontentloaded", "load", "networkidle"]


@runtime_checkable
class BrowsingContextPort(Protocol):
    """One isolated browsing session.

    Callers must call :meth:`close` on every exit path.
    """

    async def navigate(
        self,
        url: str,
        *,
        wait_until: WaitUntil = "domcontentloaded",
        timeout_ms: int = 30_000,
    ) -> None: ...

    async def evaluate(self, script: str) -> Any: ...

    async def close(self) -> None: ...


@runtime_checkable
class BrowserEnginePort(Protocol):
    """Hands out isolated browsing contexts."""

    async def launch(self) -> BrowsingContextPort: ...
