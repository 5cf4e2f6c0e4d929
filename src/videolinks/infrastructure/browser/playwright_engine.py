"""Playwright-backed browsing engine.

A single Chromium process is shared by every request.  Each dynamic
resolution gets its own ``BrowserContext`` (isolated cookies/storage) and
one page.  The number of simultaneously open contexts is capped by a
semaphore; a slot is returned when the context is closed.

Chromium is launched lazily on the first ``launch()`` call and relaunched
if it has disconnected.  Concurrent first calls are serialised by an
asyncio lock so only one process is started.
"""

from __future__ import annotations

import asyncio
from typing import Any

import structlog
from playwright.async_api import (
    Browser,
    BrowserContext,
    Page,
    Playwright,
    Route,
    async_playwright,
)
from playwright_stealth import Stealth

from videolinks.domain.ports.browser import WaitUntil

log = structlog.get_logger(__name__)

_BLOCKED_RESOURCE_TYPES = frozenset(
    {"image", "font", "stylesheet", "media", "texttrack"}
)


async def _block_resources(route: Route) -> None:
    """Abort requests for heavy resource types."""
    if route.request.resource_type in _BLOCKED_RESOURCE_TYPES:
        await route.abort()
    else:
        await route.continue_()


class PlaywrightBrowsingContext:
    """One isolated context + page; ``close()`` is idempotent."""

    def __init__(
        self,
        context: BrowserContext,
        page: Page,
        slots: asyncio.Semaphore,
    ) -> None:
        self._context = context
        self._page = page
        self._slots = slots
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def navigate(
        self,
        url: str,
        *,
        wait_until: WaitUntil = "domcontentloaded",
        timeout_ms: int = 30_000,
    ) -> None:
        await self._page.goto(url, wait_until=wait_until, timeout=timeout_ms)

    async def evaluate(self, script: str) -> Any:
        return await self._page.evaluate(script)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            await self._context.close()
        except Exception:  # noqa: BLE001
            log.warning("browser_context_close_error", exc_info=True)
        finally:
            self._slots.release()


class PlaywrightBrowserEngine:
    """Hands out isolated browsing contexts on a shared Chromium.

    Usage::

        engine = PlaywrightBrowserEngine(headless=True, max_contexts=2)

        context = await engine.launch()
        try:
            await context.navigate(url)
            data = await context.evaluate("() => document.title")
        finally:
            await context.close()

        # At shutdown:
        await engine.cleanup()
    """

    def __init__(
        self,
        *,
        headless: bool = True,
        max_contexts: int = 2,
        user_agent: str | None = None,
        stealth: bool = False,
        block_resources: bool = True,
    ) -> None:
        self._headless = headless
        self._max_contexts = max_contexts
        self._user_agent = user_agent
        self._stealth = stealth
        self._block_resources = block_resources
        self._pw: Playwright | None = None
        self._browser: Browser | None = None
        self._lock = asyncio.Lock()
        self._slots = asyncio.Semaphore(max_contexts)

    @property
    def is_running(self) -> bool:
        """Whether the shared browser is currently connected."""
        return self._browser is not None and self._browser.is_connected()

    @property
    def max_contexts(self) -> int:
        return self._max_contexts

    async def _ensure_browser(self) -> Browser:
        if self._browser is not None and self._browser.is_connected():
            return self._browser

        async with self._lock:
            if self._browser is not None and self._browser.is_connected():
                return self._browser

            # Browser crashed or was never started.
            if self._pw is not None:
                try:
                    await self._pw.stop()
                except Exception:  # noqa: BLE001
                    log.debug("browser_stale_pw_stop_error", exc_info=True)
                self._pw = None
                self._browser = None

            self._pw = await async_playwright().start()
            self._browser = await self._pw.chromium.launch(headless=self._headless)
            log.info("browser_launched", headless=self._headless)
            return self._browser

    async def _new_context(self, browser: Browser) -> BrowserContext:
        if self._user_agent:
            context = await browser.new_context(user_agent=self._user_agent)
        else:
            context = await browser.new_context()
        if self._stealth:
            await Stealth().apply_stealth_async(context)
        if self._block_resources:
            await context.route("**/*", _block_resources)
        return context

    async def launch(self) -> PlaywrightBrowsingContext:
        """Open a new isolated context, waiting for a free slot first."""
        await self._slots.acquire()
        try:
            browser = await self._ensure_browser()
            context = await self._new_context(browser)
        except BaseException:
            self._slots.release()
            raise

        try:
            page = await context.new_page()
        except BaseException:
            self._slots.release()
            await context.close()
            raise

        log.debug("browser_context_opened", stealth=self._stealth)
        return PlaywrightBrowsingContext(context, page, self._slots)

    async def cleanup(self) -> None:
        """Close the shared browser and Playwright instance."""
        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception:  # noqa: BLE001
                log.warning("browser_close_error", exc_info=True)
            self._browser = None
        if self._pw is not None:
            try:
                await self._pw.stop()
            except Exception:  # noqa: BLE001
                log.warning("browser_pw_stop_error", exc_info=True)
            self._pw = None
        log.info("browser_cleaned_up")
