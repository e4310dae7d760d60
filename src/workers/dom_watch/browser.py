"""
Browser Session — one isolated Chromium context per check.

The session owns the Playwright driver, the browser and the context.
It is never shared between checks and is torn down exactly once on
every exit path (``async with`` or an explicit ``close()``).
"""

from __future__ import annotations

import logging

from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    async_playwright,
)

from core.config import settings

logger = logging.getLogger(__name__)


class NavigationError(Exception):
    """The page could not be loaded at all."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Navigation to {url} failed: {reason}")
        self.url = url
        self.reason = reason


class BrowserSession:
    """Async context manager around a fresh Playwright browser context."""

    def __init__(
        self,
        *,
        headless: bool | None = None,
        user_agent: str | None = None,
    ) -> None:
        self.headless = settings.browser_headless if headless is None else headless
        self.user_agent = user_agent or settings.browser_user_agent
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._closed = False

    async def __aenter__(self) -> BrowserSession:
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(headless=self.headless)
            # New context = no cookies / storage carried over from other checks
            self._context = await self._browser.new_context(user_agent=self.user_agent)
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def open(self, url: str, *, timeout: float) -> Page:
        """
        Open ``url`` in a new page of this session's context.

        ``timeout`` is in seconds. Raises NavigationError when the page
        does not load.
        """
        if self._context is None or self._closed:
            raise RuntimeError("BrowserSession is not open")

        page = await self._context.new_page()
        try:
            await page.goto(url, wait_until="domcontentloaded", timeout=timeout * 1000)
        except PlaywrightError as exc:
            raise NavigationError(url, exc.message) from exc
        return page

    async def close(self) -> None:
        """Tear everything down. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True

        for resource in (self._context, self._browser):
            if resource is None:
                continue
            try:
                await resource.close()
            except PlaywrightError as exc:
                logger.debug("Ignoring error while closing %s: %s", type(resource).__name__, exc)

        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except PlaywrightError as exc:
                logger.debug("Ignoring error while stopping Playwright: %s", exc)
