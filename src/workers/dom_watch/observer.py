"""
Watch Observer — one check of one watch.
=========================================
1. Look up the tenant's timeout
2. Open an isolated browser session and navigate
3. Race the selector against the timeout (network-idle fallback)
4. Discover the site thumbnail (best-effort)
5. Extract text / attribute and classify against the baseline
6. On CHANGE, apply the watch's keep-active preference to the store

The session is closed before ``observe`` returns, whatever happened.
Infrastructure failures never escape: they become TIMEOUT.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from playwright.async_api import Error as PlaywrightError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.models import ScrapeResultType
from workers.dom_watch.browser import BrowserSession, NavigationError
from workers.dom_watch.classifier import classify, classify_readiness
from workers.dom_watch.extraction import discover_thumbnail, extract_content
from workers.dom_watch.models import Readiness, ScrapeResult, WatchSpec
from workers.dom_watch.readiness import race_for_element
from workers.dom_watch.settings import SettingsService
from workers.dom_watch.store import apply_keep_active

logger = logging.getLogger(__name__)

INFRASTRUCTURE_ERRORS = (PlaywrightError, NavigationError, asyncio.TimeoutError)


class WatchObserver:
    """Runs checks. Holds no per-check state, so one instance serves concurrent checks."""

    def __init__(
        self,
        settings_service: SettingsService,
        session_factory: async_sessionmaker[AsyncSession],
        browser_factory: Callable[[], BrowserSession] = BrowserSession,
    ) -> None:
        self.settings_service = settings_service
        self.session_factory = session_factory
        self.browser_factory = browser_factory

    async def observe(self, watch: WatchSpec, initial: bool = False) -> ScrapeResult:
        """
        Check ``watch`` once. ``initial`` marks the first check of a new
        watch, where a missing element or text is reported instead of
        being treated as a change.
        """
        watch_settings = await self.settings_service.get_settings(watch.tenant_id)
        logger.info(
            "Checking watch %r (%s) selector=%r initial=%s",
            watch.name, watch.url, watch.css_selector, initial,
        )

        previous_thumbnail = watch.thumbnail
        try:
            result = await self._inspect(watch, watch_settings.timeout, initial)
        except INFRASTRUCTURE_ERRORS as exc:
            logger.warning("Check of %r gave up on %s: %s", watch.name, watch.url, exc)
            # keep an icon found before the failure so it still gets recorded
            discovered = watch.thumbnail if watch.thumbnail != previous_thumbnail else None
            result = ScrapeResult(watch, ScrapeResultType.TIMEOUT, thumbnail=discovered)

        if result.changed:
            await self._handle_found_change(watch)

        logger.info("  Watch %r -> %s", watch.name, result.type.value)
        return result

    async def _inspect(self, watch: WatchSpec, timeout: int, initial: bool) -> ScrapeResult:
        async with self.browser_factory() as session:
            page = await session.open(watch.url, timeout=timeout)
            outcome = await race_for_element(page, watch.css_selector, timeout)

            thumbnail = None
            if outcome.state is not Readiness.INCONCLUSIVE:
                thumbnail = await discover_thumbnail(page)
                if thumbnail:
                    watch.thumbnail = thumbnail

            kind = classify_readiness(outcome.state, initial)
            if kind is not None:
                return ScrapeResult(watch, kind, thumbnail=thumbnail)

            text = await extract_content(outcome.element, watch.dom_element_property)

        return ScrapeResult(
            watch,
            classify(text, watch.current_text, initial),
            text=text,
            thumbnail=thumbnail,
        )

    async def _handle_found_change(self, watch: WatchSpec) -> None:
        async with self.session_factory() as session:
            await apply_keep_active(session, watch)
            await session.commit()


def build_observer() -> WatchObserver:
    """Observer wired to the application database."""
    from core.database import async_session_factory

    return WatchObserver(SettingsService(async_session_factory), async_session_factory)
