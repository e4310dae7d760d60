"""
Readiness Race — decide whether the page is in an inspectable state.

Two sequential bounded waits:

1. the selector becomes attached, bounded by the tenant timeout;
2. if that expires, the network goes idle, bounded by a short probe.

A timed-out selector on a settled page means the element is really
gone (ABSENT). A timed-out selector on a page that never settles says
nothing about the element (INCONCLUSIVE).
"""

from __future__ import annotations

import logging

from playwright.async_api import (
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeoutError,
)

from core.config import settings
from workers.dom_watch.models import Readiness, ReadinessOutcome

logger = logging.getLogger(__name__)


async def wait_for_selector(page: Page, selector: str, timeout: float):
    """First wait. Returns the element handle, or None once ``timeout`` seconds elapse."""
    try:
        return await page.wait_for_selector(selector, state="attached", timeout=timeout * 1000)
    except PlaywrightTimeoutError:
        return None


async def wait_for_network_idle(page: Page, timeout: float) -> bool:
    """Second wait. True if the network went idle within ``timeout`` seconds."""
    try:
        await page.wait_for_load_state("networkidle", timeout=timeout * 1000)
    except PlaywrightTimeoutError:
        return False
    return True


async def race_for_element(
    page: Page,
    selector: str,
    timeout: float,
    *,
    settle_timeout: float | None = None,
) -> ReadinessOutcome:
    """
    Race "selector appears" against "timeout elapses".

    Any other Playwright failure while waiting (closed page, crashed
    target, invalid selector) is INCONCLUSIVE.
    """
    if settle_timeout is None:
        settle_timeout = settings.network_idle_timeout_seconds

    try:
        element = await wait_for_selector(page, selector, timeout)
        if element is not None:
            return ReadinessOutcome(Readiness.FOUND, element)

        logger.debug("Selector %r not attached after %ss, probing network idle", selector, timeout)
        if await wait_for_network_idle(page, settle_timeout):
            return ReadinessOutcome(Readiness.ABSENT)
    except PlaywrightError as exc:
        logger.warning("Readiness wait failed for %r: %s", selector, exc)

    return ReadinessOutcome(Readiness.INCONCLUSIVE)
