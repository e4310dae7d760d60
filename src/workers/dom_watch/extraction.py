"""
Content & Thumbnail Extraction.

- ``extract_content`` reads the watched element's text or one attribute,
  raw (no normalization).
- ``discover_thumbnail`` looks for a site icon in <head>. It is strictly
  best-effort: every failure ends in ``None``.
"""

from __future__ import annotations

import asyncio
import logging
from urllib.parse import urljoin, urlsplit

from playwright.async_api import ElementHandle, Page

from core.config import settings

logger = logging.getLogger(__name__)

_DEFAULT_PORTS = {"http": 80, "https": 443}

# First match wins, in the order of this list. rel~="icon" also covers "shortcut icon".
ICON_SELECTORS: list[tuple[str, str]] = [
    ('head link[rel~="icon" i]', "href"),
    ('head link[rel="apple-touch-icon" i]', "href"),
    ('head meta[property="og:image"]', "content"),
    ('head meta[itemprop="image"]', "content"),
]

_FIND_ICON_JS = """
(candidates) => {
    for (const [selector, attribute] of candidates) {
        const el = document.querySelector(selector);
        const value = el ? el.getAttribute(attribute) : null;
        if (value) return value;
    }
    return null;
}
"""


async def extract_content(
    element: ElementHandle,
    dom_element_property: str | None = None,
    *,
    timeout: float | None = None,
) -> str | None:
    """Text content of ``element``, or the named attribute when one is configured."""
    if timeout is None:
        timeout = settings.evaluate_timeout_seconds

    if dom_element_property is None:
        read = element.text_content()
    else:
        read = element.get_attribute(dom_element_property)
    return await asyncio.wait_for(read, timeout)


def resolve_thumbnail(href: str, page_url: str) -> str | None:
    """
    Absolute icon URL as ``origin + pathname``.

    Relative hrefs are resolved against the page URL; query string and
    fragment are dropped. Returns None for anything that is not http(s).
    """
    absolute = urljoin(page_url, href.strip())
    parts = urlsplit(absolute)
    if parts.scheme not in _DEFAULT_PORTS or not parts.hostname:
        return None

    origin = f"{parts.scheme}://{parts.hostname}"
    port = parts.port  # ValueError on garbage ports
    if port is not None and port != _DEFAULT_PORTS[parts.scheme]:
        origin = f"{origin}:{port}"
    return f"{origin}{parts.path or '/'}"


async def discover_thumbnail(page: Page, *, timeout: float | None = None) -> str | None:
    """Site icon URL for ``page``, or None. Never raises."""
    if timeout is None:
        timeout = settings.evaluate_timeout_seconds

    try:
        href = await asyncio.wait_for(
            page.evaluate(_FIND_ICON_JS, [list(pair) for pair in ICON_SELECTORS]),
            timeout,
        )
        if not href:
            return None
        return resolve_thumbnail(href, page.url)
    except Exception as exc:
        logger.debug("Thumbnail discovery failed for %s: %s", getattr(page, "url", "?"), exc)
        return None
