"""Tests for content extraction and best-effort thumbnail discovery."""
import asyncio

import pytest
from playwright.async_api import Error as PlaywrightError

from conftest import make_element, make_page
from workers.dom_watch.extraction import (
    ICON_SELECTORS,
    discover_thumbnail,
    extract_content,
    resolve_thumbnail,
)


# ============================================
# CONTENT
# ============================================

class TestExtractContent:

    @pytest.mark.asyncio
    async def test_reads_text_content_without_attribute(self):
        element = make_element("  Only 3 left!  ")

        text = await extract_content(element, None)

        assert text == "  Only 3 left!  "  # raw, no normalization
        element.get_attribute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reads_named_attribute(self):
        element = make_element("ignored", attributes={"data-price": "19.99"})

        value = await extract_content(element, "data-price")

        assert value == "19.99"
        element.get_attribute.assert_awaited_once_with("data-price")
        element.text_content.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_attribute_is_none(self):
        element = make_element("text", attributes={})

        assert await extract_content(element, "href") is None

    @pytest.mark.asyncio
    async def test_evaluation_is_time_bounded(self):
        element = make_element("x")

        async def hang():
            await asyncio.sleep(10)

        element.text_content = hang
        with pytest.raises(asyncio.TimeoutError):
            await extract_content(element, None, timeout=0.01)


# ============================================
# THUMBNAIL
# ============================================

class TestResolveThumbnail:

    @pytest.mark.parametrize(
        "href, expected",
        [
            ("https://cdn.example.com/fav.png?v=3#x", "https://cdn.example.com/fav.png"),
            ("/static/favicon.ico", "https://shop.example.com/static/favicon.ico"),
            ("favicon.png", "https://shop.example.com/item/favicon.png"),
            ("//cdn.example.com/icon.svg", "https://cdn.example.com/icon.svg"),
            ("http://example.com:8080/i.png", "http://example.com:8080/i.png"),
            ("https://example.com:443/i.png", "https://example.com/i.png"),
            ("https://example.com", "https://example.com/"),
        ],
    )
    def test_origin_plus_pathname(self, href, expected):
        assert resolve_thumbnail(href, "https://shop.example.com/item/42") == expected

    @pytest.mark.parametrize("href", ["data:image/png;base64,AAAA", "javascript:void(0)"])
    def test_non_http_is_rejected(self, href):
        assert resolve_thumbnail(href, "https://shop.example.com/") is None

    def test_garbage_port_raises(self):
        with pytest.raises(ValueError):
            resolve_thumbnail("https://example.com:99999999/i.png", "https://shop.example.com/")


class TestDiscoverThumbnail:

    @pytest.mark.asyncio
    async def test_first_icon_is_resolved(self):
        page = make_page(icon="/favicon.ico?v=2")

        assert await discover_thumbnail(page) == "https://shop.example.com/favicon.ico"
        script, candidates = page.evaluate.await_args.args
        assert candidates[0] == list(ICON_SELECTORS[0])

    @pytest.mark.asyncio
    async def test_no_icon_is_none(self):
        page = make_page(icon=None)

        assert await discover_thumbnail(page) is None

    @pytest.mark.asyncio
    async def test_evaluation_error_is_swallowed(self):
        page = make_page(icon_error=PlaywrightError("Execution context was destroyed"))

        assert await discover_thumbnail(page) is None

    @pytest.mark.asyncio
    async def test_malformed_url_is_swallowed(self):
        page = make_page(icon="https://example.com:notaport/x.png")

        assert await discover_thumbnail(page) is None
