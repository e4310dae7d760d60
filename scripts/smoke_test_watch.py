"""Smoke test: run one check against a live page without touching the watch table.

Usage:
    python scripts/smoke_test_watch.py https://example.com "h1" "Example Domain" [--initial]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import settings
from workers.dom_watch import WatchObserver, WatchSettings, WatchSpec


class StaticSettings:
    """Settings lookup that ignores the database."""

    async def get_settings(self, tenant_id: str) -> WatchSettings:
        return WatchSettings(timeout=settings.default_timeout_seconds)


class _NullSession:
    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return None

    async def execute(self, stmt):
        print(f"  (skipped write: {stmt})")

        class _Result:
            rowcount = 0
        return _Result()

    async def commit(self):
        pass


async def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("url")
    parser.add_argument("selector")
    parser.add_argument("text", nargs="?", default="")
    parser.add_argument("--attribute", default=None)
    parser.add_argument("--initial", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level)
    print("🚀 Starting Smoke Test: DOM watch check")

    watch = WatchSpec(
        tenant_id="smoke",
        user_id="smoke",
        name="smoke-test",
        url=args.url,
        css_selector=args.selector,
        current_text=args.text,
        dom_element_property=args.attribute,
    )
    observer = WatchObserver(StaticSettings(), _NullSession)  # type: ignore[arg-type]
    result = await observer.observe(watch, initial=args.initial)

    print(f"\n🏁 Result: {result.type.value}")
    print(f"   text:      {result.text!r}")
    print(f"   thumbnail: {result.thumbnail}")


if __name__ == "__main__":
    asyncio.run(main())
