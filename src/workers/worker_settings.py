"""
ARQ Worker Settings — Registers the watch check jobs.

Usage:
    arq workers.worker_settings.WorkerSettings
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter

from arq import cron
from arq.connections import RedisSettings
from sqlalchemy import select

from core.config import settings
from core.models import ScrapeResultType, Watch
from core.notifications.slack import format_change_alert, send_slack_alert
from workers.dom_watch import WatchObserver, WatchSpec, build_observer
from workers.dom_watch.models import ScrapeResult
from workers.dom_watch.store import record_check

logger = logging.getLogger(__name__)

# Summary key for checks that raised instead of producing a result
FAILED = "FAILED"


async def _check_and_record(ctx: dict, observer: WatchObserver, watch: WatchSpec) -> ScrapeResult:
    result = await observer.observe(watch, initial=False)

    session_factory = ctx["session_factory"]
    async with session_factory() as session:
        await record_check(session, watch.id, result)
        await session.commit()

    if result.changed:
        text, blocks = format_change_alert(result)
        await send_slack_alert(text, blocks=blocks)
    return result


async def run_watch_checks(ctx: dict) -> dict[str, int]:
    """
    ARQ cron job: check every active watch once.
    At most MAX_CONCURRENT_CHECKS browsers run at the same time. A check
    that raises is logged and counted under FAILED; the others still run.
    """
    session_factory = ctx["session_factory"]
    observer: WatchObserver = ctx["observer"]

    async with session_factory() as session:
        result = await session.execute(
            select(Watch).where(Watch.active == True).order_by(Watch.tenant_id, Watch.id)  # noqa: E712
        )
        watches = [WatchSpec.from_record(row) for row in result.scalars().all()]
    logger.info("🕷️  Checking %d active watches", len(watches))

    semaphore = asyncio.Semaphore(settings.max_concurrent_checks)

    async def bounded(watch: WatchSpec) -> ScrapeResult | None:
        async with semaphore:
            try:
                return await _check_and_record(ctx, observer, watch)
            except Exception:
                logger.exception("❌ Check of watch #%s %r failed", watch.id, watch.name)
                return None

    results = await asyncio.gather(*(bounded(w) for w in watches))

    summary = Counter(r.type.value if r is not None else FAILED for r in results)
    logger.info("🏁 Watch checks finished — %s", dict(summary) or "nothing to do")
    kinds = [kind.value for kind in ScrapeResultType] + [FAILED]
    return {kind: summary.get(kind, 0) for kind in kinds}


async def check_watch(ctx: dict, watch_id: int) -> str | None:
    """ARQ job: check a single watch on demand. Returns the result kind."""
    session_factory = ctx["session_factory"]
    async with session_factory() as session:
        record = await session.get(Watch, watch_id)
        if record is None:
            logger.warning("Watch #%d no longer exists, skipping", watch_id)
            return None
        watch = WatchSpec.from_record(record)

    result = await _check_and_record(ctx, ctx["observer"], watch)
    return result.type.value


async def startup(ctx: dict) -> None:
    """Called on worker startup."""
    from core.database import async_session_factory

    logging.basicConfig(level=settings.log_level)
    ctx["session_factory"] = async_session_factory
    ctx["observer"] = build_observer()


async def shutdown(ctx: dict) -> None:
    """Called on worker shutdown."""
    from core.database import engine

    await engine.dispose()


class WorkerSettings:
    """ARQ worker configuration."""

    functions = [
        run_watch_checks,
        check_watch,
    ]

    on_startup = startup
    on_shutdown = shutdown

    redis_settings = RedisSettings.from_dsn(settings.redis_url)

    # Cron schedule
    cron_jobs = [
        cron(
            run_watch_checks,
            minute=set(range(0, 60, settings.check_interval_minutes)),
            unique=True,
        ),
    ]
