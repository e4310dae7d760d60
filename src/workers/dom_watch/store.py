"""
Watch store writes performed by checks.

``apply_keep_active`` is the only write the change-detection core makes:
one conditional UPDATE keyed by (tenant, user, name), so concurrent checks
of other watches are never touched. ``record_check`` is used by the
scheduler/API after the check returns.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from core.models import Watch
from workers.dom_watch.models import ScrapeResult, WatchSpec

logger = logging.getLogger(__name__)


async def apply_keep_active(session: AsyncSession, watch: WatchSpec) -> int:
    """
    Set ``active = keep_active`` on the watch(es) matching the composite key.

    Rows already holding the target value are filtered out, so a repeated
    call is a no-op. Returns the number of rows changed.
    """
    stmt = (
        update(Watch)
        .where(
            Watch.tenant_id == watch.tenant_id,
            Watch.user_id == watch.user_id,
            Watch.name == watch.name,
            Watch.active != watch.keep_active,
        )
        .values(active=watch.keep_active)
        .execution_options(synchronize_session=False)
    )
    result = await session.execute(stmt)
    if result.rowcount:
        logger.info(
            "Watch %r (tenant=%s user=%s) active -> %s",
            watch.name, watch.tenant_id, watch.user_id, watch.keep_active,
        )
    return result.rowcount


async def record_check(session: AsyncSession, watch_id: int, result: ScrapeResult) -> None:
    """Persist the outcome of a check on the stored watch."""
    values: dict = {
        "last_result": result.type,
        "last_checked_at": datetime.now(timezone.utc),
    }
    if result.thumbnail:
        values["thumbnail"] = result.thumbnail

    await session.execute(
        update(Watch)
        .where(Watch.id == watch_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
