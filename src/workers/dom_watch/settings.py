"""Per-tenant check settings lookup."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.config import settings
from core.models import TenantSettings
from workers.dom_watch.models import WatchSettings

logger = logging.getLogger(__name__)


class SettingsService:
    """Reads ``tenant_settings``; tenants without a row get the configured default."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def get_settings(self, tenant_id: str) -> WatchSettings:
        async with self.session_factory() as session:
            result = await session.execute(
                select(TenantSettings.timeout).where(TenantSettings.tenant_id == tenant_id)
            )
            timeout = result.scalar_one_or_none()

        if timeout is None:
            logger.debug("No settings for tenant %s, using default timeout", tenant_id)
            timeout = settings.default_timeout_seconds
        return WatchSettings(timeout=timeout)
