"""Tests for the per-tenant settings lookup."""
import pytest

from conftest import add_tenant_settings
from core.config import settings
from workers.dom_watch.settings import SettingsService


@pytest.mark.asyncio
async def test_tenant_row_wins(session_factory):
    await add_tenant_settings(session_factory, "guild-1", 25)

    result = await SettingsService(session_factory).get_settings("guild-1")

    assert result.timeout == 25


@pytest.mark.asyncio
async def test_unknown_tenant_gets_default(session_factory):
    await add_tenant_settings(session_factory, "guild-1", 25)

    result = await SettingsService(session_factory).get_settings("guild-2")

    assert result.timeout == settings.default_timeout_seconds
