"""Tenant settings API — per-tenant check timeout."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.database import get_db
from core.models import TenantSettings

router = APIRouter(prefix="/api/tenants", tags=["tenants"])


class TenantSettingsBody(BaseModel):
    timeout: int = Field(gt=0, le=300, description="Seconds to wait for the watched element.")


class TenantSettingsResponse(TenantSettingsBody):
    tenant_id: str
    is_default: bool = False


@router.get("/{tenant_id}/settings", response_model=TenantSettingsResponse)
async def get_tenant_settings(tenant_id: str, session: AsyncSession = Depends(get_db)):
    row = await session.get(TenantSettings, tenant_id)
    if row is None:
        return TenantSettingsResponse(
            tenant_id=tenant_id,
            timeout=settings.default_timeout_seconds,
            is_default=True,
        )
    return TenantSettingsResponse(tenant_id=tenant_id, timeout=row.timeout)


@router.put("/{tenant_id}/settings", response_model=TenantSettingsResponse)
async def put_tenant_settings(
    tenant_id: str,
    body: TenantSettingsBody,
    session: AsyncSession = Depends(get_db),
):
    """Create or replace the tenant's settings."""
    row = await session.get(TenantSettings, tenant_id)
    if row is None:
        row = TenantSettings(tenant_id=tenant_id, timeout=body.timeout)
        session.add(row)
    else:
        row.timeout = body.timeout
    await session.commit()
    return TenantSettingsResponse(tenant_id=tenant_id, timeout=row.timeout)
