"""Watches API — create, list, check and delete watches."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.models import ScrapeResultType, Watch
from workers.dom_watch import WatchObserver, WatchSpec, build_observer
from workers.dom_watch.store import record_check

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/watches", tags=["watches"])


def get_observer() -> WatchObserver:
    return build_observer()


# ── Request/Response Schemas ──────────────────────────────────────────

class WatchCreate(BaseModel):
    tenant_id: str = Field(min_length=1, max_length=64)
    user_id: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=255)
    url: str = Field(min_length=1, max_length=2048, pattern=r"^https?://")
    css_selector: str = Field(min_length=1)
    current_text: str = ""
    dom_element_property: str | None = None
    keep_active: bool = False


class WatchResponse(BaseModel):
    id: int
    tenant_id: str
    user_id: str
    name: str
    url: str
    css_selector: str
    dom_element_property: str | None
    current_text: str
    thumbnail: str | None
    keep_active: bool
    active: bool
    last_result: ScrapeResultType | None
    last_checked_at: datetime | None

    model_config = {"from_attributes": True}


class CheckResponse(BaseModel):
    watch_id: int
    result: ScrapeResultType
    text: str | None = None
    thumbnail: str | None = None


# ── Helpers ───────────────────────────────────────────────────────────

async def _get_watch_or_404(session: AsyncSession, watch_id: int) -> Watch:
    watch = await session.get(Watch, watch_id)
    if watch is None:
        raise HTTPException(status_code=404, detail=f"Watch {watch_id} not found")
    return watch


# ── Endpoints ─────────────────────────────────────────────────────────

@router.post("", response_model=WatchResponse, status_code=201)
async def create_watch(
    req: WatchCreate,
    session: AsyncSession = Depends(get_db),
    observer: WatchObserver = Depends(get_observer),
):
    """
    Create a watch after a successful initial check.

    The initial check must find the element and the baseline text,
    otherwise nothing is stored and the result kind is returned as 422.
    """
    existing = await session.execute(
        select(Watch.id).where(
            Watch.tenant_id == req.tenant_id,
            Watch.user_id == req.user_id,
            Watch.name == req.name,
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=409, detail=f"Watch '{req.name}' already exists")
    await session.commit()  # no transaction held open during the browser check

    spec = WatchSpec(**req.model_dump())
    result = await observer.observe(spec, initial=True)
    if result.type is not ScrapeResultType.NO_CHANGE:
        logger.info("Rejected watch %r: initial check gave %s", req.name, result.type.value)
        raise HTTPException(
            status_code=422,
            detail={"result": result.type.value, "message": "Initial check failed"},
        )

    watch = Watch(
        **req.model_dump(),
        thumbnail=spec.thumbnail,
        active=True,
        last_result=result.type,
        last_checked_at=datetime.now(timezone.utc),
    )
    session.add(watch)
    await session.commit()
    await session.refresh(watch)
    logger.info("Created watch #%d %r for tenant %s", watch.id, watch.name, watch.tenant_id)
    return watch


@router.get("", response_model=list[WatchResponse])
async def list_watches(
    tenant_id: str = Query(...),
    user_id: str | None = Query(default=None),
    session: AsyncSession = Depends(get_db),
):
    stmt = select(Watch).where(Watch.tenant_id == tenant_id)
    if user_id is not None:
        stmt = stmt.where(Watch.user_id == user_id)
    result = await session.execute(stmt.order_by(Watch.name))
    return result.scalars().all()


@router.post("/{watch_id}/check", response_model=CheckResponse)
async def check_watch_now(
    watch_id: int,
    session: AsyncSession = Depends(get_db),
    observer: WatchObserver = Depends(get_observer),
):
    """Run a recurring check right away and record its outcome."""
    watch = await _get_watch_or_404(session, watch_id)
    spec = WatchSpec.from_record(watch)
    await session.commit()  # release the read before the check writes

    result = await observer.observe(spec, initial=False)
    await record_check(session, watch_id, result)
    await session.commit()

    return CheckResponse(
        watch_id=watch_id,
        result=result.type,
        text=result.text,
        thumbnail=result.thumbnail,
    )


@router.delete("/{watch_id}", status_code=204)
async def delete_watch(watch_id: int, session: AsyncSession = Depends(get_db)):
    watch = await _get_watch_or_404(session, watch_id)
    await session.delete(watch)
    await session.commit()
