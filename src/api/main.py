"""
FastAPI application entry point.

Watch and tenant-settings management, plus a health check.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

from api.routes.tenants import router as tenants_router
from api.routes.watches import router as watches_router
from core.config import settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: startup/shutdown events."""
    logging.basicConfig(level=settings.log_level)
    yield
    from core.database import engine

    await engine.dispose()


app = FastAPI(
    title="DOM Watch",
    description="Watches a CSS selector on a web page and reports changes",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Routes ────────────────────────────────────────────────────────────
app.include_router(watches_router)
app.include_router(tenants_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "service": "dom-watch"}
