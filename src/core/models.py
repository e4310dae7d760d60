"""
SQLAlchemy 2.0 ORM Models — DOM Watch Service
==============================================

Tables:
  1. tenant_settings — per-tenant check configuration
  2. watch           — a page + selector + baseline text to monitor

Conventions:
  - snake_case names
  - BIGINT PKs (auto-increment) for watches, natural key for tenants
  - created_at / updated_at on every table
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    Enum,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base


# ══════════════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════════════

class ScrapeResultType(str, PyEnum):
    """Outcome of a single check."""

    NO_CHANGE = "NO_CHANGE"
    CHANGE = "CHANGE"
    TEXT_NOT_FOUND = "TEXT_NOT_FOUND"
    ELEMENT_NOT_FOUND = "ELEMENT_NOT_FOUND"
    TIMEOUT = "TIMEOUT"


# ══════════════════════════════════════════════════════════════════════
# 1. CONFIGURATION
# ══════════════════════════════════════════════════════════════════════

class TenantSettings(Base):
    """
    Per-tenant check configuration.
    Tenants without a row fall back to DEFAULT_TIMEOUT_SECONDS.
    """
    __tablename__ = "tenant_settings"

    tenant_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    timeout: Mapped[int] = mapped_column(Integer, default=10)  # seconds
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


# ══════════════════════════════════════════════════════════════════════
# 2. WATCHES
# ══════════════════════════════════════════════════════════════════════

class Watch(Base):
    """
    A page, a CSS selector and the baseline text expected inside the element.
    (tenant_id, user_id, name) is the composite identity used by the
    keep-active update after a change.
    """
    __tablename__ = "watch"
    __table_args__ = (
        UniqueConstraint("tenant_id", "user_id", "name", name="uq_watch_tenant_user_name"),
    )

    id: Mapped[int] = mapped_column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    css_selector: Mapped[str] = mapped_column(Text, nullable=False)
    dom_element_property: Mapped[str | None] = mapped_column(String(255), nullable=True)
    current_text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    thumbnail: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    keep_active: Mapped[bool] = mapped_column(Boolean, default=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True)

    last_result: Mapped[ScrapeResultType | None] = mapped_column(Enum(ScrapeResultType), nullable=True)
    last_checked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
