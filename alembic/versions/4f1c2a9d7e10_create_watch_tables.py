"""create_watch_tables

Revision ID: 4f1c2a9d7e10
Revises:
Create Date: 2026-10-19 09:12:44.512093

Adds:
- tenant_settings (per-tenant check timeout)
- watch (page + selector + baseline text, composite identity tenant/user/name)
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "4f1c2a9d7e10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

scrape_result_type = sa.Enum(
    "NO_CHANGE", "CHANGE", "TEXT_NOT_FOUND", "ELEMENT_NOT_FOUND", "TIMEOUT",
    name="scraperesulttype",
)


def upgrade() -> None:
    # -- Tenant settings --
    op.create_table(
        "tenant_settings",
        sa.Column("tenant_id", sa.String(length=64), nullable=False),
        sa.Column("timeout", sa.Integer(), nullable=False, server_default=sa.text("10")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("tenant_id"),
    )

    # -- Watch --
    op.create_table(
        "watch",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("tenant_id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("url", sa.String(length=2048), nullable=False),
        sa.Column("css_selector", sa.Text(), nullable=False),
        sa.Column("dom_element_property", sa.String(length=255), nullable=True),
        sa.Column("current_text", sa.Text(), nullable=False, server_default=""),
        sa.Column("thumbnail", sa.String(length=2048), nullable=True),
        sa.Column("keep_active", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("last_result", scrape_result_type, nullable=True),
        sa.Column("last_checked_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id", "user_id", "name", name="uq_watch_tenant_user_name"),
    )
    op.create_index("ix_watch_tenant_id", "watch", ["tenant_id"])


def downgrade() -> None:
    op.drop_index("ix_watch_tenant_id", table_name="watch")
    op.drop_table("watch")
    op.drop_table("tenant_settings")
    scrape_result_type.drop(op.get_bind(), checkfirst=True)
