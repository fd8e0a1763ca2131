"""create cash_card table

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "cash_card",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("owner", sa.String(length=256), nullable=False),
    )
    op.create_index("ix_cash_card_owner", "cash_card", ["owner"])


def downgrade() -> None:
    op.drop_index("ix_cash_card_owner", table_name="cash_card")
    op.drop_table("cash_card")
