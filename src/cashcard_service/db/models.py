"""
cashcard_service.db.models

Persistence schema for cash cards.

Responsibilities:
- Define the `CashCard` ORM model: server-assigned id, signed amount, owner.
"""

from __future__ import annotations

from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from cashcard_service.db.base import Base


class CashCard(Base):
    __tablename__ = "cash_card"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    # Always the authenticated username; never taken from a request body.
    owner: Mapped[str] = mapped_column(String(256), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"CashCard(id={self.id!r}, amount={self.amount!r}, owner={self.owner!r})"


# Range of a 64-bit INTEGER/BIGINT primary key.
MIN_CARD_ID = -(2**63)
MAX_CARD_ID = 2**63 - 1

# Columns a listing may be sorted by (see `api.pagination`).
SORTABLE_COLUMNS = {
    "id": CashCard.id,
    "amount": CashCard.amount,
    "owner": CashCard.owner,
}


# --- Module Notes -----------------------------------------------------------
# Schema changes must be mirrored by a new revision under `alembic/versions`.
