"""
cashcard_service.db.repositories.cash_cards

Repository for `CashCard` entities.

Responsibilities:
- Owner-scoped lookups: every read is filtered by (id, owner) or by owner.
- Paged listing with explicit sort orders.
- Insert-or-replace saves and delete-by-id.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from cashcard_service.db.models import SORTABLE_COLUMNS, CashCard


@dataclass(frozen=True, slots=True)
class SortOrder:
    property: str
    direction: Literal["asc", "desc"] = "asc"


@dataclass(frozen=True, slots=True)
class PageRequest:
    page: int = 0
    size: int = 20
    sort: tuple[SortOrder, ...] = field(default=(SortOrder("amount", "asc"),))

    @property
    def offset(self) -> int:
        return self.page * self.size


class CashCardRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id_and_owner(self, card_id: int, owner: str) -> CashCard | None:
        stmt = select(CashCard).where(CashCard.id == card_id, CashCard.owner == owner)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def exists_by_id_and_owner(self, card_id: int, owner: str) -> bool:
        stmt = select(exists().where(CashCard.id == card_id, CashCard.owner == owner))
        return bool((await self._session.execute(stmt)).scalar())

    async def find_by_owner(self, owner: str, page: PageRequest) -> list[CashCard]:
        order_by = []
        for order in page.sort:
            column = SORTABLE_COLUMNS[order.property]
            order_by.append(column.desc() if order.direction == "desc" else column.asc())
        # Tie-break on id so that page boundaries are stable.
        if not any(order.property == "id" for order in page.sort):
            order_by.append(CashCard.id.asc())

        stmt = (
            select(CashCard)
            .where(CashCard.owner == owner)
            .order_by(*order_by)
            .offset(page.offset)
            .limit(page.size)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def save(self, card: CashCard) -> CashCard:
        if card.id is None:
            self._session.add(card)
            await self._session.flush()
            return card

        # Replace: copies the given state onto the persistent row with the same id.
        merged = await self._session.merge(card)
        await self._session.flush()
        return merged

    async def delete_by_id(self, card_id: int) -> None:
        await self._session.execute(delete(CashCard).where(CashCard.id == card_id))


# --- Module Notes -----------------------------------------------------------
# Callers own the transaction: the cash card router commits after save/delete.
