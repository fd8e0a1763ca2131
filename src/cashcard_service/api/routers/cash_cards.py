"""
cashcard_service.api.routers.cash_cards

Cash card resource endpoints for card owners.

Responsibilities:
- CRUD over `/cashcard`, scoped to the authenticated principal.
- Map repository results onto HTTP status codes (200/201/204/404).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
    HTTP_404_NOT_FOUND,
)

from cashcard_service.api.deps import db_session
from cashcard_service.api.pagination import page_request
from cashcard_service.auth.deps import require_roles
from cashcard_service.auth.models import CARD_OWNER, Principal
from cashcard_service.db.models import MAX_CARD_ID, MIN_CARD_ID, CashCard
from cashcard_service.db.repositories.cash_cards import CashCardRepo, PageRequest
from cashcard_service.observability.logging import get_logger

log = get_logger(__name__)

_card_owner = require_roles(CARD_OWNER)

router = APIRouter(
    prefix="/cashcard",
    tags=["cashcard"],
    dependencies=[Depends(_card_owner)],
)


class CashCardRequest(BaseModel):
    # Unknown keys (including `id` and `owner`) are dropped: both are server-controlled.
    model_config = ConfigDict(extra="ignore")

    # strict: "12.5" as a JSON string is rejected rather than coerced.
    amount: float = Field(strict=True, allow_inf_nan=False)

    @field_validator("amount", mode="before")
    @classmethod
    def _not_bool(cls, value: object) -> object:
        if isinstance(value, bool):
            raise ValueError("amount must be a number")
        return value


class CashCardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    amount: float
    owner: str


def _not_found() -> HTTPException:
    # Same response for "missing" and "owned by someone else".
    return HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Cash card not found")


def _storable_id(requested_id: int) -> int:
    # Ids outside the 64-bit column range cannot exist; binding them would overflow the driver.
    if not MIN_CARD_ID <= requested_id <= MAX_CARD_ID:
        raise _not_found()
    return requested_id


@router.get("/{requested_id}", response_model=CashCardResponse)
async def find_cash_card(
    requested_id: int,
    principal: Principal = Depends(_card_owner),
    session: AsyncSession = Depends(db_session),
) -> CashCardResponse:
    card = await CashCardRepo(session).find_by_id_and_owner(
        _storable_id(requested_id), principal.username
    )
    if card is None:
        raise _not_found()
    return CashCardResponse.model_validate(card)


@router.get("", response_model=list[CashCardResponse])
async def list_cash_cards(
    page: PageRequest = Depends(page_request),
    principal: Principal = Depends(_card_owner),
    session: AsyncSession = Depends(db_session),
) -> list[CashCardResponse]:
    cards = await CashCardRepo(session).find_by_owner(principal.username, page)
    return [CashCardResponse.model_validate(c) for c in cards]


@router.post("", status_code=HTTP_201_CREATED, response_class=Response)
async def create_cash_card(
    request: Request,
    body: CashCardRequest,
    principal: Principal = Depends(_card_owner),
    session: AsyncSession = Depends(db_session),
) -> Response:
    saved = await CashCardRepo(session).save(
        CashCard(amount=body.amount, owner=principal.username)
    )
    await session.commit()
    log.info("cash_card_created", card_id=saved.id)

    location = request.app.url_path_for("find_cash_card", requested_id=str(saved.id))
    return Response(status_code=HTTP_201_CREATED, headers={"Location": str(location)})


@router.put("/{requested_id}", status_code=HTTP_204_NO_CONTENT, response_class=Response)
async def update_cash_card(
    requested_id: int,
    body: CashCardRequest,
    principal: Principal = Depends(_card_owner),
    session: AsyncSession = Depends(db_session),
) -> Response:
    repo = CashCardRepo(session)
    existing = await repo.find_by_id_and_owner(_storable_id(requested_id), principal.username)
    if existing is None:
        raise _not_found()

    # Only the amount comes from the request; id and owner come from the stored card.
    await repo.save(CashCard(id=existing.id, amount=body.amount, owner=existing.owner))
    await session.commit()
    log.info("cash_card_updated", card_id=requested_id)
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.delete("/{requested_id}", status_code=HTTP_204_NO_CONTENT, response_class=Response)
async def delete_cash_card(
    requested_id: int,
    principal: Principal = Depends(_card_owner),
    session: AsyncSession = Depends(db_session),
) -> Response:
    repo = CashCardRepo(session)
    if not await repo.exists_by_id_and_owner(_storable_id(requested_id), principal.username):
        raise _not_found()

    await repo.delete_by_id(requested_id)
    await session.commit()
    log.info("cash_card_deleted", card_id=requested_id)
    return Response(status_code=HTTP_204_NO_CONTENT)


# --- Module Notes -----------------------------------------------------------
# Every query above carries the caller's username. There is deliberately no code path
# that loads a card by id alone and then compares owners.
