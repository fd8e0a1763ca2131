"""
cashcard_service.api.routers.health

Health and readiness endpoints (unauthenticated).

Responsibilities:
- Liveness (`/healthz`): the process is serving requests.
- Readiness (`/readyz`): the `cash_card` table exists and can be queried. A database
  that was never migrated reports 503 instead of failing the first card request.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from cashcard_service.api.deps import db_session
from cashcard_service.db.models import CashCard
from cashcard_service.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz", response_model=None)
async def readyz(
    session: AsyncSession = Depends(db_session),
) -> dict[str, str] | JSONResponse:
    try:
        await session.execute(select(CashCard.id).limit(1))
    except SQLAlchemyError as exc:
        log.warning("not_ready", error=type(exc).__name__)
        return JSONResponse(
            status_code=HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "store": CashCard.__tablename__},
        )
    return {"status": "ready"}
