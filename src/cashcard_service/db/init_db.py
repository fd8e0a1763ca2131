"""
cashcard_service.db.init_db

DB initialization helpers (dev/test convenience).

Responsibilities:
- Create tables for local development and tests.
- Keep production migration workflow separate (Alembic).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from cashcard_service.db import models  # noqa: F401  # registers cash_card on Base.metadata
from cashcard_service.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Dev/test bootstrap: create tables if they don't exist.
    Production relies on `alembic upgrade head`.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
