"""
tests.conftest

Shared fixtures: a test-mode app on a throwaway SQLite file, seeded with the
sarah1/kumar2 cash cards, and an httpx client bound to it in-process.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from argon2 import PasswordHasher
from fastapi import FastAPI

from cashcard_service.api.app import create_app
from cashcard_service.auth.passwords import PasswordEncoder
from cashcard_service.db.models import CashCard
from cashcard_service.settings import Settings

SARAH = ("sarah1", "abc123")
KUMAR = ("kumar2", "xyz789")
HANK = ("hank-owns-no-cards", "qrs456")

SEED_CARDS = [
    (99, 123.45, "sarah1"),
    (100, 1.00, "sarah1"),
    (101, 150.00, "sarah1"),
    (102, 200.00, "kumar2"),
]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'cashcard.db'}",
        # Cheapest argon2 parameters; production defaults are far higher.
        password_time_cost=1,
        password_memory_cost=1024,
        password_parallelism=1,
    )


@pytest.fixture
def cheap_encoder() -> PasswordEncoder:
    return PasswordEncoder(PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1))


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx ASGITransport does not run the lifespan; enter it explicitly.
    async with app.router.lifespan_context(app):
        async with app.state.sessionmaker() as session:
            session.add_all(
                CashCard(id=card_id, amount=amount, owner=owner)
                for card_id, amount, owner in SEED_CARDS
            )
            await session.commit()
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
