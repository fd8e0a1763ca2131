"""
tests.test_pagination

Sort parsing and the paged `GET /cashcard` listing.
"""

from __future__ import annotations

import httpx
import pytest
from conftest import KUMAR, SARAH

from cashcard_service.api.app import create_app
from cashcard_service.api.pagination import DEFAULT_SORT, InvalidSortError, parse_sort
from cashcard_service.db.repositories.cash_cards import SortOrder
from cashcard_service.settings import Settings


def test_parse_sort_defaults_to_amount_ascending() -> None:
    assert parse_sort([]) == DEFAULT_SORT == (SortOrder("amount", "asc"),)
    assert parse_sort([""]) == DEFAULT_SORT


def test_parse_sort_directions() -> None:
    assert parse_sort(["amount,desc", "id"]) == (
        SortOrder("amount", "desc"),
        SortOrder("id", "asc"),
    )
    assert parse_sort(["owner,DESC"]) == (SortOrder("owner", "desc"),)


@pytest.mark.parametrize("raw", ["password", "amount,sideways", "amount,asc,extra"])
def test_parse_sort_rejects(raw: str) -> None:
    with pytest.raises(InvalidSortError):
        parse_sort([raw])


@pytest.mark.asyncio
async def test_list_returns_only_own_cards_sorted_by_amount(client: httpx.AsyncClient) -> None:
    r = await client.get("/cashcard", auth=SARAH)
    assert r.status_code == 200
    cards = r.json()
    assert [c["id"] for c in cards] == [100, 99, 101]
    assert [c["amount"] for c in cards] == [1.00, 123.45, 150.00]
    assert {c["owner"] for c in cards} == {"sarah1"}

    r = await client.get("/cashcard", auth=KUMAR)
    assert [c["id"] for c in r.json()] == [102]


@pytest.mark.asyncio
async def test_list_page_and_size(client: httpx.AsyncClient) -> None:
    r = await client.get("/cashcard", params={"page": 0, "size": 1}, auth=SARAH)
    assert [c["amount"] for c in r.json()] == [1.00]

    r = await client.get("/cashcard", params={"page": 1, "size": 2}, auth=SARAH)
    assert [c["amount"] for c in r.json()] == [150.00]

    r = await client.get("/cashcard", params={"page": 5, "size": 2}, auth=SARAH)
    assert r.status_code == 200
    assert r.json() == []


@pytest.mark.asyncio
async def test_list_page_far_past_the_end(client: httpx.AsyncClient) -> None:
    for page in (10**17, 10**30):
        r = await client.get("/cashcard", params={"page": page, "size": 100}, auth=SARAH)
        assert r.status_code == 200
        assert r.json() == []


@pytest.mark.asyncio
async def test_list_explicit_sort(client: httpx.AsyncClient) -> None:
    r = await client.get(
        "/cashcard", params={"page": 0, "size": 1, "sort": "amount,desc"}, auth=SARAH
    )
    assert r.json() == [{"id": 101, "amount": 150.00, "owner": "sarah1"}]

    r = await client.get("/cashcard", params={"sort": "id,desc"}, auth=SARAH)
    assert [c["id"] for c in r.json()] == [101, 100, 99]


@pytest.mark.asyncio
async def test_list_ties_break_on_id(client: httpx.AsyncClient) -> None:
    for _ in range(2):
        await client.post("/cashcard", json={"amount": 1.00}, auth=SARAH)

    r = await client.get("/cashcard", params={"size": 3}, auth=SARAH)
    ids = [c["id"] for c in r.json()]
    assert ids[0] == 100
    assert ids[1] < ids[2]


@pytest.mark.asyncio
async def test_list_bad_query_parameters(client: httpx.AsyncClient) -> None:
    r = await client.get("/cashcard", params={"sort": "password"}, auth=SARAH)
    assert r.status_code == 400
    assert "password" in r.json()["detail"]

    assert (await client.get("/cashcard", params={"page": -1}, auth=SARAH)).status_code == 422
    assert (await client.get("/cashcard", params={"size": 0}, auth=SARAH)).status_code == 422


@pytest.mark.asyncio
async def test_list_size_defaults_and_clamping(settings: Settings) -> None:
    app = create_app(
        settings=settings.model_copy(update={"default_page_size": 2, "max_page_size": 3})
    )
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            for i in range(5):
                await c.post("/cashcard", json={"amount": float(i)}, auth=KUMAR)

            r = await c.get("/cashcard", auth=KUMAR)
            assert [card["amount"] for card in r.json()] == [0.0, 1.0]

            r = await c.get("/cashcard", params={"size": 10_000}, auth=KUMAR)
            assert r.status_code == 200
            assert [card["amount"] for card in r.json()] == [0.0, 1.0, 2.0]
