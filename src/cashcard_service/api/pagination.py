"""
cashcard_service.api.pagination

Query-string paging for list endpoints.

Responsibilities:
- Parse `page`, `size` and repeatable `sort=property[,direction]` parameters.
- Apply the default sort and clamp page sizes to the configured maximum.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Query
from starlette.status import HTTP_400_BAD_REQUEST

from cashcard_service.api.deps import settings_dep
from cashcard_service.db.models import MAX_CARD_ID, SORTABLE_COLUMNS
from cashcard_service.db.repositories.cash_cards import PageRequest, SortOrder
from cashcard_service.settings import Settings

DEFAULT_SORT = (SortOrder("amount", "asc"),)


class InvalidSortError(ValueError):
    pass


def parse_sort(values: list[str]) -> tuple[SortOrder, ...]:
    """
    `["amount,desc", "id"]` -> (SortOrder("amount", "desc"), SortOrder("id", "asc")).
    An empty list yields the default order (amount ascending).
    """
    orders: list[SortOrder] = []
    for raw in values:
        parts = [p.strip() for p in raw.split(",") if p.strip()]
        if not parts:
            continue
        if len(parts) > 2:
            raise InvalidSortError(f"Invalid sort parameter: {raw!r}")

        prop = parts[0]
        if prop not in SORTABLE_COLUMNS:
            raise InvalidSortError(f"Unknown sort property: {prop!r}")

        direction = parts[1].lower() if len(parts) == 2 else "asc"
        if direction not in ("asc", "desc"):
            raise InvalidSortError(f"Invalid sort direction: {parts[1]!r}")
        orders.append(SortOrder(prop, direction))  # type: ignore[arg-type]

    return tuple(orders) or DEFAULT_SORT


def page_request(
    page: int = Query(default=0, ge=0),
    size: int | None = Query(default=None, ge=1),
    sort: list[str] | None = Query(default=None),
    settings: Settings = Depends(settings_dep),
) -> PageRequest:
    try:
        orders = parse_sort(sort or [])
    except InvalidSortError as e:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=str(e)) from e

    effective_size = min(size or settings.default_page_size, settings.max_page_size)
    # OFFSET is bound as a 64-bit integer; any page past that bound is empty anyway.
    effective_page = min(page, MAX_CARD_ID // effective_size)
    return PageRequest(page=effective_page, size=effective_size, sort=orders)
