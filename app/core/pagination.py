"""Pagination helpers shared by every list endpoint.

Query parameters come straight from the request, so nothing here rejects
input: malformed ``page``/``limit`` values degrade to page 1 and the
endpoint's default page size.
"""

import re
from collections.abc import Mapping, Sequence
from typing import Generic, TypeVar

from beanie.odm.enums import SortDirection
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")

DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# Mongo skip is a signed 64-bit integer.
INT64_MAX = 2**63 - 1
# Larger digit runs are saturated instead of converted.
_MAX_DIGITS = 18

_LEADING_INT = re.compile(r"^\s*([+-]?)0*([0-9]+)")


class PaginationParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    skip: int
    limit: int
    page: int


class PageInfo(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_previous_page: bool


class PaginationResult(BaseModel, Generic[T]):
    data: list[T]
    pagination: PageInfo


def parse_positive_int(raw: str | None, fallback: int) -> int:
    """
    Best-effort base-10 parse of the leading integer in ``raw``.
    Missing, non-numeric, zero and negative values all yield ``fallback``.
    """
    if raw is None:
        return fallback
    match = _LEADING_INT.match(str(raw))
    if not match:
        return fallback
    sign, digits = match.groups()
    if sign == "-":
        return fallback
    if len(digits) > _MAX_DIGITS:
        return 10**_MAX_DIGITS
    value = int(digits)
    return value if value > 0 else fallback


def get_pagination_params(
    query: Mapping[str, str],
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> PaginationParams:
    """Resolve raw ``page``/``limit`` query values into a bounded skip/limit/page triple."""
    # max_limit < default_limit is not rejected; the default gets clamped too.
    limit = min(max_limit, max(1, parse_positive_int(query.get("limit"), default_limit)))
    # Keeps skip = (page - 1) * limit within INT64_MAX.
    page = min(INT64_MAX // max(limit, 1) + 1, max(1, parse_positive_int(query.get("page"), 1)))
    return PaginationParams(skip=(page - 1) * limit, limit=limit, page=page)


def create_pagination_result(
    data: Sequence[T],
    total_items: int,
    page: int,
    limit: int,
) -> PaginationResult[T]:
    """Wrap one page of items and the unpaginated total in the response envelope."""
    total_pages = (total_items + limit - 1) // limit
    return PaginationResult(
        data=list(data),
        pagination=PageInfo(
            current_page=page,
            total_pages=total_pages,
            total_items=total_items,
            items_per_page=limit,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
        ),
    )


def get_sort_params(
    query: Mapping[str, str],
    allowed_fields: Mapping[str, str],
    default_field: str,
    default_order: str = "desc",
) -> list[tuple[str, SortDirection]]:
    """
    Resolve ``sortField``/``sortOrder`` against a whitelist of public -> stored names.
    The id is always appended as a tie-breaker so page boundaries stay stable.
    """
    field = allowed_fields.get(query.get("sortField") or "", default_field)
    order = query.get("sortOrder")
    if order not in ("asc", "desc"):
        order = default_order
    direction = SortDirection.ASCENDING if order == "asc" else SortDirection.DESCENDING
    return [(field, direction), ("_id", direction)]
