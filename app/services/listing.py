"""Skip/limit fetch shared by the paginated list services."""

import re
from typing import Any, TypeVar

from beanie import Document
from beanie.odm.enums import SortDirection

from app.core.pagination import PaginationParams

D = TypeVar("D", bound=Document)

SortSpec = list[tuple[str, SortDirection]]


def contains_pattern(text: str) -> dict[str, Any]:
    """Case-insensitive substring match on untrusted input."""
    return {"$regex": re.escape(text.strip()), "$options": "i"}


async def fetch_page(
    model: type[D],
    filters: list[Any],
    sort: SortSpec,
    params: PaginationParams,
) -> tuple[list[D], int]:
    """
    Return (page_items, total_items) for ``filters``.
    The total counts every match, independent of skip/limit.
    """
    total = await model.find(*filters).count()
    items = (
        await model.find(*filters)
        .sort(sort)
        .skip(params.skip)
        .limit(params.limit)
        .to_list()
    )
    return items, total
