"""Platforms: paginated listing across stations."""

from beanie import Link
from beanie.odm.enums import SortDirection
from beanie.operators import In

from app.core.ids import parse_object_id
from app.core.pagination import PaginationParams
from app.models.platform import Platform
from app.models.station import Station
from app.services.listing import fetch_page

PLATFORM_SORT = [
    ("station", SortDirection.ASCENDING),
    ("platform_number", SortDirection.ASCENDING),
    ("_id", SortDirection.ASCENDING),
]


async def list_platforms(
    params: PaginationParams,
    station_id: str | None = None,
) -> tuple[list[Platform], int]:
    filters: list = []
    if station_id:
        filters.append(Platform.station.id == parse_object_id(station_id, "station id"))
    return await fetch_page(Platform, filters, PLATFORM_SORT, params)


def station_ref_id(platform: Platform) -> str:
    ref = platform.station
    return str(ref.ref.id) if isinstance(ref, Link) else str(ref.id)


async def load_stations(platforms: list[Platform]) -> dict[str, Station]:
    ids = {station_ref_id(p) for p in platforms}
    if not ids:
        return {}
    stations = await Station.find(In(Station.id, [parse_object_id(i) for i in ids])).to_list()
    return {str(s.id): s for s in stations}
