"""Stations: admin CRUD and the paginated station listing."""

from datetime import datetime
from typing import Any

from beanie import Link
from beanie.odm.enums import SortDirection
from beanie.operators import In

from app.core.exceptions import ConflictError, NotFoundError
from app.core.ids import parse_object_id
from app.core.logging import get_logger
from app.core.pagination import PaginationParams
from app.models.station import Station
from app.models.user import User
from app.services.listing import contains_pattern, fetch_page

log = get_logger(__name__)

STATION_SORT = [("station_name", SortDirection.ASCENDING), ("_id", SortDirection.ASCENDING)]


async def list_stations(
    params: PaginationParams,
    approval_status: str | None = None,
    search: str | None = None,
) -> tuple[list[Station], int]:
    """Stations ordered by name; search matches name, code or city."""
    filters: list = []
    if approval_status and approval_status.lower() != "all":
        filters.append({"approval_status": approval_status.upper()})
    if search and search.strip():
        pattern = contains_pattern(search)
        filters.append({"$or": [{"station_name": pattern}, {"station_code": pattern}, {"city": pattern}]})
    return await fetch_page(Station, filters, STATION_SORT, params)


def manager_id(station: Station) -> str | None:
    ref = station.station_manager
    if ref is None:
        return None
    if isinstance(ref, Link):
        return str(ref.ref.id)
    return str(ref.id)


async def load_managers(stations: list[Station]) -> dict[str, User]:
    """Batch-load station managers for a page of stations, keyed by user id."""
    ids = {mid for mid in (manager_id(s) for s in stations) if mid}
    if not ids:
        return {}
    users = await User.find(In(User.id, [parse_object_id(i) for i in ids])).to_list()
    return {str(u.id): u for u in users}


async def get_station(station_id: str) -> Station:
    station = await Station.get(parse_object_id(station_id, "station id"))
    if not station:
        raise NotFoundError("Station not found")
    return station


async def _ensure_code_free(code: str, exclude_id=None) -> None:
    filters: list = [Station.station_code == code]
    if exclude_id is not None:
        filters.append(Station.id != exclude_id)
    if await Station.find_one(*filters):
        raise ConflictError("Station with this code already exists", details={"station_code": code})


async def create_station(data: dict[str, Any], creator: User) -> Station:
    """Admin-created stations are approved on creation."""
    code = data["station_code"].strip().upper()
    await _ensure_code_free(code)
    station = Station(
        **{**data, "station_code": code},
        approval_status="APPROVED",
        approved_by=creator.id,
        layout_completed=False,
    )
    await station.insert()
    log.info("station_created", station_id=str(station.id), station_code=code)
    return station


async def update_station(station_id: str, changes: dict[str, Any]) -> Station:
    station = await get_station(station_id)
    if changes.get("station_code"):
        code = changes["station_code"].strip().upper()
        await _ensure_code_free(code, exclude_id=station.id)
        changes = {**changes, "station_code": code}
    for field, value in changes.items():
        setattr(station, field, value)
    station.updated_at = datetime.utcnow()
    await station.save()
    log.info("station_updated", station_id=str(station.id), fields=sorted(changes))
    return station


async def delete_station(station_id: str) -> None:
    station = await get_station(station_id)
    await station.delete()
    log.info("station_deleted", station_id=station_id, station_code=station.station_code)
