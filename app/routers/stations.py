from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.core.pagination import PaginationParams, create_pagination_result
from app.deps import paginated, require_railway_admin
from app.models.station import ApprovalStatus, OperationalStatus, StationCategory
from app.models.user import User
from app.services import stations as stations_service

router = APIRouter()


class StationCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    station_name: str = Field(min_length=1)
    station_code: str = Field(min_length=2, max_length=5)
    railway_zone: str
    division: str | None = None
    station_category: StationCategory
    operational_status: OperationalStatus = "ACTIVE"
    platforms_count: int = Field(ge=1)
    daily_footfall_avg: int = Field(ge=0)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    pincode: str | None = None
    facilities: list[str] = Field(default_factory=list)


class StationUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    station_name: str | None = Field(default=None, min_length=1)
    station_code: str | None = Field(default=None, min_length=2, max_length=5)
    railway_zone: str | None = None
    division: str | None = None
    station_category: StationCategory | None = None
    operational_status: OperationalStatus | None = None
    approval_status: ApprovalStatus | None = None
    platforms_count: int | None = Field(default=None, ge=1)
    daily_footfall_avg: int | None = Field(default=None, ge=0)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    pincode: str | None = None
    facilities: list[str] | None = None
    layout_completed: bool | None = None


def _manager_out(user: User | None) -> dict | None:
    if user is None:
        return None
    return {"id": str(user.id), "name": user.name, "email": user.email, "phone": user.phone}


def _station_out(station, managers: dict[str, User] | None = None) -> dict:
    manager_id = stations_service.manager_id(station)
    manager = (managers or {}).get(manager_id) if manager_id else None
    return {
        "id": str(station.id),
        "stationName": station.station_name,
        "stationCode": station.station_code,
        "railwayZone": station.railway_zone,
        "division": station.division,
        "stationCategory": station.station_category,
        "operationalStatus": station.operational_status,
        "approvalStatus": station.approval_status,
        "platformsCount": station.platforms_count,
        "dailyFootfallAvg": station.daily_footfall_avg,
        "city": station.city,
        "state": station.state,
        "facilities": station.facilities,
        "layoutCompleted": station.layout_completed,
        "stationManagerId": manager_id,
        "stationManager": _manager_out(manager),
        "createdAt": station.created_at.isoformat(),
    }


@router.get("/stations")
async def stations_list(
    admin: User = Depends(require_railway_admin),
    params: PaginationParams = Depends(paginated()),
    approval_status: str | None = Query(None, alias="approvalStatus"),
    search: str | None = None,
):
    """Paginated stations ordered by name, with their managers."""
    stations, total = await stations_service.list_stations(params, approval_status=approval_status, search=search)
    managers = await stations_service.load_managers(stations)
    data = [_station_out(s, managers) for s in stations]
    return create_pagination_result(data, total, params.page, params.limit).model_dump(by_alias=True)


@router.post("/stations", status_code=status.HTTP_201_CREATED)
async def stations_create(body: StationCreate, admin: User = Depends(require_railway_admin)):
    station = await stations_service.create_station(body.model_dump(), admin)
    return {"success": True, "message": "Station created successfully", "station": _station_out(station)}


@router.get("/stations/{station_id}")
async def stations_get(station_id: str, admin: User = Depends(require_railway_admin)):
    station = await stations_service.get_station(station_id)
    managers = await stations_service.load_managers([station])
    return {"station": _station_out(station, managers)}


@router.put("/stations/{station_id}")
async def stations_update(station_id: str, body: StationUpdate, admin: User = Depends(require_railway_admin)):
    station = await stations_service.update_station(station_id, body.model_dump(exclude_unset=True, exclude_none=True))
    managers = await stations_service.load_managers([station])
    return {"success": True, "message": "Station updated successfully", "station": _station_out(station, managers)}


@router.delete("/stations/{station_id}")
async def stations_delete(station_id: str, admin: User = Depends(require_railway_admin)):
    await stations_service.delete_station(station_id)
    return {"success": True, "message": "Station deleted successfully"}
