from fastapi import APIRouter, Depends, Query

from app.core.pagination import PaginationParams, create_pagination_result
from app.deps import paginated, require_railway_admin
from app.models.user import User
from app.services import platforms as platforms_service

router = APIRouter()


def _platform_out(platform, stations: dict) -> dict:
    station_id = platforms_service.station_ref_id(platform)
    station = stations.get(station_id)
    return {
        "id": str(platform.id),
        "stationId": station_id,
        "station": (
            {"id": station_id, "stationName": station.station_name, "stationCode": station.station_code}
            if station
            else None
        ),
        "platformNumber": platform.platform_number,
        "platformName": platform.platform_name,
        "totalShops": platform.total_shops,
        "occupiedShops": platform.occupied_shops,
        "availableShops": platform.available_shops,
        "facilities": platform.facilities,
    }


@router.get("/platforms")
async def platforms_list(
    admin: User = Depends(require_railway_admin),
    params: PaginationParams = Depends(paginated(default_limit=20)),
    station_id: str | None = Query(None, alias="stationId"),
):
    """Paginated platforms ordered by station then platform number."""
    platforms, total = await platforms_service.list_platforms(params, station_id=station_id)
    stations = await platforms_service.load_stations(platforms)
    data = [_platform_out(p, stations) for p in platforms]
    return create_pagination_result(data, total, params.page, params.limit).model_dump(by_alias=True)
