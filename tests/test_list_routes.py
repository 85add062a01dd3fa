"""Paginated railway-admin list endpoints, with the data layer stubbed out."""

from datetime import datetime
from types import SimpleNamespace

import pytest
from beanie import PydanticObjectId

from app.services import licenses as licenses_service
from app.services import platforms as platforms_service
from app.services import stations as stations_service
from app.services import users as user_service
from conftest import make_user

pytestmark = pytest.mark.asyncio


def make_station(name: str, code: str, manager_id=None):
    return SimpleNamespace(
        id=PydanticObjectId(),
        station_name=name,
        station_code=code,
        railway_zone="SR",
        division="Chennai",
        station_category="NSG-1",
        operational_status="ACTIVE",
        approval_status="APPROVED",
        platforms_count=12,
        daily_footfall_avg=450000,
        city="Chennai",
        state="Tamil Nadu",
        facilities=["waiting-room"],
        layout_completed=False,
        station_manager=SimpleNamespace(id=manager_id) if manager_id else None,
        created_at=datetime(2024, 1, 15),
    )


class Recorder:
    """Async stand-in for a list service that remembers how it was called."""

    def __init__(self, items, total):
        self.items = items
        self.total = total
        self.calls = []

    async def __call__(self, params, *args, **kwargs):
        self.calls.append((params, args, kwargs))
        return self.items, self.total


async def test_stations_requires_authentication(client):
    r = await client.get("/v1/railway-admin/stations")
    assert r.status_code == 401
    body = r.json()
    assert body["error"] == "No authentication token provided"
    assert body["code"] == "UNAUTHORIZED"
    assert body["request_id"] == r.headers["X-Request-ID"]


async def test_stations_forbidden_for_vendor(client, as_user):
    as_user(make_user(role="VENDOR"))
    r = await client.get("/v1/railway-admin/stations")
    assert r.status_code == 403
    assert r.json()["code"] == "FORBIDDEN"


async def test_stations_list_envelope(client, as_user, monkeypatch):
    as_user(make_user())
    manager = make_user(role="STATION_MANAGER", name="R. Iyer", email="iyer@railways.example")
    stations = [make_station("Chennai Central", "MAS", manager.id), make_station("Chennai Egmore", "MS")]
    recorder = Recorder(stations, total=23)

    async def load_managers(_stations):
        return {str(manager.id): manager}

    monkeypatch.setattr(stations_service, "list_stations", recorder)
    monkeypatch.setattr(stations_service, "load_managers", load_managers)

    r = await client.get("/v1/railway-admin/stations", params={"page": "2", "limit": "2", "search": "chennai"})
    assert r.status_code == 200
    body = r.json()
    assert body["pagination"] == {
        "currentPage": 2,
        "totalPages": 12,
        "totalItems": 23,
        "itemsPerPage": 2,
        "hasNextPage": True,
        "hasPreviousPage": True,
    }
    assert [s["stationCode"] for s in body["data"]] == ["MAS", "MS"]
    assert body["data"][0]["stationManager"]["name"] == "R. Iyer"
    assert body["data"][1]["stationManager"] is None

    params, _, kwargs = recorder.calls[0]
    assert (params.skip, params.limit, params.page) == (2, 2, 2)
    assert kwargs == {"approval_status": None, "search": "chennai"}


async def test_malformed_pagination_is_normalized(client, as_user, monkeypatch):
    as_user(make_user())
    recorder = Recorder([], total=0)
    monkeypatch.setattr(stations_service, "list_stations", recorder)

    async def load_managers(_stations):
        return {}

    monkeypatch.setattr(stations_service, "load_managers", load_managers)

    r = await client.get("/v1/railway-admin/stations", params={"page": "abc", "limit": "-4"})
    assert r.status_code == 200
    params, _, _ = recorder.calls[0]
    assert (params.page, params.limit, params.skip) == (1, 10, 0)
    assert r.json()["pagination"]["totalPages"] == 0


async def test_users_list_hides_password_and_sorts(client, as_user, monkeypatch):
    as_user(make_user())
    vendor = make_user(role="VENDOR", name="Kiran Stall", password_hash="1$a$b")
    recorder = Recorder([vendor], total=1)
    monkeypatch.setattr(user_service, "list_users", recorder)

    r = await client.get(
        "/v1/railway-admin/users",
        params={"role": "vendor", "sortField": "name", "sortOrder": "asc", "limit": "1000"},
    )
    assert r.status_code == 200
    body = r.json()
    assert "passwordHash" not in body["data"][0]
    assert "password_hash" not in body["data"][0]
    assert body["data"][0]["verificationStatus"] == "VERIFIED"

    params, args, kwargs = recorder.calls[0]
    assert params.limit == 100
    sort = args[0]
    assert sort[0][0] == "name"
    assert kwargs["role"] == "vendor"


async def test_users_list_default_page_size(client, as_user, monkeypatch):
    as_user(make_user())
    recorder = Recorder([], total=0)
    monkeypatch.setattr(user_service, "list_users", recorder)
    await client.get("/v1/railway-admin/users")
    params, _, _ = recorder.calls[0]
    assert params.limit == 20


async def test_pending_admins_list(client, as_user, monkeypatch):
    as_user(make_user())
    applicant = make_user(
        role="STATION_MANAGER",
        status="PENDING",
        preferred_station_code="SBC",
        preferred_station_name="KSR Bengaluru",
    )
    recorder = Recorder([applicant], total=11)
    monkeypatch.setattr(user_service, "list_pending_admins", recorder)

    r = await client.get("/v1/railway-admin/pending-admins", params={"page": "2"})
    assert r.status_code == 200
    body = r.json()
    assert body["data"][0]["preferredStationCode"] == "SBC"
    assert body["pagination"]["totalPages"] == 2
    assert body["pagination"]["hasNextPage"] is False


async def test_platforms_list(client, as_user, monkeypatch):
    as_user(make_user())
    station = make_station("Howrah", "HWH")
    platform = SimpleNamespace(
        id=PydanticObjectId(),
        station=SimpleNamespace(id=station.id),
        platform_number=1,
        platform_name="Platform 1",
        total_shops=6,
        occupied_shops=4,
        available_shops=2,
        facilities=[],
    )
    recorder = Recorder([platform], total=1)

    async def load_stations(_platforms):
        return {str(station.id): station}

    monkeypatch.setattr(platforms_service, "list_platforms", recorder)
    monkeypatch.setattr(platforms_service, "load_stations", load_stations)

    r = await client.get("/v1/railway-admin/platforms", params={"stationId": str(station.id)})
    assert r.status_code == 200
    item = r.json()["data"][0]
    assert item["station"]["stationCode"] == "HWH"
    assert item["occupiedShops"] == 4
    assert recorder.calls[0][2] == {"station_id": str(station.id)}


async def test_licenses_list(client, as_user, monkeypatch):
    as_user(make_user())
    lic = SimpleNamespace(
        id=PydanticObjectId(),
        license_number="VV-2024-0042",
        status="ACTIVE",
        shop_name="Tea Stall 3",
        license_type="PERMANENT",
        vendor_id=PydanticObjectId(),
        station_id=PydanticObjectId(),
        monthly_rent=12000.0,
        issued_at=datetime(2024, 2, 1),
        expires_at=None,
        created_at=datetime(2024, 1, 20),
    )
    recorder = Recorder([lic], total=1)
    monkeypatch.setattr(licenses_service, "list_licenses", recorder)

    r = await client.get("/v1/railway-admin/licenses", params={"status": "active", "search": "tea"})
    assert r.status_code == 200
    body = r.json()
    assert body["data"][0]["licenseNumber"] == "VV-2024-0042"
    assert body["data"][0]["expiresAt"] is None
    _, args, kwargs = recorder.calls[0]
    assert args[0][0][0] == "created_at"
    assert kwargs == {"status": "active", "search": "tea"}


async def test_service_errors_use_error_envelope(client, as_user, monkeypatch):
    as_user(make_user())
    from app.core.exceptions import BadRequestError

    async def bad_status(*args, **kwargs):
        raise BadRequestError("Invalid license status")

    monkeypatch.setattr(licenses_service, "list_licenses", bad_status)
    r = await client.get("/v1/railway-admin/licenses", params={"status": "bogus"})
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid license status"
