import os
from datetime import datetime
from types import SimpleNamespace
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from beanie import PydanticObjectId
from httpx import ASGITransport, AsyncClient

# Routes are exercised without lifespan, so nothing connects to these.
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGODB_DB_NAME", "vendorvault_test")
os.environ.setdefault("SECRET_KEY", "test-secret-key-min-32-characters-long")


class FakeRedis:
    """Just enough of redis.asyncio for the login throttle."""

    def __init__(self):
        self.store: dict[str, int] = {}
        self.ttls: dict[str, int] = {}

    async def get(self, key):
        val = self.store.get(key)
        return str(val) if val is not None else None

    async def incr(self, key):
        self.store[key] = self.store.get(key, 0) + 1
        return self.store[key]

    async def expire(self, key, seconds):
        self.ttls[key] = seconds

    async def delete(self, key):
        self.store.pop(key, None)


def make_user(role: str = "RAILWAY_ADMIN", status: str = "ACTIVE", **overrides):
    fields = {
        "id": PydanticObjectId(),
        "name": "Asha Menon",
        "email": "asha@railways.example",
        "phone": "9876543210",
        "role": role,
        "status": status,
        "verification_status": "VERIFIED",
        "session_version": 0,
        "preferred_station_code": None,
        "preferred_station_name": None,
        "railway_zone": None,
        "created_at": datetime(2024, 5, 1, 9, 30),
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def app_instance():
    from app.main import app
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def as_user(app_instance):
    """Authenticate requests as the given user by overriding the token dependency."""
    from app.deps import get_current_user

    def _login(user):
        app_instance.dependency_overrides[get_current_user] = lambda: user
        return user

    return _login


@pytest_asyncio.fixture
async def client(app_instance) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app_instance),
        base_url="http://test",
    ) as ac:
        yield ac
