import pytest

from app.services import rate_limit

pytestmark = pytest.mark.asyncio


class BrokenRedis:
    async def get(self, key):
        raise ConnectionError("redis down")

    async def incr(self, key):
        raise ConnectionError("redis down")

    async def delete(self, key):
        raise ConnectionError("redis down")


async def test_blocks_after_max_failures(fake_redis, monkeypatch):
    monkeypatch.setenv("LOGIN_MAX_ATTEMPTS", "3")
    from app.core.config import get_settings
    get_settings.cache_clear()
    try:
        for _ in range(2):
            await rate_limit.register_failed_login(fake_redis, "10.0.0.1:a@b.c")
        assert not await rate_limit.is_login_blocked(fake_redis, "10.0.0.1:a@b.c")
        await rate_limit.register_failed_login(fake_redis, "10.0.0.1:a@b.c")
        assert await rate_limit.is_login_blocked(fake_redis, "10.0.0.1:a@b.c")
    finally:
        get_settings.cache_clear()


async def test_window_set_on_first_failure(fake_redis):
    await rate_limit.register_failed_login(fake_redis, "k")
    await rate_limit.register_failed_login(fake_redis, "k")
    assert fake_redis.ttls == {"auth:failed_logins:k": rate_limit.retry_after_seconds()}


async def test_clear_resets_counter(fake_redis):
    await rate_limit.register_failed_login(fake_redis, "k")
    await rate_limit.clear_failed_logins(fake_redis, "k")
    assert await rate_limit.get_failed_logins(fake_redis, "k") == 0


async def test_fails_open_when_redis_is_down():
    redis = BrokenRedis()
    assert await rate_limit.register_failed_login(redis, "k") == 0
    assert not await rate_limit.is_login_blocked(redis, "k")
    await rate_limit.clear_failed_logins(redis, "k")
