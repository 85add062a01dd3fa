"""Failed-login throttling: fixed window per client via Redis."""

from app.core.config import get_settings
from app.core.logging import get_logger

log = get_logger(__name__)

KEY_PREFIX = "auth:failed_logins"


def _key(identifier: str) -> str:
    return f"{KEY_PREFIX}:{identifier}"


async def get_failed_logins(redis, identifier: str) -> int:
    """Return failed attempts recorded for this client in the current window."""
    try:
        val = await redis.get(_key(identifier))
        return int(val) if val is not None else 0
    except Exception as e:
        # Fail open when Redis is unreachable.
        log.warning("rate_limit_unavailable", error=str(e))
        return 0


async def is_login_blocked(redis, identifier: str) -> bool:
    return await get_failed_logins(redis, identifier) >= get_settings().login_max_attempts


async def register_failed_login(redis, identifier: str) -> int:
    """Increment and return the failure count; the window starts on the first failure."""
    key = _key(identifier)
    try:
        n = await redis.incr(key)
        if n == 1:
            await redis.expire(key, get_settings().login_window_seconds)
        return n
    except Exception as e:
        log.warning("rate_limit_unavailable", error=str(e))
        return 0


async def clear_failed_logins(redis, identifier: str) -> None:
    try:
        await redis.delete(_key(identifier))
    except Exception as e:
        log.warning("rate_limit_unavailable", error=str(e))


def retry_after_seconds() -> int:
    return get_settings().login_window_seconds
