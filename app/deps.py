"""Shared FastAPI dependencies."""

from functools import lru_cache

import redis.asyncio as aioredis
from fastapi import Depends, Request

from app.core.config import get_settings
from app.core.exceptions import ForbiddenError, UnauthorizedError
from app.core.logging import bind_user
from app.core.pagination import PaginationParams, get_pagination_params
from app.core.security import load_access_token
from app.models.user import User

TOKEN_COOKIE_NAME = "token"


def _extract_token(request: Request) -> str | None:
    cookie = request.cookies.get(TOKEN_COOKIE_NAME)
    if cookie:
        return cookie
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header[len("Bearer "):].strip() or None
    return None


async def get_current_user(request: Request) -> User:
    """Dependency: resolve the access token (cookie or bearer header) to an active User."""
    token = _extract_token(request)
    if not token:
        raise UnauthorizedError("No authentication token provided")
    payload = load_access_token(token)
    if not payload:
        raise UnauthorizedError("Invalid or expired token")
    user_id = payload.get("user_id")
    if not user_id:
        raise UnauthorizedError("Invalid token")
    user = await User.get(user_id)
    if not user:
        raise UnauthorizedError("User not found")
    if payload.get("session_version") != user.session_version:
        raise UnauthorizedError("Session invalidated")
    if user.status != "ACTIVE":
        raise UnauthorizedError("Account is not active")
    bind_user(str(user.id), user.role)
    return user


def require_roles(*roles: str):
    """Dependency factory: current user must hold one of ``roles``."""

    async def _require(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise ForbiddenError("Insufficient role for this resource")
        return user

    return _require


require_railway_admin = require_roles("RAILWAY_ADMIN")


def paginated(default_limit: int | None = None, max_limit: int | None = None):
    """Dependency factory: resolve ``page``/``limit`` from the raw query string."""

    def _resolve(request: Request) -> PaginationParams:
        settings = get_settings()
        return get_pagination_params(
            request.query_params,
            default_limit=default_limit or settings.pagination_default_limit,
            max_limit=max_limit or settings.pagination_max_limit,
        )

    return _resolve


@lru_cache
def get_redis() -> aioredis.Redis:
    return aioredis.from_url(get_settings().redis_url, decode_responses=True)
