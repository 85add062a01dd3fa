from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel

from app.core.config import get_settings
from app.core.exceptions import ForbiddenError, TooManyRequestsError, UnauthorizedError
from app.core.logging import get_logger
from app.core.security import create_access_token
from app.deps import TOKEN_COOKIE_NAME, get_current_user, get_redis
from app.models.user import User
from app.services import rate_limit
from app.services import users as user_service

router = APIRouter()
log = get_logger(__name__)


class LoginRequest(BaseModel):
    email: str
    password: str


def _user_out(user: User) -> dict:
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "status": user.status,
    }


def _client_key(request: Request, email: str) -> str:
    host = request.client.host if request.client else "unknown"
    return f"{host}:{user_service.normalize_email(email)}"


@router.post("/login")
async def auth_login(body: LoginRequest, request: Request, response: Response, redis=Depends(get_redis)):
    """Exchange email/password for an access token; set httpOnly cookie."""
    key = _client_key(request, body.email)
    if await rate_limit.is_login_blocked(redis, key):
        raise TooManyRequestsError("Too many failed login attempts", retry_after=rate_limit.retry_after_seconds())
    user = await user_service.authenticate(body.email, body.password)
    if not user:
        attempts = await rate_limit.register_failed_login(redis, key)
        log.info("login_failed", attempts=attempts)
        raise UnauthorizedError("Invalid email or password")
    if user.status == "PENDING":
        raise ForbiddenError("Account is pending approval")
    if user.status != "ACTIVE":
        raise ForbiddenError("Account is not active")
    await rate_limit.clear_failed_logins(redis, key)

    settings = get_settings()
    token = create_access_token(user_service.token_payload_for_user(user))
    response.set_cookie(
        key=TOKEN_COOKIE_NAME,
        value=token,
        max_age=settings.token_max_age_seconds,
        httponly=True,
        secure=settings.env == "production",
        samesite="lax",
        path="/",
    )
    log.info("login_succeeded", user_id=str(user.id), role=user.role)
    return {"user": _user_out(user), "token": token}


@router.post("/logout")
async def auth_logout(response: Response):
    response.delete_cookie(TOKEN_COOKIE_NAME, path="/")
    return {"success": True}


@router.get("/me")
async def auth_me(user: User = Depends(get_current_user)):
    """Return current user. Requires token cookie or bearer header."""
    return {"user": _user_out(user)}
