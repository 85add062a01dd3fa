from fastapi import APIRouter, Depends, Request

from app.core.pagination import PaginationParams, create_pagination_result, get_sort_params
from app.deps import paginated, require_railway_admin
from app.models.user import User
from app.services import users as user_service

router = APIRouter()


def user_out(user) -> dict:
    """Public view of a user; never includes the password hash."""
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
        "role": user.role,
        "status": user.status,
        "verificationStatus": user.verification_status,
        "createdAt": user.created_at.isoformat(),
    }


@router.get("/users")
async def users_list(
    request: Request,
    admin: User = Depends(require_railway_admin),
    params: PaginationParams = Depends(paginated(default_limit=20)),
    role: str | None = None,
    status: str | None = None,
    search: str | None = None,
):
    """Paginated users, newest first unless sortField/sortOrder say otherwise."""
    sort = get_sort_params(request.query_params, user_service.USER_SORT_FIELDS, "created_at")
    users, total = await user_service.list_users(params, sort, role=role, status=status, search=search)
    data = [user_out(u) for u in users]
    return create_pagination_result(data, total, params.page, params.limit).model_dump(by_alias=True)
