from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from app.core.pagination import PaginationParams, create_pagination_result
from app.deps import paginated, require_railway_admin
from app.models.user import User
from app.routers.users import user_out
from app.services import users as user_service

router = APIRouter()


class ReviewAdminRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    station_manager_id: str | None = None
    admin_id: str | None = None  # older clients send adminId
    action: str
    rejection_reason: str | None = None

    @model_validator(mode="after")
    def _require_target(self):
        if not (self.station_manager_id or self.admin_id):
            raise ValueError("stationManagerId is required")
        return self

    @property
    def target_id(self) -> str:
        return self.station_manager_id or self.admin_id


def _applicant_out(user) -> dict:
    return {
        **user_out(user),
        "preferredStationCode": user.preferred_station_code,
        "preferredStationName": user.preferred_station_name,
        "railwayZone": user.railway_zone,
    }


@router.get("/pending-admins")
async def pending_admins_list(
    admin: User = Depends(require_railway_admin),
    params: PaginationParams = Depends(paginated()),
):
    """Station manager applications awaiting review, newest first."""
    users, total = await user_service.list_pending_admins(params)
    data = [_applicant_out(u) for u in users]
    return create_pagination_result(data, total, params.page, params.limit).model_dump(by_alias=True)


@router.post("/approve-admin")
async def approve_admin(body: ReviewAdminRequest, admin: User = Depends(require_railway_admin)):
    applicant = await user_service.review_station_manager(
        admin, body.target_id, body.action, body.rejection_reason
    )
    verb = "approved" if applicant.status == "ACTIVE" else "rejected"
    return {
        "message": f"Station Manager application {verb} successfully",
        "stationManager": {
            "id": str(applicant.id),
            "name": applicant.name,
            "email": applicant.email,
            "status": applicant.status,
        },
    }
