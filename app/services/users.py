"""Users: credential checks, admin listings and station manager review."""

from datetime import datetime

from beanie.odm.enums import SortDirection

from app.core.audit import log_event
from app.core.exceptions import BadRequestError, ConflictError, NotFoundError
from app.core.ids import parse_object_id
from app.core.logging import get_logger
from app.core.pagination import PaginationParams
from app.core.security import hash_password, verify_password
from app.models.station import Station
from app.models.user import User
from app.services.listing import SortSpec, contains_pattern, fetch_page

log = get_logger(__name__)

USER_SORT_FIELDS = {
    "createdAt": "created_at",
    "name": "name",
    "email": "email",
    "role": "role",
    "status": "status",
}


def normalize_email(s: str) -> str:
    return s.strip().lower() if s else ""


async def authenticate(email: str, password: str) -> User | None:
    """Return the user when the credentials match, else None. Status is checked by the caller."""
    user = await User.find_one(User.email == normalize_email(email))
    if not user or not verify_password(password, user.password_hash):
        return None
    user.last_login_at = datetime.utcnow()
    await user.save()
    return user


def token_payload_for_user(user: User) -> dict:
    return {"user_id": str(user.id), "role": user.role, "session_version": user.session_version}


async def upsert_railway_admin(email: str, name: str, password: str) -> User:
    """Create a RAILWAY_ADMIN, or re-activate an existing one and reset its password."""
    email = normalize_email(email)
    user = await User.find_one(User.email == email)
    if user and user.role != "RAILWAY_ADMIN":
        raise ConflictError("Email already registered with another role", details={"role": user.role})
    if user:
        user.name = name or user.name
        user.password_hash = hash_password(password)
        user.status = "ACTIVE"
        user.session_version += 1
        user.updated_at = datetime.utcnow()
        await user.save()
        log.info("railway_admin_reset", user_id=str(user.id))
        return user
    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role="RAILWAY_ADMIN",
        status="ACTIVE",
        verification_status="VERIFIED",
    )
    await user.insert()
    log.info("railway_admin_created", user_id=str(user.id))
    return user


async def list_users(
    params: PaginationParams,
    sort: SortSpec,
    role: str | None = None,
    status: str | None = None,
    search: str | None = None,
) -> tuple[list[User], int]:
    filters: list = []
    if role and role.lower() != "all":
        filters.append({"role": role.upper()})
    if status and status.lower() != "all":
        filters.append({"status": status.upper()})
    if search and search.strip():
        pattern = contains_pattern(search)
        filters.append({"$or": [{"name": pattern}, {"email": pattern}, {"phone": pattern}]})
    return await fetch_page(User, filters, sort, params)


async def list_pending_admins(params: PaginationParams) -> tuple[list[User], int]:
    """Station manager applications awaiting review, newest first."""
    return await fetch_page(
        User,
        [User.role == "STATION_MANAGER", User.status == "PENDING"],
        [("created_at", SortDirection.DESCENDING), ("_id", SortDirection.DESCENDING)],
        params,
    )


async def review_station_manager(
    reviewer: User,
    user_id: str,
    action: str,
    rejection_reason: str | None = None,
) -> User:
    """
    Approve or reject a pending station manager application.
    Approval also approves and activates the station the applicant manages.
    """
    if action not in ("approve", "reject"):
        raise BadRequestError('Invalid action. Must be "approve" or "reject"')
    applicant = await User.get(parse_object_id(user_id, "station manager id"))
    if not applicant:
        raise NotFoundError("Station manager application not found")
    if applicant.role != "STATION_MANAGER":
        raise BadRequestError("User is not a station manager application")
    if applicant.status != "PENDING":
        raise BadRequestError("Station manager application has already been processed")

    now = datetime.utcnow()
    if action == "approve":
        applicant.status = "ACTIVE"
        applicant.approved_by = reviewer.id
        applicant.rejection_reason = None
    else:
        if not rejection_reason or not rejection_reason.strip():
            raise BadRequestError("Rejection reason is required")
        applicant.status = "REJECTED"
        applicant.rejection_reason = rejection_reason.strip()
    applicant.updated_at = now
    await applicant.save()

    station_id = None
    if action == "approve":
        station = await Station.find_one(Station.station_manager.id == applicant.id)
        if station:
            station.approval_status = "APPROVED"
            station.operational_status = "ACTIVE"
            station.approved_by = reviewer.id
            station.updated_at = now
            await station.save()
            station_id = str(station.id)

    log.info(
        "station_manager_reviewed",
        applicant_id=str(applicant.id),
        action=action,
        station_id=station_id,
    )
    await log_event(
        str(reviewer.id),
        "station_manager_approved" if action == "approve" else "station_manager_rejected",
        "user",
        str(applicant.id),
        {"station_id": station_id, "rejection_reason": applicant.rejection_reason},
    )
    return applicant
