from datetime import datetime
from typing import Literal

from beanie import Document, Indexed, PydanticObjectId
from pydantic import Field

Role = Literal["VENDOR", "STATION_MANAGER", "INSPECTOR", "RAILWAY_ADMIN"]
UserStatus = Literal["ACTIVE", "PENDING", "REJECTED", "SUSPENDED"]
VerificationStatus = Literal["PENDING", "IN_PROGRESS", "VERIFIED", "REJECTED"]


class User(Document):
    name: str
    email: Indexed(str, unique=True)  # stored lowercased
    phone: str | None = None
    password_hash: str
    role: Role = "VENDOR"
    status: UserStatus = "ACTIVE"  # station managers start PENDING
    verification_status: VerificationStatus = "PENDING"

    # Station manager application
    railway_employee_id: str | None = None
    current_designation: str | None = None
    preferred_station_code: str | None = None
    preferred_station_name: str | None = None
    railway_zone: str | None = None

    rejection_reason: str | None = None
    approved_by: PydanticObjectId | None = None
    session_version: int = 0
    last_login_at: datetime | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "users"
        indexes = [
            [("role", 1), ("status", 1), ("created_at", -1)],
        ]
