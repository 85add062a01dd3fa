from datetime import datetime
from typing import Literal, Optional

from beanie import Document, Indexed, Link, PydanticObjectId
from pydantic import Field

from app.models.user import User

StationCategory = Literal[
    "NSG-1", "NSG-2", "NSG-3", "NSG-4", "NSG-5", "NSG-6",
    "SG-1", "SG-2", "SG-3",
    "HG-1", "HG-2", "HG-3",
]
OperationalStatus = Literal["ACTIVE", "RENOVATION", "PENDING_APPROVAL"]
ApprovalStatus = Literal["PENDING", "APPROVED", "REJECTED"]


class Station(Document):
    station_name: str
    station_code: Indexed(str, unique=True) = Field(min_length=2, max_length=5)
    railway_zone: str
    division: str | None = None
    station_category: StationCategory
    operational_status: OperationalStatus = "PENDING_APPROVAL"
    platforms_count: int = Field(ge=1)
    entry_gates: int = Field(default=1, ge=1)
    daily_footfall_avg: int = Field(ge=0)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    pincode: str | None = None
    facilities: list[str] = Field(default_factory=list)
    station_manager: Optional[Link[User]] = None
    approval_status: ApprovalStatus = "PENDING"
    layout_completed: bool = False
    approved_by: PydanticObjectId | None = None
    rejection_reason: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "stations"
        indexes = [
            [("station_manager", 1)],
            [("railway_zone", 1)],
            [("approval_status", 1), ("created_at", -1)],
            [("station_name", 1), ("_id", 1)],
        ]
