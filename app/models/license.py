from datetime import datetime
from typing import Literal

from beanie import Document, Indexed, PydanticObjectId
from pydantic import Field

LicenseStatus = Literal["PENDING", "APPROVED", "REJECTED", "EXPIRED", "REVOKED", "ACTIVE", "SUSPENDED"]
LICENSE_STATUSES: tuple[str, ...] = LicenseStatus.__args__


class License(Document):
    vendor_id: PydanticObjectId
    station_id: PydanticObjectId
    platform_id: PydanticObjectId | None = None
    license_number: Indexed(str, unique=True)
    status: LicenseStatus = "PENDING"
    shop_name: str
    shop_type: str | None = None
    license_type: Literal["TEMPORARY", "PERMANENT", "SEASONAL"] = "TEMPORARY"
    validity_period: int = 12  # months
    monthly_rent: float | None = None
    security_deposit: float | None = None
    issued_at: datetime | None = None
    expires_at: datetime | None = None
    rejection_reason: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "licenses"
        indexes = [
            [("status", 1), ("created_at", -1)],
            [("vendor_id", 1)],
        ]
