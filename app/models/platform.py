from datetime import datetime
from typing import Literal

from beanie import Document, Link, PydanticObjectId
from pydantic import BaseModel, Field

from app.models.station import Station


class ShopPosition(BaseModel):
    x: float
    y: float


class ShopSize(BaseModel):
    width: float = 1
    height: float = 1


class Shop(BaseModel):
    shop_number: str
    vendor_id: PydanticObjectId | None = None
    vendor_name: str | None = None
    business_name: str | None = None
    stall_type: str | None = None
    status: Literal["AVAILABLE", "OCCUPIED", "RESERVED", "MAINTENANCE"] = "AVAILABLE"
    position: ShopPosition
    size: ShopSize = Field(default_factory=ShopSize)
    monthly_rent: float | None = None
    occupied_since: datetime | None = None
    lease_end_date: datetime | None = None


class PlatformDimensions(BaseModel):
    length: float  # meters
    width: float


class Platform(Document):
    station: Link[Station]
    platform_number: int
    platform_name: str
    total_shops: int = 0
    occupied_shops: int = 0
    available_shops: int = 0
    shops: list[Shop] = Field(default_factory=list)
    dimensions: PlatformDimensions | None = None
    facilities: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "platforms"
        indexes = [
            [("station", 1), ("platform_number", 1)],
        ]

    def update_shop_counts(self) -> None:
        self.total_shops = len(self.shops)
        self.occupied_shops = sum(1 for s in self.shops if s.status == "OCCUPIED")
        self.available_shops = sum(1 for s in self.shops if s.status == "AVAILABLE")
