from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

Amenity = Literal["wifi", "jacuzzi", "pet-friendly", "kitchenette", "fireplace", "ac"]


class StayResponse(BaseModel):
    id: str
    slug: str
    name: str
    short_description: str = ""
    long_description: str = ""
    images: list[str] = []
    is_featured: bool = False
    amenities: list[Amenity] = []
    max_adults: int = Field(..., ge=0)
    max_children: int = Field(..., ge=0)
    total_rooms: int = Field(..., ge=0)
    price_per_night: int = Field(..., gt=0)
    created_at: datetime | None = None


class StayListResponse(BaseModel):
    items: list[StayResponse]


class StayWithAvailability(StayResponse):
    available_rooms: int = Field(..., ge=0)
    nights: int
    total_price: float


class AvailabilityResponse(BaseModel):
    items: list[StayWithAvailability]
