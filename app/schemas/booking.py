from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field

BookingStatus = Literal["pending", "confirmed", "cancelled"]


class BookingCreate(BaseModel):
    stay_id: str = Field(..., min_length=1)
    check_in: date
    check_out: date
    adults: int = 1
    children: int = 0
    rooms: int = 1
    guest_name: str = Field(..., min_length=2, max_length=200)
    guest_email: EmailStr
    guest_phone: str | None = Field(None, max_length=50)
    special_requests: str | None = Field(None, max_length=2000)


class BookingStatusUpdate(BaseModel):
    status: Literal["confirmed", "cancelled"]


class BookingResponse(BaseModel):
    id: str
    stay_id: str
    check_in: date
    check_out: date
    adults: int
    children: int
    rooms_booked: int
    guest_name: str
    guest_email: str
    guest_phone: str | None = None
    special_requests: str | None = None
    status: BookingStatus
    created_at: datetime


class AdminBookingResponse(BookingResponse):
    stay_name: str | None = None
    nights: int
    total_price: float


class AdminBookingListResponse(BaseModel):
    items: list[AdminBookingResponse]


class DashboardSummaryResponse(BaseModel):
    total_bookings: int
    pending_bookings: int
    confirmed_bookings: int
    cancelled_bookings: int
    total_revenue: float
