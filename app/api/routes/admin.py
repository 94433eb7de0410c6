from fastapi import APIRouter, Depends, HTTPException, Query, status
from supabase import Client

from app.api import deps
from app.api.errors import store_unavailable
from app.core.exceptions import BookingNotFound, InvalidTransition, PersistenceError
from app.db.base import get_supabase
from app.schemas.auth import AdminCaller
from app.schemas.booking import (
    AdminBookingListResponse,
    AdminBookingResponse,
    BookingStatus,
    BookingStatusUpdate,
    DashboardSummaryResponse,
)
from app.services.booking_admin import (
    dashboard_summary,
    get_admin_booking,
    list_admin_bookings,
    transition_booking,
)

router = APIRouter(prefix="/v1.0/admin", tags=["admin"])


@router.get("/dashboard", response_model=DashboardSummaryResponse)
async def get_dashboard(
    caller: AdminCaller = Depends(deps.get_current_admin),
    client: Client = Depends(get_supabase),
):
    try:
        return await dashboard_summary(client, caller)
    except PersistenceError:
        raise store_unavailable()


@router.get("/bookings", response_model=AdminBookingListResponse)
async def list_bookings(
    status_filter: BookingStatus | None = Query(None, alias="status"),
    caller: AdminCaller = Depends(deps.get_current_admin),
    client: Client = Depends(get_supabase),
):
    """List booking requests, newest first, optionally filtered by status."""
    try:
        rows = await list_admin_bookings(client, caller, status=status_filter)
    except PersistenceError:
        raise store_unavailable()
    return AdminBookingListResponse(items=rows)


@router.get("/bookings/{booking_id}", response_model=AdminBookingResponse)
async def get_booking(
    booking_id: str,
    caller: AdminCaller = Depends(deps.get_current_admin),
    client: Client = Depends(get_supabase),
):
    try:
        return await get_admin_booking(client, caller, booking_id)
    except BookingNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    except PersistenceError:
        raise store_unavailable()


@router.patch("/bookings/{booking_id}/status", response_model=AdminBookingResponse)
async def update_booking_status(
    booking_id: str,
    payload: BookingStatusUpdate,
    caller: AdminCaller = Depends(deps.get_current_admin),
    client: Client = Depends(get_supabase),
):
    """Confirm or cancel a pending booking."""
    try:
        return await transition_booking(client, caller, booking_id, payload.status)
    except BookingNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    except InvalidTransition as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Booking is already {exc.current}.",
        )
    except PersistenceError:
        raise store_unavailable()
