"""Operator-side views and status changes over the booking ledger.

Every operation takes the authenticated caller explicitly; nothing reads an
ambient session.
"""

from __future__ import annotations

import logging

from supabase import Client

from app.core.exceptions import BookingNotFound, InvalidTransition, NotAuthorized
from app.crud.booking import (
    BOOKING_STATUSES,
    get_booking_by_id,
    list_bookings,
    update_booking_status,
)
from app.schemas.auth import AdminCaller
from app.services.availability import booking_total, count_nights

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = ("confirmed", "cancelled")


def _require_admin(caller: AdminCaller) -> None:
    if not caller.is_admin:
        raise NotAuthorized(f"User {caller.user_id} is not an operator.")


def _with_totals(booking: dict) -> dict:
    booking["nights"] = count_nights(booking["check_in"], booking["check_out"])
    booking["total_price"] = booking_total(
        booking.get("stay_price_per_night"),
        booking["check_in"],
        booking["check_out"],
        int(booking.get("rooms_booked") or 1),
    )
    return booking


async def list_admin_bookings(
    client: Client, caller: AdminCaller, status: str | None = None
) -> list[dict]:
    _require_admin(caller)
    return [_with_totals(row) for row in await list_bookings(client, status=status)]


async def get_admin_booking(client: Client, caller: AdminCaller, booking_id: str) -> dict:
    _require_admin(caller)
    booking = await get_booking_by_id(client, booking_id)
    if booking is None:
        raise BookingNotFound(booking_id)
    return _with_totals(booking)


async def transition_booking(
    client: Client, caller: AdminCaller, booking_id: str, target: str
) -> dict:
    """Move a pending booking to confirmed or cancelled.

    Non-pending bookings are rejected with InvalidTransition. Overlapping
    pending requests are left untouched when one is confirmed.
    """
    _require_admin(caller)

    booking = await get_booking_by_id(client, booking_id)
    if booking is None:
        raise BookingNotFound(booking_id)

    current = booking["status"]
    if target not in TERMINAL_STATUSES or current != "pending":
        raise InvalidTransition(booking_id, current, target)

    updated = await update_booking_status(client, booking_id, target, from_status="pending")
    if updated is None:
        # Another operator got there first.
        latest = await get_booking_by_id(client, booking_id)
        raise InvalidTransition(booking_id, latest["status"] if latest else current, target)

    logger.info(
        "Booking %s moved from pending to %s by %s", booking_id, target, caller.user_id
    )
    booking.update(updated)
    return _with_totals(booking)


async def dashboard_summary(client: Client, caller: AdminCaller) -> dict:
    """Booking counts per status and revenue from confirmed bookings."""
    _require_admin(caller)

    counts = {status: 0 for status in BOOKING_STATUSES}
    revenue = 0.0
    for booking in await list_bookings(client):
        status = booking.get("status")
        if status not in counts:
            continue
        counts[status] += 1
        if status == "confirmed":
            revenue += booking_total(
                booking.get("stay_price_per_night"),
                booking["check_in"],
                booking["check_out"],
                int(booking.get("rooms_booked") or 1),
            )

    return {
        "total_bookings": sum(counts.values()),
        "pending_bookings": counts["pending"],
        "confirmed_bookings": counts["confirmed"],
        "cancelled_bookings": counts["cancelled"],
        "total_revenue": revenue,
    }
