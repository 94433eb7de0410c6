from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from app.core.exceptions import (
    InvalidIdentifier,
    InvalidSearchParameters,
    PersistenceError,
    RoomUnavailable,
    StayNotFound,
)
from app.db.base import INVALID_TEXT_REPRESENTATION, execute

logger = logging.getLogger(__name__)

BOOKING_STATUSES = ("pending", "confirmed", "cancelled")

# Raised by the bookings insert guard (see supabase/migrations).
ROOM_UNAVAILABLE_MESSAGE = "ROOM_UNAVAILABLE"
STAY_NOT_FOUND_MESSAGE = "STAY_NOT_FOUND"
PARTY_TOO_LARGE_MESSAGE = "PARTY_TOO_LARGE"
FOREIGN_KEY_VIOLATION = "23503"


def _flatten_stay(row: dict) -> dict:
    stay = row.pop("stays", None)
    if isinstance(stay, list):
        stay = stay[0] if stay else None
    row["stay_name"] = stay.get("name") if stay else None
    row["stay_price_per_night"] = stay.get("price_per_night") if stay else None
    return row


async def list_bookings_for_stay(
    client: Client, stay_id: str, statuses: Iterable[str] | None = None
) -> list[dict]:
    query = client.table("bookings").select("*").eq("stay_id", stay_id)
    if statuses is not None:
        query = query.in_("status", list(statuses))
    try:
        response = execute(query.order("check_in"), "list bookings")
    except InvalidIdentifier:
        return []
    return response.data or []


async def sum_overlapping_rooms(
    client: Client, stay_id: str, check_in: date, check_out: date
) -> int:
    """Rooms held by non-cancelled bookings overlapping [check_in, check_out)."""
    response = execute(
        client.table("bookings")
        .select("rooms_booked")
        .eq("stay_id", stay_id)
        .neq("status", "cancelled")
        .lt("check_in", check_out.isoformat())
        .gt("check_out", check_in.isoformat()),
        "count booked rooms",
    )
    return sum(int(row.get("rooms_booked") or 0) for row in response.data or [])


async def insert_booking(client: Client, draft: dict) -> dict:
    """Insert a pending booking if the stay still has enough free rooms.

    A before-insert trigger on bookings locks the stay row and re-checks
    party size and capacity, so concurrent requests for the same stay
    serialize whichever path inserts them.
    """
    params = {f"p_{key}": value for key, value in draft.items()}
    try:
        response = client.rpc("create_booking_if_available", params).execute()
    except APIError as exc:
        if exc.message == ROOM_UNAVAILABLE_MESSAGE:
            raise RoomUnavailable(draft["stay_id"], draft["rooms_booked"]) from exc
        if exc.message == PARTY_TOO_LARGE_MESSAGE:
            raise InvalidSearchParameters("The party does not fit in the requested rooms.") from exc
        if exc.message == STAY_NOT_FOUND_MESSAGE or exc.code in (
            FOREIGN_KEY_VIOLATION,
            INVALID_TEXT_REPRESENTATION,
        ):
            raise StayNotFound(draft["stay_id"]) from exc
        logger.error("Store rejected booking insert: %s (code=%s)", exc.message, exc.code)
        raise PersistenceError("Could not save the booking.") from exc
    except httpx.TimeoutException as exc:
        logger.error("Store timed out saving booking for stay %s", draft["stay_id"])
        raise PersistenceError("Timed out trying to save the booking.") from exc
    except httpx.HTTPError as exc:
        logger.error("Store unreachable saving booking: %s", exc)
        raise PersistenceError("Could not save the booking.") from exc

    data = response.data
    if isinstance(data, list):
        data = data[0] if data else None
    if not data:
        raise PersistenceError("Store returned no booking after insert.")
    return data


async def get_booking_by_id(client: Client, booking_id: str) -> dict | None:
    try:
        response = execute(
            client.table("bookings")
            .select("*, stays(name, price_per_night)")
            .eq("id", booking_id)
            .limit(1),
            "load booking",
        )
    except InvalidIdentifier:
        return None
    if not response.data:
        return None
    return _flatten_stay(response.data[0])


async def list_bookings(client: Client, status: str | None = None) -> list[dict]:
    query = client.table("bookings").select("*, stays(name, price_per_night)")
    if status:
        query = query.eq("status", status)
    response = execute(query.order("created_at", desc=True), "list bookings")
    return [_flatten_stay(row) for row in response.data or []]


async def update_booking_status(
    client: Client, booking_id: str, status: str, from_status: str = "pending"
) -> dict | None:
    """Compare-and-set the status. Returns None when no row was in ``from_status``."""
    response = execute(
        client.table("bookings")
        .update({"status": status})
        .eq("id", booking_id)
        .eq("status", from_status),
        "update booking status",
    )
    if not response.data:
        return None
    return response.data[0]
