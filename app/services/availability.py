"""Availability engine.

Date ranges are half-open: a stay booked ``[check_in, check_out)`` frees its
rooms on the morning of ``check_out``, so a guest leaving on day D and a guest
arriving on day D never compete for the same room.

Pending and confirmed bookings both hold rooms; cancelled ones never do.
"""

from __future__ import annotations

import logging
from datetime import date

from supabase import Client

from app.core.exceptions import (
    DataInconsistency,
    InvalidSearchParameters,
    RoomUnavailable,
    StayNotFound,
)
from app.crud.booking import insert_booking, sum_overlapping_rooms
from app.crud.stay import get_stay, list_stays

logger = logging.getLogger(__name__)


def as_date(value: date | str) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def overlaps(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    return a_start < b_end and b_start < a_end


def count_nights(check_in: date | str, check_out: date | str) -> int:
    return (as_date(check_out) - as_date(check_in)).days


def booking_total(
    price_per_night: int | float | None,
    check_in: date | str,
    check_out: date | str,
    rooms: int,
) -> float:
    return float(price_per_night or 0) * count_nights(check_in, check_out) * rooms


def room_capacity(stay: dict) -> int:
    return int(stay.get("max_adults") or 0) + int(stay.get("max_children") or 0)


def party_fits(stay: dict, rooms: int, adults: int, children: int) -> bool:
    """Whether ``rooms`` rooms of this stay can hold the whole party.

    Children may take spare adult places, adults never take child places.
    """
    if adults > rooms * int(stay.get("max_adults") or 0):
        return False
    return rooms * room_capacity(stay) >= adults + children


def validate_search(
    check_in: date, check_out: date, adults: int, children: int, rooms: int
) -> None:
    if not isinstance(check_in, date) or not isinstance(check_out, date):
        raise InvalidSearchParameters("Check-in and check-out dates are required.")
    if check_out <= check_in:
        raise InvalidSearchParameters("Check-out date must be after check-in date.")
    if adults < 1:
        raise InvalidSearchParameters("At least one adult is required.")
    if children < 0:
        raise InvalidSearchParameters("Children cannot be negative.")
    if rooms < 1:
        raise InvalidSearchParameters("At least one room is required.")


async def rooms_booked(client: Client, stay_id: str, check_in: date, check_out: date) -> int:
    return await sum_overlapping_rooms(client, stay_id, check_in, check_out)


async def available_rooms(client: Client, stay: dict, check_in: date, check_out: date) -> int:
    """Free rooms of ``stay`` over the range, never below zero."""
    booked = await rooms_booked(client, stay["id"], check_in, check_out)
    total = int(stay.get("total_rooms") or 0)
    free = total - booked
    if free < 0:
        logger.warning("%s", DataInconsistency(stay["id"], total, booked))
        return 0
    return free


async def search_available_stays(
    client: Client,
    check_in: date,
    check_out: date,
    adults: int,
    children: int = 0,
    rooms: int = 1,
) -> list[dict]:
    """Stays that can host the party in ``rooms`` rooms for the whole range.

    Each returned stay carries ``available_rooms``, ``nights`` and
    ``total_price``. Results are ordered by nightly price, then name.
    """
    validate_search(check_in, check_out, adults, children, rooms)

    nights = count_nights(check_in, check_out)
    results = []
    for stay in await list_stays(client):
        if not party_fits(stay, rooms, adults, children):
            continue
        free = await available_rooms(client, stay, check_in, check_out)
        if free < rooms:
            continue
        results.append(
            {
                **stay,
                "available_rooms": free,
                "nights": nights,
                "total_price": booking_total(
                    stay.get("price_per_night"), check_in, check_out, rooms
                ),
            }
        )

    results.sort(key=lambda row: (row.get("price_per_night") or 0, row.get("name") or ""))
    return results


async def create_booking(
    client: Client,
    stay_id: str,
    check_in: date,
    check_out: date,
    adults: int,
    children: int,
    rooms: int,
    guest: dict,
) -> dict:
    """Validate, re-check capacity and persist a pending booking request.

    The search that led here may be minutes old, so nothing the client sends
    is trusted. The final capacity check happens again inside the store.
    """
    validate_search(check_in, check_out, adults, children, rooms)

    stay = await get_stay(client, stay_id)
    if stay is None:
        raise StayNotFound(stay_id)

    if not party_fits(stay, rooms, adults, children):
        raise InvalidSearchParameters(
            f"{adults + children} guest(s) do not fit in {rooms} room(s) of {stay['name']}."
        )

    free = await available_rooms(client, stay, check_in, check_out)
    if free < rooms:
        logger.info(
            "Rejected booking for stay %s: %s room(s) requested, %s free",
            stay_id, rooms, free,
        )
        raise RoomUnavailable(stay_id, rooms, free)

    booking = await insert_booking(
        client,
        {
            "stay_id": stay_id,
            "check_in": check_in.isoformat(),
            "check_out": check_out.isoformat(),
            "adults": adults,
            "children": children,
            "rooms_booked": rooms,
            "guest_name": guest["name"],
            "guest_email": guest["email"],
            "guest_phone": guest.get("phone"),
            "special_requests": guest.get("special_requests"),
        },
    )
    logger.info(
        "Created booking %s for stay %s (%s to %s, %s room(s))",
        booking.get("id"), stay_id, check_in, check_out, rooms,
    )
    return booking
