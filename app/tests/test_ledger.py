from __future__ import annotations

import asyncio
from datetime import date

import httpx
import pytest

from app.core.exceptions import (
    InvalidIdentifier,
    InvalidSearchParameters,
    PersistenceError,
    RoomUnavailable,
    StayNotFound,
)
from app.crud.booking import (
    insert_booking,
    list_bookings_for_stay,
    sum_overlapping_rooms,
    update_booking_status,
)
from app.db.base import execute
from app.tests.fake_supabase import FakeSupabaseClient, api_error, make_booking, make_stay


class RaisingRpc:
    def __init__(self, error: Exception):
        self.error = error

    def execute(self):
        raise self.error


class RpcFailingClient(FakeSupabaseClient):
    def __init__(self, error: Exception):
        super().__init__({"stays": [make_stay("a")]})
        self.error = error

    def rpc(self, name: str, params: dict):
        return RaisingRpc(self.error)


DRAFT = {
    "stay_id": "a",
    "check_in": "2025-08-01",
    "check_out": "2025-08-03",
    "adults": 2,
    "children": 0,
    "rooms_booked": 1,
    "guest_name": "Mark Taylor",
    "guest_email": "mark@example.com",
    "guest_phone": None,
    "special_requests": None,
}


def _run(coro):
    return asyncio.run(coro)


def test_list_bookings_for_stay_filters_status():
    client = FakeSupabaseClient(
        {
            "bookings": [
                make_booking("b1", "a", "2025-08-01", "2025-08-03", status="cancelled"),
                make_booking("b2", "a", "2025-08-05", "2025-08-07", status="confirmed"),
                make_booking("b3", "b", "2025-08-01", "2025-08-03"),
            ]
        }
    )

    rows = _run(list_bookings_for_stay(client, "a", statuses=("pending", "confirmed")))

    assert [row["id"] for row in rows] == ["b2"]


def test_sum_overlapping_rooms_adds_rooms_booked():
    client = FakeSupabaseClient(
        {
            "bookings": [
                make_booking("b1", "a", "2025-08-01", "2025-08-03", rooms_booked=2),
                make_booking("b2", "a", "2025-08-02", "2025-08-04", rooms_booked=1),
            ]
        }
    )

    assert _run(sum_overlapping_rooms(client, "a", date(2025, 8, 2), date(2025, 8, 3))) == 3


@pytest.mark.parametrize(
    "error, expected",
    [
        (api_error("ROOM_UNAVAILABLE", "P0001"), RoomUnavailable),
        (api_error("STAY_NOT_FOUND", "P0001"), StayNotFound),
        (api_error("insert or update violates foreign key", "23503"), StayNotFound),
        (api_error("invalid input syntax for type uuid", "22P02"), StayNotFound),
        (api_error("PARTY_TOO_LARGE", "P0001"), InvalidSearchParameters),
        (api_error("permission denied for table bookings", "42501"), PersistenceError),
        (httpx.ConnectTimeout("timed out"), PersistenceError),
        (httpx.ConnectError("connection refused"), PersistenceError),
    ],
)
def test_insert_booking_maps_store_errors(error, expected):
    with pytest.raises(expected):
        _run(insert_booking(RpcFailingClient(error), dict(DRAFT)))


def test_update_booking_status_only_moves_from_pending():
    client = FakeSupabaseClient(
        {"bookings": [make_booking("b1", "a", "2025-08-01", "2025-08-03", status="confirmed")]}
    )

    assert _run(update_booking_status(client, "b1", "cancelled")) is None
    assert client.storage["bookings"][0]["status"] == "confirmed"


def test_execute_maps_malformed_id_to_invalid_identifier():
    client = FakeSupabaseClient(
        {}, fail_on={"bookings": api_error("invalid input syntax for type uuid", "22P02")}
    )

    with pytest.raises(InvalidIdentifier):
        execute(client.table("bookings").select("*").eq("id", "not-a-uuid"), "load booking")


def test_list_bookings_for_stay_with_malformed_id_is_empty():
    client = FakeSupabaseClient(
        {}, fail_on={"bookings": api_error("invalid input syntax for type uuid", "22P02")}
    )

    assert _run(list_bookings_for_stay(client, "not-a-uuid")) == []


def test_insert_booking_store_rejects_too_many_adults_per_room():
    client = FakeSupabaseClient(
        {"stays": [make_stay("a", total_rooms=3, max_adults=2, max_children=2)], "bookings": []}
    )

    with pytest.raises(InvalidSearchParameters):
        _run(insert_booking(client, {**DRAFT, "adults": 3, "children": 0}))

    assert client.storage["bookings"] == []
