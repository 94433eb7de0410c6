from __future__ import annotations


class BookingError(Exception):
    """Base class for errors raised by the availability and booking services."""


class InvalidSearchParameters(BookingError):
    pass


class StayNotFound(BookingError):
    def __init__(self, stay_id: str):
        super().__init__(f"Stay {stay_id} does not exist.")
        self.stay_id = stay_id


class RoomUnavailable(BookingError):
    """Not enough free rooms left for the requested range.

    This is an expected outcome when two guests go after the last room.
    """

    def __init__(self, stay_id: str, requested: int, available: int | None = None):
        if available is None:
            message = f"Stay {stay_id} no longer has {requested} room(s) free."
        else:
            message = (
                f"Stay {stay_id} has {available} room(s) free, {requested} requested."
            )
        super().__init__(message)
        self.stay_id = stay_id
        self.requested = requested
        self.available = available


class BookingNotFound(BookingError):
    def __init__(self, booking_id: str):
        super().__init__(f"Booking {booking_id} does not exist.")
        self.booking_id = booking_id


class InvalidTransition(BookingError):
    def __init__(self, booking_id: str, current: str, target: str):
        super().__init__(
            f"Booking {booking_id} cannot move from {current} to {target}."
        )
        self.booking_id = booking_id
        self.current = current
        self.target = target


class InvalidIdentifier(BookingError):
    """An id that cannot exist in the store, e.g. a malformed uuid."""


class NotAuthorized(BookingError):
    """The caller is not an operator."""


class PersistenceError(BookingError):
    """The store was unreachable, timed out, or rejected the request.

    Transient; callers may retry once with backoff.
    """


class DataInconsistency:
    """More rooms reserved than a stay has. Logged, never raised."""

    def __init__(self, stay_id: str, total_rooms: int, rooms_booked: int):
        self.stay_id = stay_id
        self.total_rooms = total_rooms
        self.rooms_booked = rooms_booked

    def __str__(self) -> str:
        return (
            f"Stay {self.stay_id} is overbooked: {self.rooms_booked} room(s) "
            f"reserved out of {self.total_rooms}."
        )
