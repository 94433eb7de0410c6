from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client

from app.api.errors import ROOM_TAKEN, store_unavailable
from app.core.exceptions import (
    InvalidSearchParameters,
    PersistenceError,
    RoomUnavailable,
    StayNotFound,
)
from app.db.base import get_supabase
from app.schemas.booking import BookingCreate, BookingResponse
from app.services.availability import create_booking

router = APIRouter(prefix="/v1.0/bookings", tags=["bookings"])


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def request_booking(
    payload: BookingCreate,
    client: Client = Depends(get_supabase),
):
    """Submit a booking request. It stays pending until an operator confirms it."""
    guest = {
        "name": payload.guest_name.strip(),
        "email": str(payload.guest_email),
        "phone": payload.guest_phone.strip() if payload.guest_phone else None,
        "special_requests": payload.special_requests,
    }
    try:
        booking = await create_booking(
            client,
            payload.stay_id,
            payload.check_in,
            payload.check_out,
            payload.adults,
            payload.children,
            payload.rooms,
            guest,
        )
    except InvalidSearchParameters as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    except StayNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Stay not found")
    except RoomUnavailable:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=ROOM_TAKEN)
    except PersistenceError:
        raise store_unavailable()
    return booking
