from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from supabase import Client

from app.api.errors import SEARCH_FAILED, store_unavailable
from app.core.exceptions import InvalidSearchParameters, PersistenceError
from app.db.base import get_supabase
from app.schemas.stay import AvailabilityResponse
from app.services.availability import search_available_stays

router = APIRouter(prefix="/v1.0/availability", tags=["availability"])


@router.get("", response_model=AvailabilityResponse)
async def search_availability(
    check_in: date,
    check_out: date,
    adults: int = Query(1),
    children: int = Query(0),
    rooms: int = Query(1),
    client: Client = Depends(get_supabase),
):
    """Stays with enough free rooms for the party over [check_in, check_out)."""
    try:
        stays = await search_available_stays(
            client, check_in, check_out, adults, children=children, rooms=rooms
        )
    except InvalidSearchParameters as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    except PersistenceError:
        raise store_unavailable(SEARCH_FAILED)
    return AvailabilityResponse(items=stays)
