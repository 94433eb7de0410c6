from fastapi import APIRouter, Depends, HTTPException, Query, status
from supabase import Client

from app.api.errors import store_unavailable
from app.core.exceptions import PersistenceError
from app.crud.stay import get_stay_by_slug, list_stays
from app.db.base import get_supabase
from app.schemas.stay import StayListResponse, StayResponse

router = APIRouter(prefix="/v1.0/stays", tags=["stays"])


@router.get("", response_model=StayListResponse)
async def list_all_stays(
    featured: bool = Query(False),
    client: Client = Depends(get_supabase),
):
    """List stays, cheapest first."""
    try:
        stays = await list_stays(client, featured_only=featured)
    except PersistenceError:
        raise store_unavailable()
    return StayListResponse(items=stays)


@router.get("/{slug}", response_model=StayResponse)
async def get_single_stay(slug: str, client: Client = Depends(get_supabase)):
    try:
        stay = await get_stay_by_slug(client, slug)
    except PersistenceError:
        raise store_unavailable()
    if not stay:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Stay not found")
    return stay
