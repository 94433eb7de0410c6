from __future__ import annotations

from supabase import Client

from app.core.exceptions import InvalidIdentifier
from app.db.base import execute


async def list_stays(client: Client, featured_only: bool = False) -> list[dict]:
    query = client.table("stays").select("*")
    if featured_only:
        query = query.eq("is_featured", True)
    response = execute(query.order("price_per_night"), "list stays")
    return response.data or []


async def get_stay(client: Client, stay_id: str) -> dict | None:
    try:
        response = execute(
            client.table("stays").select("*").eq("id", stay_id).limit(1),
            "load stay",
        )
    except InvalidIdentifier:
        return None
    if not response.data:
        return None
    return response.data[0]


async def get_stay_by_slug(client: Client, slug: str) -> dict | None:
    response = execute(
        client.table("stays").select("*").eq("slug", slug).limit(1),
        "load stay",
    )
    if not response.data:
        return None
    return response.data[0]
