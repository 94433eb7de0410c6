from __future__ import annotations

from supabase import Client

from app.core.exceptions import InvalidIdentifier
from app.db.base import execute


async def get_profile(client: Client, user_id: str) -> dict | None:
    try:
        response = execute(
            client.table("profiles").select("id, full_name, is_admin").eq("id", user_id).limit(1),
            "load profile",
        )
    except InvalidIdentifier:
        return None
    if not response.data:
        return None
    return response.data[0]
