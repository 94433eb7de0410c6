from __future__ import annotations

from pydantic import BaseModel


class AdminCaller(BaseModel):
    """Authenticated operator resolved from a Supabase access token."""

    user_id: str
    email: str | None = None
    is_admin: bool = False
