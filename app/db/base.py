from __future__ import annotations

import logging
from functools import lru_cache

import httpx
from postgrest.exceptions import APIError
from supabase import Client, ClientOptions, create_client

from app.core.config import get_settings
from app.core.exceptions import InvalidIdentifier, PersistenceError

logger = logging.getLogger(__name__)

INVALID_TEXT_REPRESENTATION = "22P02"


@lru_cache
def get_supabase() -> Client:
    """Service-role Supabase client shared by all requests."""
    settings = get_settings()
    return create_client(
        settings.supabase_url,
        settings.supabase_service_key,
        options=ClientOptions(postgrest_client_timeout=settings.store_timeout_seconds),
    )


def execute(query, action: str):
    """Run a PostgREST query, surfacing any store failure as PersistenceError."""
    try:
        return query.execute()
    except APIError as exc:
        if exc.code == INVALID_TEXT_REPRESENTATION:
            raise InvalidIdentifier(exc.message) from exc
        logger.error("Store rejected %s: %s (code=%s)", action, exc.message, exc.code)
        raise PersistenceError(f"Could not {action}.") from exc
    except httpx.TimeoutException as exc:
        logger.error("Store timed out during %s", action)
        raise PersistenceError(f"Timed out trying to {action}.") from exc
    except httpx.HTTPError as exc:
        logger.error("Store unreachable during %s: %s", action, exc)
        raise PersistenceError(f"Could not {action}.") from exc
