"""
database.py — Supabase Client & Request Dependency

Purpose:
- Create the Supabase client used for all table access.
- Expose a FastAPI dependency `get_db()` that hands each request the typed
  table wrapper (`SupabaseDBClient`).

Key Characteristics:
- One process-wide client; the Supabase/PostgREST client is stateless per call
  and manages its own HTTP connection pool and timeouts.
- Schema is expected to already exist (created in Supabase).
- If Supabase is not configured the app still starts; endpoints that need the
  store fail with StoreUnavailable when `get_db()` is called.

This module does NOT:
- Perform any queries (see app/services/db_client.py).
- Verify bearer tokens (see app/core/security.py).
"""

from functools import lru_cache

from supabase import Client, create_client

from app.core.config import settings
from app.core.errors import StoreUnavailable
from app.core.logging import get_logger
from app.services.db_client import SupabaseDBClient

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """
    Build the shared Supabase client.

    Raises:
        StoreUnavailable: If SUPABASE_URL or a key is missing.
    """
    if not settings.supabase_configured:
        logger.error(
            "Supabase is not configured. Set SUPABASE_URL and "
            "SUPABASE_SERVICE_ROLE_KEY (or SUPABASE_ANON_KEY)."
        )
        raise StoreUnavailable("Database is not configured.")
    return create_client(settings.SUPABASE_URL, settings.supabase_key)


# -----------------------------------------------------------------------------
# FastAPI Dependency
# -----------------------------------------------------------------------------

def get_db() -> SupabaseDBClient:
    """
    FastAPI dependency: the table wrapper for the duration of the request.

    Usage in API endpoint:
        def endpoint(db: SupabaseDBClient = Depends(get_db)):
            db.get_spot(spot_id)
    """
    return SupabaseDBClient(get_supabase_client())
