"""Supabase client helpers for reading club records."""

from __future__ import annotations

from supabase import Client, create_client

from rollcall.config import get_settings

_client: Client | None = None


def get_client() -> Client:
    """Return a singleton Supabase client (service-role for backend workers)."""
    global _client
    if _client is None:
        s = get_settings()
        if not s.has_supabase:
            raise RuntimeError(
                "Supabase is not configured: set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY"
            )
        _client = create_client(s.supabase_url, s.supabase_service_role_key)
    return _client


def select_rows(
    table: str,
    columns: str = "*",
    filters: dict | None = None,
) -> list[dict]:
    """Simple select with optional equality filters."""
    q = get_client().table(table).select(columns)
    for k, v in (filters or {}).items():
        q = q.eq(k, v)
    return q.execute().data
