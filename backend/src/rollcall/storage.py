"""Supabase Storage helpers for report uploads."""

from __future__ import annotations

from rollcall.db import get_client


def upload_bytes(
    bucket: str,
    path: str,
    data: bytes,
    content_type: str = "application/octet-stream",
) -> str:
    """Upload raw bytes to Supabase Storage. Returns the storage path."""
    get_client().storage.from_(bucket).upload(
        path,
        data,
        file_options={"content-type": content_type, "upsert": "true"},
    )
    return f"{bucket}/{path}"
