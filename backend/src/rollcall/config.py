"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env relative to the project root
_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Supabase (only needed for loading snapshots and uploading exports) ---
    supabase_url: str | None = None
    supabase_service_role_key: str | None = None

    # --- Storage buckets ---
    supabase_bucket_reports: str = "rollcall-reports"

    # --- Exports ---
    export_dir: str = "exports"
    export_format: str = "xlsx"  # xlsx, csv

    # --- App ---
    app_env: str = "development"
    log_level: str = "INFO"

    @property
    def has_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
