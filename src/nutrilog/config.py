"""Application configuration."""

import os

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("supabase_url", "vite_supabase_url"),
    )
    supabase_service_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "supabase_service_key", "supabase_service_role_key"
        ),
    )
    firebase_project_id: str | None = None
    firebase_credentials_path: str | None = None
    firebase_check_revoked: bool = False
    foods_table: str = "makanan"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
        populate_by_name=True,
    )

    def missing_supabase_settings(self) -> list[str]:
        """Return the names of unset Supabase settings."""
        missing = []
        if not self.supabase_url:
            missing.append("SUPABASE_URL")
        if not self.supabase_service_key:
            missing.append("SUPABASE_SERVICE_KEY")
        return missing
