"""Application settings loaded from environment variables and the ``.env`` file."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, PositiveFloat, PositiveInt, SecretStr, model_validator
from pydantic.networks import PostgresDsn
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE_URL = "postgresql://localhost:5432/youtube_tools"
DEFAULT_TRANSCRIPT_HOST = "youtube-transcripts.p.rapidapi.com"


class Settings(BaseSettings):
    """Primary application settings shared by the MCP server and the CLI.

    Built once at startup and handed to each service explicitly. Credentials are optional
    here; the service that needs one raises :class:`~youtube_tools.errors.MissingCredentialError`
    at call time when it is absent.
    """

    database_url: PostgresDsn = Field(default=DEFAULT_DATABASE_URL, alias="DATABASE_URL")
    db_min_connections: PositiveInt = Field(default=1, alias="DB_MIN_CONNECTIONS")
    db_max_connections: PositiveInt = Field(default=5, alias="DB_MAX_CONNECTIONS")

    rapidapi_key: Optional[SecretStr] = Field(default=None, alias="RAPIDAPI_KEY")
    rapidapi_transcript_host: str = Field(default=DEFAULT_TRANSCRIPT_HOST, alias="RAPIDAPI_TRANSCRIPT_HOST")
    transcript_chunk_size: PositiveInt = Field(default=500, alias="TRANSCRIPT_CHUNK_SIZE")
    youtube_api_key: Optional[SecretStr] = Field(default=None, alias="YOUTUBE_API_KEY")

    default_language: str = Field(default="en", min_length=2, max_length=10, alias="DEFAULT_LANGUAGE")
    request_timeout_seconds: PositiveFloat = Field(default=30.0, alias="REQUEST_TIMEOUT_SECONDS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def _check_pool_bounds(self) -> "Settings":
        if self.db_min_connections > self.db_max_connections:
            raise ValueError("DB_MIN_CONNECTIONS cannot exceed DB_MAX_CONNECTIONS")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached instance of the application settings."""

    return Settings()


__all__ = ["DEFAULT_DATABASE_URL", "DEFAULT_TRANSCRIPT_HOST", "Settings", "get_settings"]
