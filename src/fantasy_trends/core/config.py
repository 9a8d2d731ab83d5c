"""
Configuration management for the Fantasy Trends API.

Uses Pydantic settings for type-safe configuration with environment variable support.
All settings can be overridden via environment variables.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden via environment variables.
    For nested settings, use double underscore: CORS__ALLOW_ORIGINS="http://localhost:3000"
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    # ==========================================================================
    # Application Metadata
    # ==========================================================================
    app_name: str = "Fantasy Trends API"
    app_version: str = "1.0.0"

    # ==========================================================================
    # Record Store Configuration
    # ==========================================================================
    database_url: Optional[str] = Field(
        default=None,
        description="PostgreSQL connection string",
    )
    supabase_db_url: Optional[str] = Field(
        default=None,
        description="Alternative Supabase-specific database URL",
    )
    database_pool_size: int = Field(default=10, ge=1, le=50)
    database_min_pool_size: int = Field(default=2, ge=1, le=50)
    trends_table: str = Field(
        default="nfl_fantasy_trends",
        pattern=r"^[A-Za-z_][A-Za-z0-9_]*$",
        description="Table holding weekly player observations",
    )
    query_timeout: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="Seconds before a single Record Store fetch is abandoned",
    )
    fixture_path: Optional[str] = Field(
        default=None,
        description="JSON fixture file; when set the API serves it from memory instead of Postgres",
    )

    @computed_field
    @property
    def db_url(self) -> str:
        """Get the effective database URL."""
        return self.database_url or self.supabase_db_url or ""

    # ==========================================================================
    # Query Defaults
    # ==========================================================================
    default_page_size: int = Field(default=20, ge=1)
    leaderboard_size: int = Field(default=5, ge=1, le=50)

    # ==========================================================================
    # API Configuration
    # ==========================================================================
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_docs_url: str = "/docs"
    api_redoc_url: str = "/redoc"

    # ==========================================================================
    # CORS Configuration
    # ==========================================================================
    cors_allow_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        description="Allowed CORS origins. Set to ['*'] for development.",
    )
    cors_allow_methods: list[str] = ["GET", "HEAD", "OPTIONS"]
    cors_allow_headers: list[str] = ["Accept", "Accept-Encoding", "Content-Type"]
    cors_allow_credentials: bool = False
    cors_expose_headers: list[str] = ["X-Process-Time"]

    # ==========================================================================
    # Dashboard Client
    # ==========================================================================
    api_base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL the dashboard client talks to",
    )
    client_timeout: float = Field(default=15.0, gt=0)
    search_debounce: float = Field(
        default=0.5,
        ge=0,
        description="Quiet period in seconds before a search request is issued",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
