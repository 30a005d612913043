"""
Centralized configuration for the Walletlink backend.

All settings are loaded from environment variables with sensible defaults.
Provider settings are namespaced (SUPABASE_*, PRIVY_*).
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Walletlink API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "info"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase (session validation)
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    # Defaults to sb-<project-ref>-auth-token when unset
    supabase_auth_cookie: Optional[str] = None

    # Privy (wallet provider)
    privy_app_id: str = ""
    privy_app_secret: str = ""
    privy_api_url: str = "https://api.privy.io"
    privy_timeout: float = 30.0  # seconds

    # Chain type provisioned for every new user
    wallet_chain_type: str = "ethereum"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
