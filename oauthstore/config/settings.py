"""Configuration settings for the OAuth persistence core using Pydantic Settings.

This module provides type-safe configuration management with automatic validation
and environment variable loading.
"""

import logging
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from oauthstore.core.constants import STORAGE_TIMEOUT_DEFAULT

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("memory", "supabase")


class Settings(BaseSettings):
    """Central configuration management with Pydantic validation.

    All settings are loaded from environment variables with automatic type conversion
    and validation. Default values are provided for non-critical settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
        populate_by_name=True,
    )

    # ========================================
    # Debug Settings
    # ========================================
    debug: bool = Field(
        default=False,
        alias="OAUTHSTORE_DEBUG",
        description="Enable debug mode with verbose logging",
    )

    # ========================================
    # Storage Settings
    # ========================================
    storage_backend: str = Field(
        default="memory",
        description="Document store backend (memory or supabase)",
    )

    supabase_url: str | None = Field(
        default=None,
        description="Supabase project URL",
    )

    supabase_service_key: str | None = Field(
        default=None,
        description="Supabase service role key",
    )

    storage_timeout: float = Field(
        default=STORAGE_TIMEOUT_DEFAULT,
        ge=0.1,
        le=120.0,
        description="Timeout in seconds for a single storage round trip",
    )

    # ========================================
    # Client Credential Settings
    # ========================================
    hash_client_secrets: bool = Field(
        default=False,
        description="Store client secrets as pbkdf2_sha256 hashes instead of plain text",
    )

    # ========================================
    # Validators
    # ========================================
    @field_validator("storage_backend", mode="before")
    @classmethod
    def normalize_storage_backend(cls, v: Any) -> str:
        """Lower-case the backend name and reject unknown backends."""
        backend = str(v).strip().lower()
        if backend not in SUPPORTED_BACKENDS:
            msg = (
                f"Unsupported storage backend '{v}'. "
                f"Expected one of: {', '.join(SUPPORTED_BACKENDS)}"
            )
            raise ValueError(msg)
        return backend

    # ========================================
    # Helper Methods
    # ========================================
    def has_supabase_config(self) -> bool:
        """Check if Supabase environment variables are configured."""
        return all([self.supabase_url, self.supabase_service_key])

    def to_dict(self) -> dict[str, Any]:
        """Export settings as a dictionary (safe version without secrets)."""
        return {
            "debug": self.debug,
            "storage_backend": self.storage_backend,
            "has_supabase": self.has_supabase_config(),
            "storage_timeout": self.storage_timeout,
            "hash_client_secrets": self.hash_client_secrets,
        }


# Singleton pattern with proper typing
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance (singleton pattern)."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
        logger.info("Settings initialized from environment")
        logger.debug("Storage backend: %s", _settings_instance.storage_backend)
        if (
            _settings_instance.storage_backend == "supabase"
            and not _settings_instance.has_supabase_config()
        ):
            logger.warning(
                "SUPABASE_URL or SUPABASE_SERVICE_KEY is missing. "
                "The supabase backend will fail to initialize.",
            )
    return _settings_instance


def reset_settings() -> None:
    """Reset settings instance (useful for testing)."""
    global _settings_instance
    _settings_instance = None
