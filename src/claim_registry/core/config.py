# ClaimRegistry - Claims Management Record Service
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Configuration management using Pydantic Settings."""

from beartype import beartype
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with immutable configuration."""

    model_config = SettingsConfigDict(
        env_file=None,
        env_file_encoding="utf-8",
        frozen=True,  # Immutable settings
        validate_default=True,
        extra="forbid",
    )

    # API Configuration
    app_name: str = Field(
        default="Claim Registry",
        description="Application name",
        min_length=1,
    )
    api_host: str = Field(
        default="0.0.0.0",  # nosec B104 - Binding to all interfaces is needed for containerized deployment
        description="API host to bind to",
    )
    api_port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="API port to bind to",
    )
    api_env: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="API environment",
    )
    api_cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Entity store
    store_backend: str = Field(
        default="memory",
        pattern="^(memory|postgres)$",
        description="Entity store implementation backing the claim records",
    )

    # Database
    database_url: str = Field(
        default="postgresql://localhost:5432/claim_registry",
        description="PostgreSQL connection URL",
        min_length=1,
    )
    database_pool_min: int = Field(
        default=2,
        ge=1,
        le=20,
        description="Minimum database pool size",
    )
    database_pool_max: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum database pool size",
    )
    database_pool_timeout: float = Field(
        default=10.0,
        ge=1.0,
        le=60.0,
        description="Connection acquisition timeout in seconds",
    )
    database_command_timeout: float = Field(
        default=30.0,
        ge=5.0,
        le=300.0,
        description="Query execution timeout in seconds",
    )

    # Observability
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Root log level",
    )
    slow_operation_ms: int = Field(
        default=500,
        ge=1,
        le=60000,
        description="Operations slower than this are logged as warnings",
    )

    @field_validator("database_pool_max")
    @classmethod
    def validate_pool_sizes(cls: type["Settings"], v: int, info: ValidationInfo) -> int:
        """Ensure pool max is greater than pool min."""
        if "database_pool_min" in info.data:
            min_size = info.data["database_pool_min"]
            if v < min_size:
                raise ValueError(
                    f"database_pool_max ({v}) must be >= database_pool_min ({min_size})"
                )
        return v

    @field_validator("api_cors_origins")
    @classmethod
    def validate_cors_origins(cls: type["Settings"], v: list[str]) -> list[str]:
        """Validate CORS origins are proper URLs."""
        for origin in v:
            if not origin.startswith(("http://", "https://")):
                raise ValueError(f"Invalid CORS origin: {origin}")
        return v

    @field_validator("store_backend")
    @classmethod
    def validate_store_backend(
        cls: type["Settings"], v: str, info: ValidationInfo
    ) -> str:
        """Refuse the volatile in-memory store in production."""
        if info.data.get("api_env") == "production" and v == "memory":
            raise ValueError(
                "In-memory store cannot be used in production. "
                "Set STORE_BACKEND=postgres."
            )
        return v

    @property
    @beartype
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.api_env == "production"

    @property
    @beartype
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.api_env == "development"


_settings: Settings | None = None


@beartype
def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


@beartype
def clear_settings_cache() -> None:
    """Clear settings cache (for testing)."""
    global _settings
    _settings = None
