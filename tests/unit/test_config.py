"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from claim_registry.core.config import Settings, clear_settings_cache, get_settings


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.store_backend == "memory"
        assert settings.is_development
        assert settings.log_level == "INFO"
        assert settings.slow_operation_ms == 500

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORE_BACKEND", "postgres")
        monkeypatch.setenv("DATABASE_POOL_MAX", "20")

        settings = Settings()

        assert settings.store_backend == "postgres"
        assert settings.database_pool_max == 20

    def test_pool_max_below_min_is_rejected(self) -> None:
        with pytest.raises(ValidationError, match="database_pool_max"):
            Settings(database_pool_min=5, database_pool_max=2)

    def test_memory_store_refused_in_production(self) -> None:
        with pytest.raises(ValidationError, match="In-memory store"):
            Settings(api_env="production", store_backend="memory")

    def test_production_with_postgres(self) -> None:
        settings = Settings(api_env="production", store_backend="postgres")

        assert settings.is_production

    def test_invalid_cors_origin(self) -> None:
        with pytest.raises(ValidationError, match="Invalid CORS origin"):
            Settings(api_cors_origins=["localhost:3000"])

    def test_settings_are_frozen(self) -> None:
        settings = Settings()

        with pytest.raises(ValidationError):
            settings.log_level = "DEBUG"  # type: ignore[misc]

    def test_get_settings_is_cached(self) -> None:
        first = get_settings()

        assert get_settings() is first
        clear_settings_cache()
        assert get_settings() is not first
