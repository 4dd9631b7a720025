"""Application configuration using Pydantic Settings with YAML support.

Configuration is layered (highest priority first):
1. Values passed to ``Settings()``
2. Environment variables (nested with ``__``, e.g. ``CATALOG__BASE_URL``)
3. ``.env`` file
4. ``config/environments/{APP_ENV}/*.yaml``
5. ``config/base/*.yaml``
6. Defaults declared below
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, BeforeValidator, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


def parse_list(v: str | list[str]) -> list[str]:
    """Parse comma-separated string or list into list of strings."""
    if isinstance(v, str):
        return [x.strip() for x in v.split(",") if x.strip()]
    return v


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Catalog Gateway Service"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """API configuration settings."""

    v1_prefix: str = "/api/v1"
    cors_origins: Annotated[list[str], BeforeValidator(parse_list)] = []


class AuthHeaderSettings(BaseModel):
    """Header names carrying the caller identity set by the auth gateway."""

    user_id: str = "X-User-ID"
    roles: str = "X-User-Roles"


class AuthSettings(BaseModel):
    """Caller identity configuration."""

    headers: AuthHeaderSettings = AuthHeaderSettings()
    admin_role: str = "admin"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"


class CatalogRateLimitSettings(BaseModel):
    """Shared budget for upstream catalog calls."""

    max_attempts: int = Field(default=100, ge=1)
    window_seconds: int = Field(default=60, ge=1)
    key: str = "catalog_api_requests"


class CatalogSettings(BaseModel):
    """Upstream product catalog client configuration."""

    base_url: str = "https://fakestoreapi.com"
    timeout_seconds: int = Field(default=10, ge=1)
    max_retries: int = Field(default=3, ge=1)
    backoff_base: float = Field(default=2.0, ge=0)
    cache_ttl_seconds: int = Field(default=3600, ge=0)
    cache_max_entries: int | None = Field(default=1000, ge=1)
    rate_limit: CatalogRateLimitSettings = CatalogRateLimitSettings()


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    auth: AuthSettings = AuthSettings()
    logging: LoggingSettings = LoggingSettings()
    catalog: CatalogSettings = CatalogSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the YAML source below env and .env, above secrets."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_non_production(self) -> bool:
        """Local, test and development expose docs and verbose errors."""
        return self.APP_ENV in ("local", "test", "development")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
