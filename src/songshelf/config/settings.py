"""Application settings loaded from environment variables (and .env)."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogSettings(BaseSettings):
    """Where the song catalog comes from."""

    model_config = SettingsConfigDict(
        env_prefix="SONGSHELF_CATALOG_",
        env_file=".env",
        extra="ignore",
    )

    # Hey future me - location is a path OR a URL! http(s):// goes through HttpCatalogSource,
    # anything else is read from disk. The default matches the old static site layout where
    # songs.json sits next to index.html.
    location: str = Field(default="songs.json", description="Catalog file path or http(s) URL")
    timeout_seconds: float = Field(default=10.0, gt=0, description="HTTP fetch timeout")
    rules_path: Path | None = Field(
        default=None, description="Optional JSON file overriding the normalizer rule tables"
    )

    @property
    def is_remote(self) -> bool:
        return self.location.lower().startswith(("http://", "https://"))


class FacetSettings(BaseSettings):
    """Facet count policies.

    Hey future me - older versions of the browser disagreed on both of these, so they're
    configuration, applied the same way to EVERY facet. Don't special-case single facets.
    """

    model_config = SettingsConfigDict(
        env_prefix="SONGSHELF_FACETS_",
        env_file=".env",
        extra="ignore",
    )

    count_respects_text_query: bool = Field(
        default=True, description="Include the search text when computing option counts"
    )
    hide_zero_count_options: bool = Field(
        default=False, description="Hide unselected options whose count is zero"
    )


class ObservabilitySettings(BaseSettings):
    """Logging output settings."""

    model_config = SettingsConfigDict(
        env_prefix="SONGSHELF_OBSERVABILITY_",
        env_file=".env",
        extra="ignore",
    )

    log_json_format: bool = Field(default=False, description="Emit JSON log lines")
    slow_refresh_ms: int = Field(
        default=100, ge=0, description="Warn when a refresh after an intent takes longer"
    )


class Settings(BaseSettings):
    """Top-level application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SONGSHELF_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = Field(default="songshelf")
    log_level: str = Field(default="INFO")

    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    facets: FacetSettings = Field(default_factory=FacetSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {value}")
        return level


# Listen future me, lru_cache makes this a process-wide singleton - settings are read from the
# environment ONCE. Tests that tweak env vars must call get_settings.cache_clear().
@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
