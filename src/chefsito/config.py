"""
Chefsito - Configuration and settings.

Settings load from environment variables and an optional .env file.
API keys are optional at load time and checked on first use, so
offline features (ranking, parsing, cache) work without credentials.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from chefsito.errors import ConfigurationError

# Values shipped in .env.example that mean "not configured yet"
PLACEHOLDER_KEYS = {
    "your-spoonacular-key-here",
    "your_openai_api_key_here",
    "your-instacart-key-here",
}


class ChefsitoSettings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Upstream APIs
    openai_api_key: str | None = None
    spoonacular_api_key: str | None = None
    instacart_api_key: str | None = None
    instacart_use_production: bool = False

    # Application
    chefsito_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Local key/value store (cache + user settings)
    store_path: Path = Path.home() / ".chefsito" / "store.json"

    # Max 1 hour per recipe API terms of use
    recipe_cache_ttl_minutes: int = 55

    @property
    def is_development(self) -> bool:
        return self.chefsito_env == "development"

    @property
    def is_production(self) -> bool:
        return self.chefsito_env == "production"

    def require_api_key(self, name: Literal["openai", "spoonacular", "instacart"]) -> str:
        """
        Return a configured API key or fail fast.

        Raises:
            ConfigurationError: If the key is missing or still a placeholder
        """
        value = getattr(self, f"{name}_api_key")
        if not value or value.strip() in PLACEHOLDER_KEYS:
            raise ConfigurationError(
                f"{name.capitalize()} API key not configured. "
                f"Set {name.upper()}_API_KEY in the environment or .env file."
            )
        return value.strip()


@lru_cache
def get_settings() -> ChefsitoSettings:
    """Get cached settings instance."""
    return ChefsitoSettings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: ChefsitoSettings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
