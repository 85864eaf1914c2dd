"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from llm_translator.domain.value_objects import (
    DEFAULT_API_ENDPOINT,
    DEFAULT_MODEL,
    ClientConfig,
)


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    translator_api_key: SecretStr
    translator_api_endpoint: str = DEFAULT_API_ENDPOINT
    translator_model: str = DEFAULT_MODEL
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    def client_config(self) -> ClientConfig:
        """Immutable connection settings handed to the transport."""
        return ClientConfig(
            api_key=self.translator_api_key.get_secret_value(),
            api_endpoint=self.translator_api_endpoint,
            model=self.translator_model,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()  # type: ignore[call-arg]
