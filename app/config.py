"""Configuration management for the solar tracker relay."""

import logging
from typing import Any, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

from app.models.base import ControlConfig, ControlConfigUpdate

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080


class Settings(BaseSettings):
    """Application settings."""

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    ws_path: str = "/ws"
    public_dir: str = "public"
    fake_data_interval: float = 0.1
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @field_validator("port", mode="before")
    @classmethod
    def fallback_port(cls, value: Any) -> Any:
        """Use the default port when PORT is empty or not a number."""
        try:
            return int(str(value).strip())
        except (TypeError, ValueError):
            return DEFAULT_PORT


settings = Settings()


class ConfigStore:
    """Owns the single shared control configuration.

    The stored value is an immutable snapshot; every merge replaces it
    with a new one, so callers may keep the result of ``current()``.
    """

    def __init__(self, initial: Optional[ControlConfig] = None):
        self._config = initial or ControlConfig()

    def current(self) -> ControlConfig:
        """Get the live configuration."""
        return self._config

    def merge(self, update: ControlConfigUpdate) -> ControlConfig:
        """Override each field present in ``update`` and return the new value.

        Nested objects are replaced wholesale: a new ``manual_orientation``
        is never combined with the stored one.
        """
        changes = {
            name: getattr(update, name)
            for name in update.model_fields_set
            if name in ControlConfig.model_fields and getattr(update, name) is not None
        }
        if changes:
            self._config = self._config.model_copy(update=changes)
            logger.debug(f"Control config merged: {sorted(changes)}")
        return self._config
