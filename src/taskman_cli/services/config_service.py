"""Configuration service for taskman-cli.

This module provides the ConfigService class, the single source of truth for
configuration. It handles:

- Loading and saving config.json (created with defaults on first run)
- Dot-separated get/set/reset of individual keys
- Resolving the path of the tasks data file
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from taskman_cli.models.config_models import AppConfig

APP_NAME = "taskman_cli"
TASKS_FILE_ENV = "TASKMAN_TASKS_FILE"
DEFAULT_TASKS_FILENAME = "tasks.json"


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir(APP_NAME))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir(APP_NAME))

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run: write the defaults so users can find and edit them
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        if self._config is None:
            raise RuntimeError("No configuration to save")

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self._config.model_dump_json(indent=4))
        except Exception as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name a configuration field
        """
        return self._lookup(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key and persist it.

        Raises:
            KeyError: If the key does not name a configuration field
            ValueError: If the value is rejected by validation
        """
        self._lookup(self.config, key)
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            current = current[k]
        current[keys[-1]] = value

        try:
            self._config = AppConfig.model_validate(config_dict)
        except ValidationError as e:
            raise ValueError(f"Invalid value for '{key}': {e.errors()[0]['msg']}") from e
        self.save_config()

    def reset(self, key: str | None = None) -> None:
        """Reset one key, or the whole configuration, to defaults."""
        if key is None:
            self._config = AppConfig()
            self.save_config()
            return
        self.set(key, self._lookup(AppConfig(), key))

    @staticmethod
    def _lookup(config: AppConfig, key: str) -> Any:
        value: Any = config
        for k in key.split("."):
            if not isinstance(value, BaseModel) or k not in type(value).model_fields:
                raise KeyError(f"Unknown configuration key '{key}'")
            value = getattr(value, k)
        if isinstance(value, BaseModel):
            raise KeyError(f"'{key}' is a section, not a value")
        return value

    @property
    def tasks_file(self) -> Path:
        """Path of the tasks JSON file.

        Resolution order: the TASKMAN_TASKS_FILE environment variable,
        ``storage.tasks_file`` from config.json, then the user data dir.
        """
        override = os.environ.get(TASKS_FILE_ENV)
        if override:
            return Path(override).expanduser()
        if self.config.storage.tasks_file:
            return Path(self.config.storage.tasks_file).expanduser()
        return self.data_dir / DEFAULT_TASKS_FILENAME

    def as_dict(self) -> dict[str, Any]:
        """Configuration as a plain JSON-compatible dict."""
        return json.loads(self.config.model_dump_json())


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
