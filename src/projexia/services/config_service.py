"""Configuration service for managing Projexia configuration.

This module provides the ConfigService class, the single source of truth for
configuration. It handles:

- Loading and saving config.json
- Reading and writing dotted configuration keys
- Tracking the user the CLI acts as
- Building the storage strategy context from the store settings
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from projexia.exceptions import NotFoundError, NotSignedInError
from projexia.models import AppConfig, UserProfile
from projexia.models.storage_strategy import (
    LocalStorageStrategy,
    StorageStrategyContext,
)


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self, config_dir: Path | None = None):
        """Initialize the config service.

        Args:
            config_dir: Directory holding config.json (default: user config dir)
        """
        self.config_dir = config_dir or Path(user_config_dir("projexia"))
        self.config_path = self.config_dir / "config.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None
        self._storage_strategy_context: StorageStrategyContext | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def storage_strategy_context(self) -> StorageStrategyContext:
        """Get the StorageStrategyContext for the configured store."""
        if self._storage_strategy_context is None:
            strategy = LocalStorageStrategy(db_path=self.config.store.db_path)
            self._storage_strategy_context = StorageStrategyContext(strategy)
        return self._storage_strategy_context

    def load_config(self) -> AppConfig:
        """Load configuration from storage, creating defaults on first run."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
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
            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get_value(self, key: str) -> Any:
        """Get a configuration value by dotted key.

        Raises:
            KeyError: If the key is unknown
        """
        return self.config.get_value(key)

    def set_value(self, key: str, value: Any) -> Any:
        """Set a configuration value by dotted key and persist it.

        The value is validated through AppConfig, so strings like ``"5"`` are
        coerced to the field type.

        Returns:
            The stored (validated) value
        """
        self._config = self.config.with_value(key, value)
        self.save_config()
        if key.startswith("store."):
            self._storage_strategy_context = None
        return self._config.get_value(key)

    def set_current_user(self, user_id: str | None) -> None:
        """Remember the user the CLI acts as."""
        self._config = self.config.model_copy(update={"current_user_id": user_id})
        self.save_config()

    async def get_current_user(self) -> UserProfile:
        """Load the active user's profile.

        Raises:
            NotSignedInError: If no user is active or the stored one is gone
        """
        user_id = self.config.current_user_id
        if not user_id:
            raise NotSignedInError(
                "No active user. Use 'projexia account signup' or 'projexia account switch'."
            )
        try:
            return await self.storage_strategy_context.user_repository.get(user_id)
        except NotFoundError as e:
            raise NotSignedInError(
                f"Active user {user_id} no longer exists. Use 'projexia account switch'."
            ) from e


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
