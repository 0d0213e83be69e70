"""Configuration management for PomoPro CLI."""

import json
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, Field, ValidationError

from pomopro_cli.utils.logger import get_logger


class StorageConfig(BaseModel):
    """Storage configuration."""

    data_dir: Optional[str] = Field(default=None)


class TimerConfig(BaseModel):
    """Timer loop configuration."""

    tick_interval: float = Field(default=1.0, gt=0)
    auto_start_delay: float = Field(default=2.0, ge=0)


class NotificationsConfig(BaseModel):
    """Notification configuration."""

    enabled: bool = Field(default=True)


class Config(BaseModel):
    """Main configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    timer: TimerConfig = Field(default_factory=TimerConfig)
    notifications: NotificationsConfig = Field(default_factory=NotificationsConfig)


class ConfigManager:
    """Manages PomoPro CLI configuration."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir("pomopro-cli"))
        self.config_file = self.config_dir / f"{profile}.json"

        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def data_dir(self) -> Path:
        """Directory holding the store files."""
        if self.config.storage.data_dir:
            return Path(self.config.storage.data_dir).expanduser()
        return Path(user_data_dir("pomopro-cli")) / "store"

    def load_config(self) -> Config:
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r") as f:
                    data = json.load(f)
                return Config(**data)
            except (OSError, json.JSONDecodeError, TypeError, ValidationError) as e:
                get_logger().warning(
                    "Config file %s is unreadable, using defaults: %s", self.config_file, e
                )
                return Config()
        return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        with open(self.config_file, "w") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            ValueError: If the key is unknown or the value is invalid
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise ValueError(f"Unknown configuration key: {key}")
            current = current[k]
        if keys[-1] not in current or isinstance(current[keys[-1]], dict):
            raise ValueError(f"Unknown configuration key: {key}")

        current[keys[-1]] = value

        try:
            self._config = Config(**config_dict)
        except ValidationError as e:
            raise ValueError(f"Invalid value for {key}: {value!r}") from e
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration to defaults."""
        if key is None:
            self._config = Config()
        else:
            default_config = Config()
            self.set(key, self.get_from_config(default_config, key))
        self.save_config()

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        keys = key.split(".")
        value: Any = config
        for k in keys:
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
