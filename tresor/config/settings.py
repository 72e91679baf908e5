"""Configuration settings for Tresor."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_HOME = Path.home() / ".tresor"


@dataclass
class StorageConfig:
    """Configuration for the entry store."""

    db_path: Path = field(default_factory=lambda: DEFAULT_HOME / "tresor.db")


@dataclass
class DisplayConfig:
    """Configuration for terminal output."""

    # Shown in listings for entries the given password cannot decrypt
    masked_value: str = "********"


@dataclass
class Settings:
    """Main settings container."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    @classmethod
    def from_file(cls, path: Path) -> "Settings":
        """
        Create settings from a YAML file.

        Recognised keys: db_path, masked_value, log_level, log_file.
        Unknown keys are ignored; a missing or empty file yields defaults.
        """
        settings = cls()
        path = Path(path)
        if not path.exists():
            return settings

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid settings file: {path}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Settings file must contain a mapping: {path}")

        if db_path := data.get("db_path"):
            settings.storage.db_path = Path(db_path).expanduser()

        if masked_value := data.get("masked_value"):
            settings.display.masked_value = str(masked_value)

        if log_level := data.get("log_level"):
            settings.log_level = str(log_level)

        if log_file := data.get("log_file"):
            settings.log_file = Path(log_file).expanduser()

        return settings

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Create settings from the settings file and environment variables.

        Environment variables:
            TRESOR_CONFIG: YAML settings file (default: ~/.tresor/config.yaml)
            TRESOR_DB_PATH: Database file
            TRESOR_MASKED_VALUE: Placeholder for undecryptable values
            TRESOR_LOG_LEVEL: Log level (default: WARNING)
            TRESOR_LOG_FILE: Optional log file
        """
        config_file = os.getenv("TRESOR_CONFIG")
        settings = cls.from_file(
            Path(config_file).expanduser() if config_file else DEFAULT_HOME / "config.yaml"
        )

        if db_path := os.getenv("TRESOR_DB_PATH"):
            settings.storage.db_path = Path(db_path).expanduser()

        if masked_value := os.getenv("TRESOR_MASKED_VALUE"):
            settings.display.masked_value = masked_value

        if log_level := os.getenv("TRESOR_LOG_LEVEL"):
            settings.log_level = log_level

        if log_file := os.getenv("TRESOR_LOG_FILE"):
            settings.log_file = Path(log_file).expanduser()

        return settings


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def configure(settings: Optional[Settings]) -> None:
    """Set the global settings instance (None resets to lazy loading)."""
    global _settings
    _settings = settings
