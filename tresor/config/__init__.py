"""Configuration for Tresor."""

from .settings import (
    DisplayConfig,
    Settings,
    StorageConfig,
    configure,
    get_settings,
)

__all__ = [
    "Settings",
    "StorageConfig",
    "DisplayConfig",
    "get_settings",
    "configure",
]
