"""Tresor - store your stuff safely."""

__version__ = "1.0.0"

from .storage import Entry, InMemoryStorage, SqliteStorage, Storage
from .vault import VaultManager

__all__ = [
    "__version__",
    "Entry",
    "Storage",
    "SqliteStorage",
    "InMemoryStorage",
    "VaultManager",
]
