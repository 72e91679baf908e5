"""Entry store for Tresor.

Usage:
    from tresor.storage import Entry, SqliteStorage

    with SqliteStorage(db_path) as storage:
        storage.create_schema()
        storage.upsert(Entry.new("bucket", "key", ciphertext))
        entry = storage.lookup("bucket", "key")
"""

from .base import Storage
from .exceptions import (
    AccessError,
    DataExtractError,
    GenericStorageError,
    OperationError,
    StorageError,
    StorageInvariantError,
    classify_sqlite_error,
)
from .memory import InMemoryStorage
from .models import Entry, current_timestamp
from .sqlite import SqliteStorage

__all__ = [
    # Model
    "Entry",
    "current_timestamp",
    # Backends
    "Storage",
    "SqliteStorage",
    "InMemoryStorage",
    # Exceptions
    "StorageError",
    "AccessError",
    "OperationError",
    "DataExtractError",
    "GenericStorageError",
    "StorageInvariantError",
    "classify_sqlite_error",
]
