"""Storage exceptions for the Tresor entry store.

Errors are classified by cause rather than by driver exception type, so the
caller can tell an unreachable store from a bad statement or a corrupt row.
"""

import sqlite3

MESSAGE_PREFIX = "Failed to perform operation with storage: "


class StorageError(Exception):
    """Base exception for entry store operations."""

    def __init__(self, message: str = "unknown error"):
        self.reason = message
        super().__init__(f"{MESSAGE_PREFIX}{message}")


class AccessError(StorageError):
    """Store unreachable, locked or misconfigured."""

    pass


class OperationError(StorageError):
    """Statement or parameters rejected by the store."""

    pass


class DataExtractError(StorageError):
    """A row could not be converted into an entry."""

    pass


class GenericStorageError(StorageError):
    """Any storage failure that fits no other category."""

    pass


class StorageInvariantError(RuntimeError):
    """
    Raised when an upsert affects other than exactly one row.

    This points to a broken schema or driver, not to a user mistake, and is
    intentionally not a StorageError.
    """

    pass


def classify_sqlite_error(error: sqlite3.Error) -> StorageError:
    """
    Translate a sqlite3 exception into a classified storage error.

    Args:
        error: Exception raised by the sqlite3 driver

    Returns:
        StorageError subclass carrying the driver message
    """
    message = str(error) or type(error).__name__

    # Order matters: the specific DatabaseError subclasses come first
    if isinstance(error, (sqlite3.ProgrammingError, sqlite3.NotSupportedError)):
        return OperationError(message)
    if isinstance(error, sqlite3.DataError):
        return DataExtractError(message)
    if isinstance(error, (sqlite3.OperationalError, sqlite3.IntegrityError)):
        return AccessError(message)
    if isinstance(error, sqlite3.DatabaseError):
        return AccessError(message)
    if isinstance(error, sqlite3.InterfaceError):
        return OperationError(message)
    return GenericStorageError(message)
