"""SQLite-backed entry store."""

import sqlite3
from pathlib import Path
from typing import Optional

from ..utils.logging import get_logger
from .base import Storage
from .exceptions import (
    DataExtractError,
    StorageInvariantError,
    classify_sqlite_error,
)
from .models import Entry

logger = get_logger(__name__)


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS entries (
    id INTEGER PRIMARY KEY,
    bucket TEXT NOT NULL,
    key TEXT NOT NULL,
    value TEXT NOT NULL,
    created_on INTEGER NOT NULL,
    modified_on INTEGER,
    UNIQUE (bucket, key)
);
"""

UPSERT_SQL = """
INSERT INTO entries (bucket, key, value, created_on)
VALUES (:bucket, :key, :value, :timestamp)
ON CONFLICT (bucket, key)
DO UPDATE SET value = :value, modified_on = :timestamp
"""


class SqliteStorage(Storage):
    """Entry store kept in a single SQLite database file."""

    def __init__(self, db_path: Path):
        """
        Initialize the store.

        Args:
            db_path: Path to the database file (``":memory:"`` also works)
        """
        self.db_path = Path(db_path)
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def conn(self) -> sqlite3.Connection:
        """Get the database connection, creating if needed."""
        if self._conn is None:
            try:
                self._conn = sqlite3.connect(str(self.db_path))
            except sqlite3.Error as e:
                raise classify_sqlite_error(e) from e
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _execute(self, sql: str, params=()) -> sqlite3.Cursor:
        try:
            return self.conn.execute(sql, params)
        except sqlite3.Error as e:
            raise classify_sqlite_error(e) from e

    def _commit(self) -> None:
        try:
            self.conn.commit()
        except sqlite3.Error as e:
            raise classify_sqlite_error(e) from e

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> Entry:
        try:
            return Entry.from_dict(row)
        except (IndexError, KeyError, TypeError, ValueError) as e:
            raise DataExtractError(f"malformed entry row: {e}") from e

    # ===================
    # Lifecycle
    # ===================

    def create_schema(self) -> None:
        """Create the entries table if it doesn't exist."""
        if str(self.db_path) != ":memory:":
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self.conn.executescript(SCHEMA_SQL)
        except sqlite3.Error as e:
            raise classify_sqlite_error(e) from e
        self._commit()
        logger.debug(f"Schema ready in {self.db_path}")

    def is_initialized(self) -> bool:
        """Check if the database file exists and holds the entries table."""
        if str(self.db_path) != ":memory:" and not self.db_path.exists():
            return False
        cursor = self._execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='entries'"
        )
        return cursor.fetchone() is not None

    def reset(self) -> None:
        """Drop the entries table."""
        self._execute("DROP TABLE IF EXISTS entries")
        self._commit()
        logger.info(f"Dropped entries table in {self.db_path}")

    # ===================
    # Entry CRUD
    # ===================

    def lookup(self, bucket: str, key: str) -> Optional[Entry]:
        """Get a single entry by bucket and key."""
        cursor = self._execute(
            "SELECT * FROM entries WHERE bucket = ? AND key = ?", (bucket, key)
        )
        row = cursor.fetchone()
        if row:
            return self._row_to_entry(row)
        return None

    def upsert(self, entry: Entry) -> None:
        """Insert or update an entry in one statement."""
        cursor = self._execute(
            UPSERT_SQL,
            {
                "bucket": entry.bucket,
                "key": entry.key,
                "value": entry.value,
                "timestamp": entry.timestamp,
            },
        )
        updated = cursor.rowcount
        if updated != 1:
            self.conn.rollback()
            if updated == 0:
                raise StorageInvariantError(
                    f"failed to insert or update key {entry.key} in bucket {entry.bucket}"
                )
            raise StorageInvariantError(
                f"upsert affected {updated} rows, which indicates an inconsistent schema"
            )
        self._commit()
        logger.debug(f"Upserted {entry.bucket}/{entry.key}")

    def delete(self, bucket: str, key: str) -> None:
        """Delete an entry; a missing entry is ignored."""
        cursor = self._execute(
            "DELETE FROM entries WHERE bucket = ? AND key = ?", (bucket, key)
        )
        self._commit()
        logger.debug(f"Deleted {cursor.rowcount} row(s) for {bucket}/{key}")

    def list_buckets(self) -> list[str]:
        """Get distinct bucket names, sorted."""
        cursor = self._execute("SELECT DISTINCT bucket FROM entries ORDER BY bucket")
        return [row[0] for row in cursor.fetchall()]

    def list_entries(self, bucket: str) -> list[Entry]:
        """Get all entries of a bucket."""
        cursor = self._execute(
            "SELECT * FROM entries WHERE bucket = ? ORDER BY bucket, key", (bucket,)
        )
        return [self._row_to_entry(row) for row in cursor.fetchall()]
