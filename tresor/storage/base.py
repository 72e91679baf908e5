"""Abstract entry store."""

from abc import ABC, abstractmethod
from typing import Optional

from .models import Entry


class Storage(ABC):
    """
    Persists ``(bucket, key) -> value`` entries.

    Implementations keep ``(bucket, key)`` unique, so storing to an existing
    pair is an update. All failures surface as StorageError subclasses,
    except an upsert that touches other than one row, which raises
    StorageInvariantError.
    """

    @abstractmethod
    def lookup(self, bucket: str, key: str) -> Optional[Entry]:
        """Return the entry for a bucket/key pair, or None."""

    @abstractmethod
    def upsert(self, entry: Entry) -> None:
        """
        Insert the entry, or update value and modified_on if the pair exists.

        ``created_on`` of an existing row is preserved; ``modified_on`` is set
        to ``entry.timestamp``.
        """

    @abstractmethod
    def delete(self, bucket: str, key: str) -> None:
        """Remove an entry. Deleting a missing pair is not an error."""

    @abstractmethod
    def list_buckets(self) -> list[str]:
        """Distinct bucket names in lexicographic order."""

    @abstractmethod
    def list_entries(self, bucket: str) -> list[Entry]:
        """Entries of one bucket; empty list when the bucket is unknown."""

    def create_schema(self) -> None:
        """Create backing structures if they don't exist."""

    def is_initialized(self) -> bool:
        """Check if the store is ready for use."""
        return True

    def reset(self) -> None:
        """Drop all entries together with the backing structures."""

    def close(self) -> None:
        """Release any held resources."""

    def __enter__(self) -> "Storage":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
