"""In-memory entry store, mainly for tests."""

from dataclasses import replace
from typing import Optional

from .base import Storage
from .models import Entry


class InMemoryStorage(Storage):
    """Entry store held in a dictionary for the lifetime of the object."""

    def __init__(self):
        self._entries: dict[tuple[str, str], Entry] = {}

    def lookup(self, bucket: str, key: str) -> Optional[Entry]:
        entry = self._entries.get((bucket, key))
        return replace(entry) if entry else None

    def upsert(self, entry: Entry) -> None:
        existing = self._entries.get((entry.bucket, entry.key))
        if existing is None:
            self._entries[(entry.bucket, entry.key)] = Entry(
                bucket=entry.bucket,
                key=entry.key,
                value=entry.value,
                created_on=entry.timestamp,
            )
        else:
            existing.value = entry.value
            existing.modified_on = entry.timestamp

    def delete(self, bucket: str, key: str) -> None:
        self._entries.pop((bucket, key), None)

    def list_buckets(self) -> list[str]:
        return sorted({bucket for bucket, _ in self._entries})

    def list_entries(self, bucket: str) -> list[Entry]:
        return [
            replace(self._entries[pair])
            for pair in sorted(self._entries)
            if pair[0] == bucket
        ]

    def reset(self) -> None:
        self._entries.clear()
