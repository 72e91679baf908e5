"""Entry model for the Tresor entry store."""

import time
from dataclasses import dataclass
from typing import Any, Optional


def current_timestamp() -> int:
    """Seconds since the epoch, truncated to whole seconds."""
    return int(time.time())


@dataclass
class Entry:
    """
    A single stored value.

    ``value`` holds base64 ciphertext whenever the entry crosses into the
    store. ``created_on`` is fixed at first insertion; ``modified_on`` is set
    by every later overwrite.
    """

    bucket: str
    key: str
    value: str
    created_on: int
    modified_on: Optional[int] = None

    @classmethod
    def new(
        cls,
        bucket: str,
        key: str,
        value: str,
        timestamp: Optional[int] = None,
    ) -> "Entry":
        """Create a fresh entry stamped with ``timestamp`` or the current time."""
        if timestamp is None:
            timestamp = current_timestamp()
        return cls(bucket=bucket, key=key, value=value, created_on=int(timestamp))

    @property
    def timestamp(self) -> int:
        """Timestamp under which the current value was written."""
        if self.modified_on is not None:
            return self.modified_on
        return self.created_on

    @property
    def salt(self) -> str:
        """Nonce salt for the current value."""
        return str(self.timestamp)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "bucket": self.bucket,
            "key": self.key,
            "value": self.value,
            "created_on": self.created_on,
            "modified_on": self.modified_on,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entry":
        """Create from dictionary (or sqlite3.Row)."""
        modified_on = data["modified_on"]
        return cls(
            bucket=str(data["bucket"]),
            key=str(data["key"]),
            value=str(data["value"]),
            created_on=int(data["created_on"]),
            modified_on=int(modified_on) if modified_on is not None else None,
        )
