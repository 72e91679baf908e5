"""Vault manager for the entry lifecycle.

Couples the cipher to the entry store. Being able to decrypt an entry's
current value is the only proof that a caller may overwrite or delete it,
so every destructive operation decrypts first and aborts on failure.
"""

import time
from dataclasses import replace
from typing import Callable

from ..storage import Entry, Storage
from ..utils.logging import get_logger
from .crypto import decrypt, encrypt
from .exceptions import DecryptionError, KeyNotFoundError

logger = get_logger(__name__)

PasswordPrompt = Callable[[str], str]

DEFAULT_MASKED_VALUE = "********"


class VaultManager:
    """
    Store, retrieve, delete and list encrypted entries.

    Passwords are never passed in; they are requested through ``prompt``
    exactly when an operation needs them.

    Usage:
        vm = VaultManager(SqliteStorage(db_path), prompt=ask_password)
        vm.store("mail", "gmail", "hunter2")
        value = vm.get("mail", "gmail")
    """

    def __init__(
        self,
        storage: Storage,
        prompt: PasswordPrompt,
        clock: Callable[[], float] = time.time,
        masked_value: str = DEFAULT_MASKED_VALUE,
    ):
        """
        Initialize vault manager.

        Args:
            storage: Entry store handle, owned by the caller
            prompt: Callable returning a password for a prompt message
            clock: Source of the current time in seconds
            masked_value: Placeholder for entries that fail to decrypt in listings
        """
        self.storage = storage
        self.prompt = prompt
        self.clock = clock
        self.masked_value = masked_value

    def _now(self) -> int:
        return int(self.clock())

    def _require(self, bucket: str, key: str) -> Entry:
        entry = self.storage.lookup(bucket, key)
        if entry is None:
            raise KeyNotFoundError(bucket, key)
        return entry

    @staticmethod
    def verify(entry: Entry, password: str) -> str:
        """
        Decrypt an entry's current value.

        Returns:
            The plaintext

        Raises:
            DecryptionError: If the password does not decrypt the entry
        """
        return decrypt(password, entry.salt, entry.value)

    def store(self, bucket: str, key: str, value: str) -> Entry:
        """
        Encrypt and store a value.

        A new pair asks for one password. An existing pair first asks for the
        password of the current value and refuses to continue unless it
        decrypts; only then is a (possibly different) new password requested.

        Returns:
            The persisted entry, holding ciphertext

        Raises:
            DecryptionError: If the current value of an existing entry cannot be decrypted
            KeyTooLongError: If a password exceeds the key width
        """
        if not bucket or not key:
            raise ValueError("Bucket and key must not be empty")

        existing = self.storage.lookup(bucket, key)

        if existing is None:
            password = self.prompt("Password")
            timestamp = self._now()
        else:
            current_password = self.prompt("Current password")
            try:
                self.verify(existing, current_password)
            except DecryptionError:
                logger.warning(f"Refusing to overwrite {bucket}/{key}: verification failed")
                raise
            password = self.prompt("New password")
            # A fresh salt per write; never at or before the previous one
            timestamp = max(self._now(), existing.timestamp + 1)

        entry = Entry.new(bucket, key, "", timestamp)
        entry.value = encrypt(password, entry.salt, value)
        self.storage.upsert(entry)

        if existing is None:
            logger.info(f"Stored new entry {bucket}/{key}")
            return entry
        logger.info(f"Overwrote entry {bucket}/{key}")
        return replace(entry, created_on=existing.created_on, modified_on=timestamp)

    def get(self, bucket: str, key: str) -> str:
        """
        Decrypt and return a stored value.

        Raises:
            KeyNotFoundError: If the pair does not exist
            DecryptionError: If the password is wrong
        """
        entry = self._require(bucket, key)
        password = self.prompt("Password")
        value = self.verify(entry, password)
        logger.debug(f"Decrypted {bucket}/{key}")
        return value

    def delete(self, bucket: str, key: str) -> None:
        """
        Delete an entry after proving the password decrypts it.

        Raises:
            KeyNotFoundError: If the pair does not exist
            DecryptionError: If the password is wrong; nothing is deleted
        """
        entry = self._require(bucket, key)
        password = self.prompt("Password")
        self.verify(entry, password)
        self.storage.delete(bucket, key)
        logger.info(f"Deleted entry {bucket}/{key}")

    def list_buckets(self) -> list[str]:
        """Sorted names of all buckets."""
        return self.storage.list_buckets()

    def list_entries(self, bucket: str) -> list[Entry]:
        """
        Entries of a bucket with values decrypted under one password.

        Entries the password cannot decrypt keep their place in the list with
        ``masked_value`` instead of a value. An empty bucket returns an empty
        list without prompting.
        """
        entries = self.storage.list_entries(bucket)
        if not entries:
            return []

        password = self.prompt("Password")
        revealed: list[Entry] = []
        masked = 0
        for entry in entries:
            try:
                value = self.verify(entry, password)
            except DecryptionError:
                value = self.masked_value
                masked += 1
            revealed.append(replace(entry, value=value))

        logger.debug(f"Listed {len(revealed)} entries in {bucket} ({masked} masked)")
        return revealed

