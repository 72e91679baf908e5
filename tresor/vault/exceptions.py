"""Vault exceptions for Tresor encryption and entry workflow."""


class VaultError(Exception):
    """Base exception for vault operations."""

    pass


class EncryptionError(VaultError):
    """Raised when a value cannot be encrypted."""

    def __init__(self, message: str = "Encryption error."):
        super().__init__(message)


class DecryptionError(VaultError):
    """
    Raised when a value cannot be decrypted.

    Deliberately opaque: wrong password, tampered ciphertext and malformed
    encoding all look the same to the caller.
    """

    def __init__(self, message: str = "Decryption error."):
        super().__init__(message)


class KeyTooLongError(VaultError):
    """Raised when a password does not fit into the cipher key width."""

    def __init__(self, width: int):
        self.width = width
        super().__init__(
            f"Invalid key error: length must be at most {width} bytes. "
            "Please use a shorter password."
        )


class KeyNotFoundError(VaultError):
    """Raised when no entry exists for a bucket/key pair."""

    def __init__(self, bucket: str, key: str):
        self.bucket = bucket
        self.key = key
        super().__init__(f"Key '{key}' not found in bucket '{bucket}'.")
