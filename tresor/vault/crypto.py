"""Core cryptographic primitives for entry encryption.

Uses the cryptography library's AES-256-GCM. The key is the password aligned
to 32 bytes, the nonce is the entry salt aligned to 12 bytes. Ciphertext and
its 16-byte authentication tag travel together as standard base64 text so
they can live in a TEXT column and be printed to a terminal.
"""

import base64
import binascii
from typing import Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .alignment import align_key, align_nonce
from .exceptions import DecryptionError, EncryptionError

TAG_SIZE = 16  # 128-bit authentication tag


class AuthenticatedCipher:
    """
    AES-256-GCM bound to one (password, salt) pair.

    The same pair must be supplied to decrypt that was used to encrypt.
    Reusing a pair for two different plaintexts reuses the GCM nonce.
    """

    def __init__(self, password: str, salt: str):
        """
        Initialize with a password and a salt.

        Args:
            password: Password, at most 32 bytes once UTF-8 encoded
            salt: Per-entry salt; only its first 12 bytes are used

        Raises:
            KeyTooLongError: If the password exceeds the key width
        """
        self.aesgcm = AESGCM(align_key(password))
        self.nonce = align_nonce(salt)

    def encrypt(self, plaintext: Union[bytes, str]) -> str:
        """
        Encrypt data.

        Args:
            plaintext: Data to encrypt; text is encoded as UTF-8

        Returns:
            Base64 text of ciphertext plus tag
        """
        if isinstance(plaintext, str):
            plaintext = plaintext.encode("utf-8")
        try:
            ciphertext = self.aesgcm.encrypt(self.nonce, plaintext, None)
        except (OverflowError, ValueError) as e:
            raise EncryptionError() from e
        return base64.b64encode(ciphertext).decode("ascii")

    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt data.

        Args:
            ciphertext: Base64 text produced by ``encrypt``

        Returns:
            Decrypted plaintext
        """
        try:
            raw = base64.b64decode(ciphertext, validate=True)
            plaintext = self.aesgcm.decrypt(self.nonce, raw, None)
            return plaintext.decode("utf-8")
        except (InvalidTag, binascii.Error, ValueError, TypeError):
            raise DecryptionError() from None


def encrypt(password: str, salt: str, plaintext: Union[bytes, str]) -> str:
    """Encrypt ``plaintext`` under ``password`` with a nonce derived from ``salt``."""
    return AuthenticatedCipher(password, salt).encrypt(plaintext)


def decrypt(password: str, salt: str, ciphertext: str) -> str:
    """Decrypt base64 ``ciphertext``; raises DecryptionError on any failure."""
    return AuthenticatedCipher(password, salt).decrypt(ciphertext)
