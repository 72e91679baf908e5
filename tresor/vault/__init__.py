"""Vault encryption module for Tresor.

Provides AES-256-GCM encryption of entry values and the store/get/delete
workflow that guards every overwrite with a successful decryption.

Usage:
    from tresor.storage import SqliteStorage
    from tresor.vault import VaultManager

    vm = VaultManager(SqliteStorage(db_path), prompt=ask_password)
    vm.store("mail", "gmail", "hunter2")
    print(vm.get("mail", "gmail"))
"""

# Exceptions
from .exceptions import (
    DecryptionError,
    EncryptionError,
    KeyNotFoundError,
    KeyTooLongError,
    VaultError,
)

# Alignment
from .alignment import (
    KEY_WIDTH,
    NONCE_WIDTH,
    align,
    align_key,
    align_nonce,
)

# Cipher
from .crypto import (
    AuthenticatedCipher,
    decrypt,
    encrypt,
)

# Workflow
from .vault_manager import (
    PasswordPrompt,
    VaultManager,
)

__all__ = [
    # Exceptions
    "VaultError",
    "EncryptionError",
    "DecryptionError",
    "KeyTooLongError",
    "KeyNotFoundError",
    # Alignment
    "KEY_WIDTH",
    "NONCE_WIDTH",
    "align",
    "align_key",
    "align_nonce",
    # Cipher
    "AuthenticatedCipher",
    "encrypt",
    "decrypt",
    # Workflow
    "PasswordPrompt",
    "VaultManager",
]
