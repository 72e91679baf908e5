"""Fixed-width alignment of passwords and salts.

AES-256-GCM wants a 32-byte key and a 12-byte nonce. Passwords and salts of
arbitrary length are brought to those widths by padding them with the tail
of a public mask, or by truncating them. This is padding, not a key
derivation function: the mask is a constant and carries no secret.
"""

from typing import Union

from .exceptions import KeyTooLongError

KEY_WIDTH = 32  # 256 bits for AES-256
NONCE_WIDTH = 12  # 96 bits for AES-GCM

MASK_FILLER = b"1"
KEY_MASK = MASK_FILLER * KEY_WIDTH
NONCE_MASK = MASK_FILLER * NONCE_WIDTH


def align(value: Union[str, bytes], width: int, truncate: bool = False) -> bytes:
    """
    Pad or truncate a value to exactly ``width`` bytes.

    Args:
        value: Text (encoded as UTF-8) or raw bytes
        width: Target width in bytes
        truncate: Whether values longer than ``width`` may be shortened

    Returns:
        Exactly ``width`` bytes

    Raises:
        KeyTooLongError: If the value is too long and truncation is not allowed
    """
    if width < 0:
        raise ValueError(f"Alignment width must not be negative: {width}")
    mask = MASK_FILLER * width

    if isinstance(value, str):
        value = value.encode("utf-8")

    if len(value) == width:
        return value
    if len(value) < width:
        return value + mask[len(value):]
    if truncate:
        return value[:width]
    raise KeyTooLongError(width)


def align_key(password: Union[str, bytes]) -> bytes:
    """Align a password to the cipher key width; never truncates."""
    return align(password, KEY_WIDTH, truncate=False)


def align_nonce(salt: Union[str, bytes]) -> bytes:
    """Align a salt to the nonce width; longer salts are shortened."""
    return align(salt, NONCE_WIDTH, truncate=True)
