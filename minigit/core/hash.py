"""Hash utilities for minigit."""

import hashlib
import string

HASH_LENGTH = 40

_HEX_DIGITS = frozenset(string.hexdigits.lower())


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.

    The digest is taken over the raw bytes, so equal content always maps
    to the same fingerprint.

    Args:
        data: Bytes to hash

    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def hash_file(filepath: str) -> str:
    """
    Compute SHA-1 hash of file.

    Args:
        filepath: Path to file

    Returns:
        40-character hex string
    """
    with open(filepath, 'rb') as f:
        return hash_object(f.read())


def is_valid_hash(value: str) -> bool:
    """Check that value is a full 40-character lowercase hex fingerprint."""
    return (
        isinstance(value, str)
        and len(value) == HASH_LENGTH
        and all(c in _HEX_DIGITS for c in value)
    )
