"""
Short Code Generator

Random fixed-length codes over the base62 alphabet [0-9a-zA-Z], drawn from
the secrets CSPRNG. Six characters give 62^6 (about 56.8 billion) codes.

Codes are not guaranteed unique. The store's unique index rejects
duplicates and LinkService retries with a fresh code.
"""

import secrets

BASE62_CHARS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
BASE62_LENGTH = len(BASE62_CHARS)

DEFAULT_CODE_LENGTH = 6


def generate_code(length: int = DEFAULT_CODE_LENGTH) -> str:
    """
    Generate a random short code.

    Args:
        length: Number of characters (default: 6)

    Returns:
        A string of `length` base62 characters

    Raises:
        ValueError: If length is not positive
    """
    if length <= 0:
        raise ValueError(f"code length must be positive, got {length}")
    return "".join(secrets.choice(BASE62_CHARS) for _ in range(length))


def code_space_size(length: int = DEFAULT_CODE_LENGTH) -> int:
    """Number of distinct codes of the given length."""
    return BASE62_LENGTH ** length
