"""Layer 0: salted SHA-256 digests.

Every hashed token in the package comes out of one of these two
functions.  The salt is a plain prefix of the hashed value.
"""

from __future__ import annotations
import hashlib


def digest(value: str, salt: str) -> str:
    """Return the lowercase hex SHA-256 of salt+value (64 chars)."""
    return hashlib.sha256((salt + value).encode("utf-8")).hexdigest()


def truncated_digest(value: str, salt: str) -> str:
    """Return the last len(value) chars of digest(value, salt).

    Tokens longer than the digest get the whole digest, so the output is
    shorter than the input in that case.  The empty string hashes to "".
    """
    full = digest(value, salt)
    if len(value) >= len(full):
        return full
    return full[len(full) - len(value):]
