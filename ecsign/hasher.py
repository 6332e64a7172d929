"""
Digest utilities.

- SHA-256 (primary, 32 bytes) — the digest every signature is computed over
- SHA3-256 (secondary) — content identifiers that must not collide with SHA-256 ids

No keys, no salt: identical input always yields an identical digest.
"""

from __future__ import annotations

import hashlib
from typing import Any, BinaryIO, Iterable, Union

from .canonicalize import canonical_message
from .errors import ProviderError

PRIMARY_ALGORITHM = "sha256"
SECONDARY_ALGORITHM = "sha3_256"
DIGEST_SIZE = 32
_BLOCK_SIZE = 64 * 1024



def _check_algorithms() -> None:
    for name in (PRIMARY_ALGORITHM, SECONDARY_ALGORITHM):
        if name not in hashlib.algorithms_available:
            raise ProviderError(f"Hash algorithm {name} is not available")


# Fail at import, not per call, if the interpreter's hashlib lacks either one.
_check_algorithms()


def digest(data: bytes) -> bytes:
    """SHA-256 of *data*."""
    return hashlib.sha256(data).digest()


def digest_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def secondary_digest(data: bytes) -> bytes:
    """SHA3-256 of *data*."""
    return hashlib.sha3_256(data).digest()


def secondary_digest_hex(data: bytes) -> str:
    return hashlib.sha3_256(data).hexdigest()


def digest_stream(source: Union[BinaryIO, Iterable[bytes]]) -> bytes:
    """SHA-256 over a binary file object or an iterable of byte chunks.

    File objects are read in 64 KiB blocks so arbitrarily large inputs never
    need to be held in memory at once.
    """
    h = hashlib.sha256()
    if hasattr(source, "read"):
        for block in iter(lambda: source.read(_BLOCK_SIZE), b""):
            h.update(block)
    else:
        for chunk in source:
            h.update(chunk)
    return h.digest()


def digest_fields(*fields: Any) -> bytes:
    """SHA-256 of the canonical message of *fields*."""
    return digest(canonical_message(*fields))


def digest_fields_hex(*fields: Any) -> str:
    return digest_hex(canonical_message(*fields))
