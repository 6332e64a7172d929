"""
Signature facade — sign and verify by key string.

This is the surface other services call.  Keys and signatures travel as
hex, Base64 or PEM strings; fields are canonicalized by concatenation
(see ``ecsign.canonicalize``) and hashed with SHA-256 before signing.

    sig = sign(private_pem, "alice", 100, True)
    verify(public_pem, sig, "alice", 100, True)   # True

Verification is fail-closed: malformed keys, malformed signatures and
mismatched digests all return False.  Only backend failures (ProviderError)
and interpreter-level errors escape ``verify``/``verify_hash``.
"""

from __future__ import annotations

import logging
from typing import Any

from .codec import bytes_to_hex, decode_flexible, hex_to_bytes
from .crypto import KeyPair
from .errors import ArgumentError, InternalError, ProviderError
from .hasher import digest_fields_hex

logger = logging.getLogger(__name__)


def sign(private_key: str, *fields: Any) -> str:
    """Sign the canonical concatenation of *fields*. Returns a hex signature."""
    if private_key is None:
        raise ArgumentError("Private key must not be None")
    try:
        hash_hex = digest_fields_hex(*fields)
    except ArgumentError as e:
        raise InternalError("Failed to sign data") from e
    return sign_hash(private_key, hash_hex)


def sign_hash(private_key: str, hash_hex: str) -> str:
    """Sign an already computed hex digest. Returns a hex signature.

    Raises:
        ArgumentError: if *private_key* is None.
        InternalError: for any decode, key or signing failure.
    """
    if private_key is None:
        raise ArgumentError("Private key must not be None")
    try:
        keypair = KeyPair.from_keys(private_key_bytes=decode_flexible(private_key))
        return bytes_to_hex(keypair.sign(hex_to_bytes(hash_hex)))
    except (ArgumentError, InternalError) as e:
        logger.debug(f"Signing failed: {e}")
        raise InternalError("Failed to sign data") from e


def verify(public_key: str, signature: str, *fields: Any) -> bool:
    """Verify *signature* over the canonical concatenation of *fields*."""
    if public_key is None or signature is None:
        raise ArgumentError("Public key and signature must not be None")
    try:
        hash_hex = digest_fields_hex(*fields)
    except ArgumentError as e:
        logger.debug(f"Verification rejected: {e}")
        return False
    return verify_hash(public_key, signature, hash_hex)


def verify_hash(public_key: str, signature: str, hash_hex: str) -> bool:
    """Verify *signature* over a precomputed hex digest.

    Raises:
        ArgumentError: only if *public_key* or *signature* is None.
    """
    if public_key is None or signature is None:
        raise ArgumentError("Public key and signature must not be None")

    try:
        message = hex_to_bytes(hash_hex)
        public_key_bytes = decode_flexible(public_key)
        signature_bytes = decode_flexible(signature)
    except ArgumentError as e:
        logger.debug(f"Verification rejected, malformed input: {e}")
        return False

    try:
        keypair = KeyPair.from_keys(public_key_bytes=public_key_bytes)
    except ProviderError:
        raise
    except InternalError as e:
        logger.debug(f"Verification rejected, unusable public key: {e}")
        return False

    return keypair.verify(message, signature_bytes)
