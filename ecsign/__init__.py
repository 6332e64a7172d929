"""ecsign — secp256k1 signing, verification and encoding core."""

from .errors import ArgumentError, InternalError, ProviderError, SigningError
from .codec import (
    base64_to_bytes,
    bytes_to_base64,
    bytes_to_hex,
    decode_flexible,
    hex_to_bytes,
    is_flexible_encoding,
    normalize_pem,
)
from .canonicalize import canonical_message, concatenate
from .hasher import digest, digest_fields_hex, digest_hex, secondary_digest_hex
from .crypto import KeyPair, generate_keypair
from .signature import sign, sign_hash, verify, verify_hash
from .schema import KeyBundle

__all__ = [
    "ArgumentError",
    "InternalError",
    "ProviderError",
    "SigningError",
    "base64_to_bytes",
    "bytes_to_base64",
    "bytes_to_hex",
    "decode_flexible",
    "hex_to_bytes",
    "is_flexible_encoding",
    "normalize_pem",
    "canonical_message",
    "concatenate",
    "digest",
    "digest_fields_hex",
    "digest_hex",
    "secondary_digest_hex",
    "KeyPair",
    "generate_keypair",
    "sign",
    "sign_hash",
    "verify",
    "verify_hash",
    "KeyBundle",
]
