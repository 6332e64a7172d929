"""
Elliptic-curve primitives for ecsign.

- secp256k1 key generation and reconstruction (PKCS#8 / X.509 SubjectPublicKeyInfo)
- ECDSA-with-SHA-256 signing and verification (DER signatures)
- ECIES encryption: ephemeral ECDH + HKDF-SHA256 + AES-256-GCM
- PEM export

The curve and algorithms are fixed for every participant: signatures only
interoperate when all services use identical parameters.  A KeyPair is an
immutable value; to "regenerate", build a new one with ``KeyPair.generate()``.
"""

from __future__ import annotations

import hashlib
import logging
import os
from dataclasses import dataclass
from typing import Optional

from cryptography.exceptions import InvalidSignature, InvalidTag, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
    load_der_private_key,
    load_der_public_key,
    load_pem_private_key,
    load_pem_public_key,
)

from .codec import wrap_pem
from .errors import InternalError, ProviderError

logger = logging.getLogger(__name__)

CURVE = ec.SECP256K1()
CURVE_NAME = "secp256k1"
SIGNATURE_ALGORITHM = "SHA256withECDSA"

ECIES_INFO = b"ecsign-ecies-v1"
ECIES_KEY_SIZE = 32
ECIES_NONCE_SIZE = 12
ECIES_POINT_SIZE = 65  # uncompressed X9.62 point: 0x04 || x || y


def _ecdsa() -> ec.ECDSA:
    return ec.ECDSA(hashes.SHA256())


def _derive_ecies_key(shared_secret: bytes) -> bytes:
    return HKDF(
        algorithm=hashes.SHA256(),
        length=ECIES_KEY_SIZE,
        salt=None,
        info=ECIES_INFO,
    ).derive(shared_secret)


def _spki_der(public_key: ec.EllipticCurvePublicKey) -> bytes:
    return public_key.public_bytes(Encoding.DER, PublicFormat.SubjectPublicKeyInfo)


def _key_id(public_key: Optional[ec.EllipticCurvePublicKey]) -> str:
    if public_key is None:
        return ""
    return hashlib.sha256(_spki_der(public_key)).hexdigest()[:16]


def _check_curve(key, kind: str) -> None:
    if not isinstance(key.curve, ec.SECP256K1):
        raise InternalError(
            f"Invalid {kind} key: expected {CURVE_NAME}, got {key.curve.name}"
        )


def _load_private_key(data: bytes) -> ec.EllipticCurvePrivateKey:
    try:
        if data.lstrip().startswith(b"-----"):
            key = load_pem_private_key(data, password=None)
        else:
            key = load_der_private_key(data, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise InternalError("Invalid private key") from e
    if not isinstance(key, ec.EllipticCurvePrivateKey):
        raise InternalError("Invalid private key: not an elliptic-curve key")
    _check_curve(key, "private")
    return key


def _load_public_key(data: bytes) -> ec.EllipticCurvePublicKey:
    try:
        if data.lstrip().startswith(b"-----"):
            key = load_pem_public_key(data)
        else:
            key = load_der_public_key(data)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise InternalError("Invalid public key") from e
    if not isinstance(key, ec.EllipticCurvePublicKey):
        raise InternalError("Invalid public key: not an elliptic-curve key")
    _check_curve(key, "public")
    return key


# ---------------------------------------------------------------------------
# Key pair
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class KeyPair:
    """secp256k1 key material; either half may be absent."""

    private_key: Optional[ec.EllipticCurvePrivateKey] = None
    public_key: Optional[ec.EllipticCurvePublicKey] = None
    kid: str = ""  # key identifier (hex of public key hash)

    # ── construction ────────────────────────────────────────────────────

    @classmethod
    def generate(cls) -> "KeyPair":
        """Generate a fresh secp256k1 key pair from the OS CSPRNG."""
        try:
            sk = ec.generate_private_key(CURVE)
        except UnsupportedAlgorithm as e:
            raise ProviderError(f"Curve {CURVE_NAME} is not supported by the backend") from e
        pk = sk.public_key()
        kid = _key_id(pk)
        logger.debug(f"Generated {CURVE_NAME} key pair kid={kid}")
        return cls(private_key=sk, public_key=pk, kid=kid)

    @classmethod
    def from_keys(
        cls,
        private_key_bytes: Optional[bytes] = None,
        public_key_bytes: Optional[bytes] = None,
    ) -> "KeyPair":
        """Rebuild a pair from PKCS#8 (private) and/or SPKI (public) bytes.

        DER is expected; PEM bytes are accepted too.  Nothing is installed
        unless every supplied key loads.

        Raises:
            InternalError: if supplied bytes are not a valid secp256k1 key.
        """
        sk = None if private_key_bytes is None else _load_private_key(private_key_bytes)
        pk = None if public_key_bytes is None else _load_public_key(public_key_bytes)
        return cls(private_key=sk, public_key=pk, kid=_key_id(pk))

    def with_derived_public_key(self) -> "KeyPair":
        """Return a new pair whose public half is derived from the private key."""
        if self.private_key is None:
            raise InternalError("No private key present")
        pk = self.private_key.public_key()
        return KeyPair(private_key=self.private_key, public_key=pk, kid=_key_id(pk))

    # ── introspection & export ──────────────────────────────────────────

    @property
    def has_private_key(self) -> bool:
        return self.private_key is not None

    @property
    def has_public_key(self) -> bool:
        return self.public_key is not None

    def private_key_bytes(self) -> bytes:
        """PKCS#8 DER encoding of the private key."""
        if self.private_key is None:
            raise InternalError("No private key present")
        return self.private_key.private_bytes(
            Encoding.DER, PrivateFormat.PKCS8, NoEncryption()
        )

    def public_key_bytes(self) -> bytes:
        """X.509 SubjectPublicKeyInfo DER encoding of the public key."""
        if self.public_key is None:
            raise InternalError("No public key present")
        return _spki_der(self.public_key)

    def export_private_pem(self) -> str:
        return wrap_pem(self.private_key_bytes(), "PRIVATE KEY")

    def export_public_pem(self) -> str:
        return wrap_pem(self.public_key_bytes(), "PUBLIC KEY")

    # ── signatures ──────────────────────────────────────────────────────

    def sign(self, data: bytes) -> bytes:
        """Sign *data* with ECDSA/SHA-256. Returns a DER signature."""
        if self.private_key is None:
            raise InternalError("Error signing data: no private key present")
        try:
            return self.private_key.sign(data, _ecdsa())
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise InternalError("Error signing data") from e

    def verify(self, data: bytes, signature: bytes) -> bool:
        """Verify a DER signature. Returns True if valid, False otherwise.

        Malformed signatures, wrong keys, tampered data and a missing public
        key all yield False.
        """
        if self.public_key is None:
            return False
        try:
            self.public_key.verify(signature, data, _ecdsa())
            return True
        except (InvalidSignature, ValueError, TypeError):
            return False

    # ── ECIES ───────────────────────────────────────────────────────────

    def encrypt(self, plaintext: bytes) -> bytes:
        """Encrypt for the holder of the private key.

        Output: ephemeral point (65) || nonce (12) || AES-GCM ciphertext+tag.
        """
        if self.public_key is None:
            raise InternalError("Error encrypting data: no public key present")
        try:
            ephemeral = ec.generate_private_key(CURVE)
            point = ephemeral.public_key().public_bytes(
                Encoding.X962, PublicFormat.UncompressedPoint
            )
            key = _derive_ecies_key(ephemeral.exchange(ec.ECDH(), self.public_key))
            nonce = os.urandom(ECIES_NONCE_SIZE)
            sealed = AESGCM(key).encrypt(nonce, plaintext, point)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise InternalError("Error encrypting data") from e
        return point + nonce + sealed

    def decrypt(self, ciphertext: bytes) -> bytes:
        """Reverse ``encrypt`` using the private key."""
        if self.private_key is None:
            raise InternalError("Error decrypting data: no private key present")
        header = ECIES_POINT_SIZE + ECIES_NONCE_SIZE
        if not isinstance(ciphertext, (bytes, bytearray)) or len(ciphertext) <= header:
            raise InternalError("Error decrypting data: ciphertext too short")
        point = bytes(ciphertext[:ECIES_POINT_SIZE])
        nonce = bytes(ciphertext[ECIES_POINT_SIZE:header])
        try:
            peer = ec.EllipticCurvePublicKey.from_encoded_point(CURVE, point)
            key = _derive_ecies_key(self.private_key.exchange(ec.ECDH(), peer))
            return AESGCM(key).decrypt(nonce, bytes(ciphertext[header:]), point)
        except (InvalidTag, ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise InternalError("Error decrypting data") from e


def generate_keypair() -> KeyPair:
    """Generate a fresh secp256k1 key pair."""
    return KeyPair.generate()
