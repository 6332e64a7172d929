"""
ecsign key bundle — Pydantic v2 model for persisting a key pair as PEM text.

Where the bundle is stored (file, vault, config service) is up to the caller.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from .codec import decode_flexible
from .crypto import CURVE_NAME, KeyPair


class KeyBundle(BaseModel):
    schema_version: str = "ecsign/1.0"
    curve: str = CURVE_NAME
    kid: str  # key identifier (hex of public key hash)
    public_key_pem: str
    private_key_pem: Optional[str] = None  # omitted when sharing the public half
    created_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    @classmethod
    def from_keypair(cls, keypair: KeyPair, include_private: bool = True) -> "KeyBundle":
        return cls(
            kid=keypair.kid,
            public_key_pem=keypair.export_public_pem(),
            private_key_pem=(
                keypair.export_private_pem()
                if include_private and keypair.has_private_key
                else None
            ),
        )

    def to_keypair(self) -> KeyPair:
        """Rebuild the KeyPair (InternalError/ArgumentError on bad PEM)."""
        private_bytes = (
            decode_flexible(self.private_key_pem) if self.private_key_pem else None
        )
        return KeyPair.from_keys(
            private_key_bytes=private_bytes,
            public_key_bytes=decode_flexible(self.public_key_pem),
        )

    def public_only(self) -> "KeyBundle":
        return self.model_copy(update={"private_key_pem": None})
