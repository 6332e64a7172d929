"""Golden test vectors — fixed key, fixed digest, externally produced signature.

The signature below was produced by an independent ECDSA implementation
(SHA256withECDSA over the 32-byte field digest, DER-encoded), so these tests
pin the wire format other services rely on.
"""

from ecsign.canonicalize import concatenate
from ecsign.crypto import KeyPair
from ecsign.hasher import digest_fields_hex
from ecsign.signature import verify, verify_hash

GOLDEN_FIELDS = ("alice", 100, True)
GOLDEN_HASH = "68e205bb8ee6977dfadc8a76d2f7bd88c2ac0c6387e8a485a2ba39e36eb94f57"
GOLDEN_SIGNATURE = (
    "304502200a525133cf62539a8ec5ef42f77b17235814b66c430cfc5e97fb07b645dde1db"
    "022100e99a2e215622b1f789c1e1aacdc1dd6f9dda4ea648d97f6fa108b8fd3c27d0b1"
)


class TestGoldenVector:
    def test_canonical_string(self):
        assert concatenate(*GOLDEN_FIELDS) == "alice100true"

    def test_hash(self):
        assert digest_fields_hex(*GOLDEN_FIELDS) == GOLDEN_HASH

    def test_external_signature_verifies(self, golden_keys):
        assert verify(golden_keys["public_pem"], GOLDEN_SIGNATURE, *GOLDEN_FIELDS) is True

    def test_external_signature_by_hash(self, golden_keys):
        assert verify_hash(golden_keys["public_hex"], GOLDEN_SIGNATURE, GOLDEN_HASH) is True

    def test_external_signature_rejects_other_fields(self, golden_keys):
        assert verify(golden_keys["public_pem"], GOLDEN_SIGNATURE, "alice", 100, False) is False

    def test_engine_level(self, golden_keys):
        kp = KeyPair.from_keys(public_key_bytes=bytes.fromhex(golden_keys["public_hex"]))
        assert kp.verify(bytes.fromhex(GOLDEN_HASH), bytes.fromhex(GOLDEN_SIGNATURE)) is True

    def test_public_key_id_is_stable(self, golden_keys):
        a = KeyPair.from_keys(public_key_bytes=bytes.fromhex(golden_keys["public_hex"]))
        b = KeyPair.from_keys(
            private_key_bytes=bytes.fromhex(golden_keys["private_hex"])
        ).with_derived_public_key()
        assert a.kid == b.kid
        assert len(a.kid) == 16
