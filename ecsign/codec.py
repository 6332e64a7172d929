"""
Encoding utilities — bytes ↔ hexadecimal / Base64 / PEM.

Keys and signatures reach this package as strings in one of three shapes:

  1. Hexadecimal, optionally ``0x``-prefixed
  2. Standard Base64 (with padding)
  3. PEM: Base64 wrapped in ``-----BEGIN ...-----`` / ``-----END ...-----``

``decode_flexible`` strips PEM armour and then sniffs the payload.  Hex is
tried before Base64, so a short string that is valid in both alphabets
(``"abcd"``) always decodes as hex.  Protocol peers depend on that precedence.

All functions are pure; errors propagate as ArgumentError.
"""

from __future__ import annotations

import base64
import binascii
import re

from .errors import ArgumentError

_HEX_RE = re.compile(r"[0-9a-fA-F]+")
_BASE64_RE = re.compile(
    r"(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?"
)
_PEM_ARMOUR_RE = re.compile(r"-----(?:BEGIN|END)[^-]*-----")

# Literal tokens removed after the armour lines, in order.
_PEM_TOKENS = ("-BEGIN", "-END", " PRIVATE", " PUBLIC", "PRIVATE", "PUBLIC", "KEY-")


def _strip_hex_prefix(text: str) -> str:
    if text[:2] in ("0x", "0X"):
        return text[2:]
    return text


# ---------------------------------------------------------------------------
# Hexadecimal
# ---------------------------------------------------------------------------

def bytes_to_hex(data: bytes) -> str:
    """Lowercase hex, no prefix."""
    return bytes(data).hex()


def hex_to_bytes(text: str) -> bytes:
    """Decode a hex string, accepting an optional ``0x`` prefix.

    Raises:
        ArgumentError: for ``None``, non-hex characters, or odd length.
    """
    if not isinstance(text, str):
        raise ArgumentError("Hexadecimal input must be a string")
    body = _strip_hex_prefix(text.strip())
    if not body:
        return b""
    if not _HEX_RE.fullmatch(body):
        raise ArgumentError(f"Invalid hexadecimal input: {body[:32]!r}")
    if len(body) % 2:
        raise ArgumentError(
            f"Hexadecimal input must have even length, got {len(body)}"
        )
    return bytes.fromhex(body)


# ---------------------------------------------------------------------------
# Base64
# ---------------------------------------------------------------------------

def bytes_to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def base64_to_bytes(text: str) -> bytes:
    """Strictly decode standard Base64.

    Raises:
        ArgumentError: for ``None`` or an invalid alphabet/padding.
    """
    if not isinstance(text, str):
        raise ArgumentError("Base64 input must be a string")
    if not text:
        return b""
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ArgumentError(f"Invalid Base64 input: {text[:32]!r}") from e


def hex_to_base64(text: str) -> str:
    return bytes_to_base64(hex_to_bytes(text))


def base64_to_hex(text: str) -> str:
    return bytes_to_hex(base64_to_bytes(text))


# ---------------------------------------------------------------------------
# PEM and flexible decoding
# ---------------------------------------------------------------------------

def normalize_pem(text: str) -> str:
    """Strip PEM armour, key-type tokens, dashes and whitespace.

    >>> normalize_pem("-----BEGIN PUBLIC KEY-----\\nAAAA\\n-----END PUBLIC KEY-----")
    'AAAA'
    """
    out = _PEM_ARMOUR_RE.sub("", text.strip())
    for token in _PEM_TOKENS:
        out = out.replace(token, "")
    out = out.replace("-", "")
    return "".join(out.split())


def wrap_pem(data: bytes, label: str) -> str:
    """Wrap *data* as single-line Base64 between PEM header and footer."""
    return (
        f"-----BEGIN {label}-----\n"
        f"{bytes_to_base64(data)}\n"
        f"-----END {label}-----"
    )


def _classify(text: str) -> tuple[str, str]:
    """Return ``(kind, payload)`` where kind is "hex", "base64" or ""."""
    payload = normalize_pem(text)
    hex_body = _strip_hex_prefix(payload)
    if hex_body and _HEX_RE.fullmatch(hex_body):
        return "hex", hex_body
    if payload and _BASE64_RE.fullmatch(payload):
        return "base64", payload
    return "", payload


def decode_flexible(text: str) -> bytes:
    """Decode hex, Base64 or PEM-wrapped Base64 into raw bytes.

    Raises:
        ArgumentError: if *text* is None/blank or neither hex nor Base64.
    """
    if not isinstance(text, str) or not text.strip():
        raise ArgumentError("Invalid input: must be a non-empty string")
    kind, payload = _classify(text)
    if kind == "hex":
        return hex_to_bytes(payload)
    if kind == "base64":
        return base64_to_bytes(payload)
    raise ArgumentError("Invalid input: not a valid hexadecimal or Base64 string")


def is_flexible_encoding(text: str) -> bool:
    """True when ``decode_flexible`` would classify *text* as hex or Base64."""
    if not isinstance(text, str) or not text.strip():
        return False
    kind, _ = _classify(text)
    return bool(kind)
