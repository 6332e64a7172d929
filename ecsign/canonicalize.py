"""
Field canonicalization — turns an ordered field list into signing bytes.

Each field is rendered to its natural string form and the results are
concatenated with no separator and no type tags:

    ["alice", 100, True]  ->  "alice100true"

Rendering rules:
  1. None              -> "null"
  2. bool              -> "true" / "false"
  3. int               -> decimal digits
  4. float             -> Java Double.toString form ("100.0", "0.001", "1.0E7",
                          "1.0E-4"); NaN/Infinity rejected
  5. Decimal           -> str()
  6. str               -> unchanged
  7. Enum              -> rendering of its value
  8. bytes/bytearray   -> lowercase hex

The encoding is NOT length-prefixed: ["ab", "c"] and ["a", "bc"] both
produce "abc".  Signer and verifier must agree on field set, order and
formatting out of band.  Existing signed artifacts depend on this exact
form, so it must not be changed to a delimited encoding here.
"""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum
from typing import Any

from .errors import ArgumentError

# Double.toString uses plain notation only inside [1e-3, 1e7)
_PLAIN_MIN = 1e-3
_PLAIN_MAX = 1e7


def _float_to_str(value: float) -> str:
    """Render a finite float the way Java's Double.toString does.

    Digits are the shortest round-trip digits from repr(), e.g.
    1e7 -> "1.0E7", 1.5e-5 -> "1.5E-5", 0.25 -> "0.25".
    """
    magnitude = abs(value)
    if magnitude == 0.0 or _PLAIN_MIN <= magnitude < _PLAIN_MAX:
        # repr() is plain notation with at least one fractional digit here
        return repr(value)

    digits_tuple, exponent = Decimal(repr(magnitude)).normalize().as_tuple()[1:]
    digits = "".join(str(d) for d in digits_tuple)
    sci_exponent = exponent + len(digits) - 1
    sign = "-" if value < 0 else ""
    return f"{sign}{digits[0]}.{digits[1:] or '0'}E{sci_exponent}"


def field_to_str(value: Any) -> str:
    """Render a single field."""
    if value is None:
        return "null"
    if isinstance(value, Enum):
        return field_to_str(value.value)
    # bool is a subclass of int — check it first
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise ArgumentError("NaN/Infinity cannot be canonicalized")
        return _float_to_str(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ArgumentError("NaN/Infinity cannot be canonicalized")
        return str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    raise ArgumentError(f"Cannot canonicalize field of type {type(value).__name__}")


def concatenate(*fields: Any) -> str:
    """Return the canonical string of *fields*."""
    return "".join(field_to_str(f) for f in fields)


def canonical_message(*fields: Any) -> bytes:
    """Return the UTF-8 canonical bytes of *fields*.

    Raises:
        ArgumentError: if a field is unsupported or a string is not encodable
            (e.g. it holds a lone surrogate).
    """
    try:
        return concatenate(*fields).encode("utf-8")
    except UnicodeEncodeError as e:
        raise ArgumentError("Field text is not valid UTF-8 encodable text") from e
