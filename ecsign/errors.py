"""
Error taxonomy for the signing subsystem.

- ArgumentError  — caller input rejected before any cryptographic work
- InternalError  — a cryptographic primitive failed (wraps the cause)
- ProviderError  — the curve/algorithm itself is unavailable in this environment
"""

from __future__ import annotations

from typing import Optional


class SigningError(Exception):
    """Base class for every error raised by ecsign."""

    def __init__(self, message: str = "", details: Optional[list[str]] = None):
        super().__init__(message)
        self.details = details or []


class ArgumentError(SigningError, ValueError):
    """Null, empty or malformed input at a precondition."""


class InternalError(SigningError):
    """A cryptographic operation failed. Raise with ``from exc`` to keep the cause."""


class ProviderError(InternalError):
    """The crypto backend does not support the required curve or algorithm."""
