"""
CLI configuration.

Values come from environment variables with the ``ECSIGN_`` prefix and can be
overridden by command-line options.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "ECSIGN_"


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    log_level: str = "WARNING"

    # Default keys: literal hex/Base64/PEM text or a path to a key file
    private_key: Optional[str] = None
    public_key: Optional[str] = None


def load_config_from_env() -> CLIConfig:
    """Load configuration from environment variables."""
    config = CLIConfig()

    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "WARNING").upper()
    if os.getenv(f"{ENV_PREFIX}PRIVATE_KEY"):
        config.private_key = os.getenv(f"{ENV_PREFIX}PRIVATE_KEY")
    if os.getenv(f"{ENV_PREFIX}PUBLIC_KEY"):
        config.public_key = os.getenv(f"{ENV_PREFIX}PUBLIC_KEY")

    return config
