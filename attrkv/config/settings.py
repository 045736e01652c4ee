"""
attrkv Configuration Settings

This module contains configuration defaults for the attrkv shell.
Each can be overridden from the environment; command line flags
override the environment.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() == "true"


@dataclass
class Settings:
    """Shell configuration settings."""

    # Shell settings
    BANNER: bool = _env_flag("ATTRKV_BANNER", "true")
    PROMPT: str = os.environ.get("ATTRKV_PROMPT", "Please input command and param")

    # Protocol settings
    FIELD_SEPARATOR: str = ", "  # Between name/value pairs in GET output
    KEY_SEPARATOR: str = ","  # Between keys in SEARCH/KEYS output

    # Logging settings
    DEBUG: bool = _env_flag("ATTRKV_DEBUG", "false")
    LOG_LEVEL: str = os.environ.get("ATTRKV_LOG_LEVEL", "WARNING")


# Global settings instance
settings = Settings()
