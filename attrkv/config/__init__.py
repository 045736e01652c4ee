"""Configuration module for attrkv."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
