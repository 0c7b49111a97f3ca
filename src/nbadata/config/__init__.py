"""Configuration helpers for the provider client and local store."""

from .settings import DEFAULT_BASE_URL, Settings

__all__ = [
    "DEFAULT_BASE_URL",
    "Settings",
]
