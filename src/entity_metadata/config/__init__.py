"""Configuration management for entity-metadata.

Usage:
    >>> from entity_metadata.config import get_settings
    >>> settings = get_settings()
    >>> settings.freeze_on_bootstrap
    True
"""

from entity_metadata.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
