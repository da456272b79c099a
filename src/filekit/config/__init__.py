"""Settings for filekit operations."""

from filekit.config.models import (
    FileKitSettings,
    get_settings,
    configure,
    reset_settings,
)

__all__ = [
    "FileKitSettings",
    "get_settings",
    "configure",
    "reset_settings",
]
