"""Configuration for imgzoom."""

from .settings import (
    ModifierKey,
    Settings,
    load_settings,
    reset_settings,
    save_settings,
    update_setting,
)

__all__ = [
    "ModifierKey",
    "Settings",
    "load_settings",
    "reset_settings",
    "save_settings",
    "update_setting",
]
