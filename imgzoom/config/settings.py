"""
imgzoom settings.

Handles persistence of the wheel-zoom preferences: which modifier key
activates zooming, the step per wheel tick and the size given to images
that have no annotation yet. Settings are stored in
~/.config/imgzoom/settings.json (or $IMGZOOM_CONFIG_DIR/settings.json) with
camelCase keys (modifierKey, stepSize, initialSize).
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from imgzoom.exceptions import ConfigurationError

from .constants import (
    DEFAULT_CONFIG_DIR,
    DEFAULT_INITIAL_SIZE,
    DEFAULT_MODIFIER_KEY,
    DEFAULT_PROBE_TIMEOUT_SECONDS,
    DEFAULT_STEP_SIZE,
    ENV_VAR_DEFINITIONS,
    INITIAL_SIZE_INCREMENT,
    INITIAL_SIZE_MAX,
    INITIAL_SIZE_MIN,
    SETTINGS_FILENAME,
    STEP_SIZE_MAX,
    STEP_SIZE_MIN,
)

logger = logging.getLogger(__name__)


class ModifierKey(Enum):
    """Key that must be held for the wheel to zoom.

    Values are physical key codes as reported by keydown events.
    """

    ALT = "AltLeft"
    CTRL = "ControlLeft"
    SHIFT = "ShiftLeft"

    @property
    def flag(self) -> str:
        """Name of the matching modifier flag on input events."""
        return {
            ModifierKey.ALT: "alt",
            ModifierKey.CTRL: "ctrl",
            ModifierKey.SHIFT: "shift",
        }[self]

    @property
    def label(self) -> str:
        return self.name.title()

    @classmethod
    def parse(cls, value: str) -> "ModifierKey":
        """Accept either a key code ("AltLeft") or a label ("alt")."""
        for member in cls:
            if value == member.value or value.lower() == member.name.lower():
                return member
        raise ConfigurationError(
            f"Unknown modifier key '{value}'",
            setting="modifierKey",
            valid=[m.label for m in cls],
        )


@dataclass
class Settings:
    """Wheel-zoom preferences."""

    modifier_key: ModifierKey = ModifierKey(DEFAULT_MODIFIER_KEY)
    step_size: int = DEFAULT_STEP_SIZE
    initial_size: int = DEFAULT_INITIAL_SIZE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "modifierKey": self.modifier_key.value,
            "stepSize": self.step_size,
            "initialSize": self.initial_size,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Build settings from persisted data, filling gaps with defaults.

        Values are taken as stored; range checks belong to the preferences
        surface (see validate_setting).
        """
        merged = {**cls().to_dict(), **data}
        return cls(
            modifier_key=ModifierKey.parse(str(merged["modifierKey"])),
            step_size=int(merged["stepSize"]),
            initial_size=int(merged["initialSize"]),
        )


# Persisted key -> attribute name
SETTING_KEYS = {
    "modifierKey": "modifier_key",
    "stepSize": "step_size",
    "initialSize": "initial_size",
}


def get_config_dir() -> Path:
    """Get the imgzoom config directory, respecting IMGZOOM_CONFIG_DIR."""
    override = os.environ.get("IMGZOOM_CONFIG_DIR")
    if override:
        return Path(override)
    return DEFAULT_CONFIG_DIR


def get_settings_path() -> Path:
    """
    Get path to the settings file.

    Returns:
        Path to settings.json inside the config directory
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir / SETTINGS_FILENAME


def load_settings() -> Settings:
    """
    Load settings from file.

    Returns:
        Settings, or defaults if the file doesn't exist or is invalid
    """
    path = get_settings_path()
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text())
        if not isinstance(data, dict):
            raise ValueError("settings file must hold a JSON object")
        return Settings.from_dict(data)
    except (json.JSONDecodeError, OSError, ValueError, ConfigurationError) as e:
        logger.warning("Ignoring unreadable settings at %s: %s", path, e)
        return Settings()


def save_settings(settings: Settings) -> None:
    """
    Save settings to file.

    Args:
        settings: Settings to persist
    """
    path = get_settings_path()
    path.write_text(json.dumps(settings.to_dict(), indent=2) + "\n")
    logger.debug("Saved settings to %s", path)


def validate_setting(key: str, value: Any) -> Any:
    """Coerce and range-check one setting as the preferences surface would.

    Args:
        key: Persisted key (modifierKey, stepSize or initialSize)
        value: Raw value, typically a string from the command line

    Returns:
        The coerced value ready to store on Settings

    Raises:
        ConfigurationError: If the key is unknown or the value out of range
    """
    if key not in SETTING_KEYS:
        raise ConfigurationError(
            f"Unknown setting '{key}'", setting=key, valid=list(SETTING_KEYS)
        )

    if key == "modifierKey":
        if isinstance(value, ModifierKey):
            return value
        return ModifierKey.parse(str(value))

    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{key} must be an integer", setting=key, value=value) from e

    if key == "stepSize":
        if not STEP_SIZE_MIN <= number <= STEP_SIZE_MAX:
            raise ConfigurationError(
                f"stepSize must be between {STEP_SIZE_MIN} and {STEP_SIZE_MAX}",
                setting=key,
                value=number,
            )
        return number

    if not INITIAL_SIZE_MIN <= number <= INITIAL_SIZE_MAX:
        raise ConfigurationError(
            f"initialSize must be between {INITIAL_SIZE_MIN} and {INITIAL_SIZE_MAX}",
            setting=key,
            value=number,
        )
    if number % INITIAL_SIZE_INCREMENT:
        raise ConfigurationError(
            f"initialSize must be a multiple of {INITIAL_SIZE_INCREMENT}",
            setting=key,
            value=number,
        )
    return number


def update_setting(key: str, value: Any) -> Settings:
    """
    Set and persist a single setting.

    Args:
        key: Persisted key (modifierKey, stepSize or initialSize)
        value: New value

    Returns:
        The updated settings
    """
    coerced = validate_setting(key, value)
    settings = load_settings()
    setattr(settings, SETTING_KEYS[key], coerced)
    save_settings(settings)
    return settings


def reset_settings() -> Settings:
    """Restore and persist the default settings."""
    settings = Settings()
    save_settings(settings)
    return settings


# =============================================================================
# Environment variables
# =============================================================================


def validate_env_var(name: str, value: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Validate a single environment variable value.

    Args:
        name: The environment variable name.
        value: The current value (or None if not set).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if name not in ENV_VAR_DEFINITIONS:
        return True, None

    valid_values = ENV_VAR_DEFINITIONS[name].get("valid_values")
    if value is None or valid_values is None:
        return True, None

    if value.lower() not in [v.lower() for v in valid_values]:
        return False, f"Invalid value '{value}' for {name}. Valid values: {valid_values}"

    return True, None


def validate_all_env_vars() -> List[str]:
    """Validate all imgzoom environment variables.

    Returns:
        List of error messages (empty if all valid).
    """
    errors = []
    for name in ENV_VAR_DEFINITIONS:
        is_valid, error = validate_env_var(name, os.environ.get(name))
        if not is_valid:
            errors.append(error)
    return errors


def get_env_var(name: str, validate: bool = True) -> Optional[str]:
    """Get an environment variable with optional validation.

    Raises:
        ConfigurationError: If validate=True and the value is invalid.
    """
    value = os.environ.get(name)

    if validate and value is not None:
        is_valid, error = validate_env_var(name, value)
        if not is_valid:
            raise ConfigurationError(error, setting=name)

    if value is None and name in ENV_VAR_DEFINITIONS:
        return ENV_VAR_DEFINITIONS[name].get("default")

    return value


def get_probe_timeout() -> float:
    """Seconds allowed for a natural width lookup."""
    raw = get_env_var("IMGZOOM_PROBE_TIMEOUT")
    try:
        return float(raw) if raw is not None else DEFAULT_PROBE_TIMEOUT_SECONDS
    except ValueError as e:
        raise ConfigurationError(
            "IMGZOOM_PROBE_TIMEOUT must be a number", setting="IMGZOOM_PROBE_TIMEOUT", value=raw
        ) from e
