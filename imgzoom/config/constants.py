"""
Centralized constants for imgzoom.

Size rules for both interaction modes live here, together with the
settings ranges enforced by the preferences surface.
"""

from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "imgzoom"
SETTINGS_FILENAME = "settings.json"
LOG_FILENAME = "imgzoom.log"

# =============================================================================
# WHEEL-ZOOM SETTINGS
# =============================================================================

DEFAULT_MODIFIER_KEY = "AltLeft"
DEFAULT_STEP_SIZE = 25
DEFAULT_INITIAL_SIZE = 500

STEP_SIZE_MIN = 0
STEP_SIZE_MAX = 100

INITIAL_SIZE_MIN = 0
INITIAL_SIZE_MAX = 1000
INITIAL_SIZE_INCREMENT = 25

# Natural width lookup (seconds); falls back to the initial size when exceeded
DEFAULT_PROBE_TIMEOUT_SECONDS = 2.0

# =============================================================================
# KEYBOARD-STEP RULES
# =============================================================================

KEY_STEP = 100
KEY_GROW = KEY_STEP  # ctrl+shift+k
KEY_SHRINK = -KEY_STEP  # ctrl+shift+j
KEY_MIN_SIZE = 50  # hard floor, the edit is dropped below this
KEY_DEFAULT_SIZE = 100  # inserted on lines without an annotation

# =============================================================================
# RENDER MARKERS
# =============================================================================

REMOTE_MARKER = "http"
LOCAL_MARKER = "app://"
DRAWING_CLASS_PATTERN = r"excalidraw-svg.*"
DRAWING_SOURCE_SUFFIX_LEN = 3  # ".md"

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

ENV_VAR_DEFINITIONS = {
    "IMGZOOM_CONFIG_DIR": {
        "description": "Directory holding settings.json and imgzoom.log",
        "default": None,
        "valid_values": None,
    },
    "IMGZOOM_PROBE_TIMEOUT": {
        "description": "Seconds to wait for an image's natural width",
        "default": str(DEFAULT_PROBE_TIMEOUT_SECONDS),
        "valid_values": None,
    },
    "IMGZOOM_LOG_LEVEL": {
        "description": "Console log level",
        "default": "info",
        "valid_values": ["debug", "info", "warning", "error"],
    },
}
