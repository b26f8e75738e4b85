"""
Centralized error handling for the imgzoom CLI

This module provides:
- Rich Console panels for user-facing error messages
- Logging setup for developer diagnostics
- Consistent exit codes for command failures
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from imgzoom.config.constants import LOG_FILENAME
from imgzoom.exceptions import (
    ConfigurationError,
    EditError,
    FileOperationError,
    ImgzoomError,
    ProbeError,
    ResolutionError,
)

# Global console instance for error display
console = Console(stderr=True, force_terminal=True, color_system="auto")

# Global logger for diagnostics
logger = logging.getLogger("imgzoom")


class ErrorCategory(Enum):
    """Error categories for display"""
    RESOLUTION = "resolution"
    EDIT = "edit"
    FILE_SYSTEM = "file_system"
    NETWORK = "network"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


_CATEGORY_BY_TYPE = (
    (ResolutionError, ErrorCategory.RESOLUTION),
    (EditError, ErrorCategory.EDIT),
    (FileOperationError, ErrorCategory.FILE_SYSTEM),
    (ProbeError, ErrorCategory.NETWORK),
    (ConfigurationError, ErrorCategory.CONFIGURATION),
)

_SUGGESTIONS = {
    ErrorCategory.RESOLUTION: "Check that the image reference appears in the document as written.",
    ErrorCategory.EDIT: "The size is already at its minimum.",
    ErrorCategory.FILE_SYSTEM: "Check the file path and permissions.",
    ErrorCategory.NETWORK: "Check the image URL or raise IMGZOOM_PROBE_TIMEOUT.",
    ErrorCategory.CONFIGURATION: "Run 'imgzoom config show' to see valid settings.",
}


def categorize(error: Exception) -> ErrorCategory:
    for error_type, category in _CATEGORY_BY_TYPE:
        if isinstance(error, error_type):
            return category
    return ErrorCategory.INTERNAL


def _env_console_level() -> int:
    """Console level from IMGZOOM_LOG_LEVEL, INFO when unset or invalid."""
    from imgzoom.config.settings import get_env_var

    name = (get_env_var("IMGZOOM_LOG_LEVEL", validate=False) or "info").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None
) -> None:
    """
    Set up logging for imgzoom

    Args:
        verbose: Enable verbose (DEBUG) logging
        quiet: Disable INFO and WARNING logs to console
            (otherwise the console level comes from IMGZOOM_LOG_LEVEL)
        log_file: Optional log file path (defaults to ~/.config/imgzoom/imgzoom.log)
    """
    if verbose:
        console_level = logging.DEBUG
    elif quiet:
        console_level = logging.ERROR
    else:
        console_level = _env_console_level()

    detailed_formatter = logging.Formatter(
        '%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s'
    )
    simple_formatter = logging.Formatter('%(levelname)s: %(message)s')

    logger.handlers.clear()
    logger.setLevel(logging.DEBUG)

    if not quiet:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(simple_formatter)
        logger.addHandler(console_handler)

    if log_file is None:
        from imgzoom.config.settings import get_config_dir

        config_dir = get_config_dir()
        log_file = config_dir / LOG_FILENAME

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)
    except (PermissionError, OSError) as e:
        # Continue without a log file
        if verbose:
            console.print(f"[yellow]Warning: Could not create log file {log_file}: {e}[/yellow]")


def handle_error(
    error: Exception,
    operation: str = "unknown",
    context: Optional[Dict[str, Any]] = None,
    show_details: bool = False,
    exit_code: int = 1,
) -> None:
    """
    Log an error, show it to the user and exit

    Args:
        error: The exception to handle
        operation: Description of the operation that failed
        context: Additional context for logging
        show_details: Whether to show technical details to user
        exit_code: Exit code passed to typer.Exit
    """
    context = context or {}
    category = categorize(error)

    if isinstance(error, ImgzoomError):
        logger.error(f"{category.value}: {error.message}", extra={"operation": operation, **context})
        _display_user_error(error.message, category, error.context, show_details)
    else:
        logger.error(f"Unexpected error during {operation}: {error}", exc_info=True)
        _display_user_error(
            f"An unexpected error occurred during {operation}",
            category,
            {"original_error": str(error), "error_type": type(error).__name__},
            show_details,
        )

    raise typer.Exit(exit_code)


def _display_user_error(
    message: str,
    category: ErrorCategory,
    details: Dict[str, Any],
    show_details: bool,
) -> None:
    """Display error to user with Rich formatting"""
    text = Text()
    text.append("❌ ", style="bold")
    text.append(message, style="bold red")

    if show_details and details:
        details_text = "\n".join(f"• {k}: {v}" for k, v in details.items())
        text.append(f"\n\nDetails:\n{details_text}", style="dim red")

    suggestion = _SUGGESTIONS.get(category)
    if suggestion:
        text.append(f"\n\n💡 Suggestion: {suggestion}", style="cyan")

    panel = Panel(
        text,
        title=f"[bold]{category.value.replace('_', ' ').title()} Error[/bold]",
        title_align="left",
        border_style="red",
        padding=(0, 1)
    )

    console.print(panel)
