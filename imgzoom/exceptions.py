"""Custom exception hierarchy for imgzoom.

Every failure of a zoom or step interaction is local to that one event: the
document text is left untouched and nothing is retried. The hierarchy lets
call sites tell "nothing to do here" apart from genuine I/O problems.

Exception Hierarchy:
    ImgzoomError (base)
    ├── ResolutionError - finding what to edit
    │   ├── UnresolvableReferenceError
    │   └── NoOwningDocumentError
    ├── EditError - computing the edit
    │   └── NoOpEditError
    ├── FileOperationError - document I/O
    │   ├── FileReadError
    │   └── FileWriteError
    ├── ProbeError - natural width lookup (retryable)
    └── ConfigurationError - settings issues

Usage:
    from imgzoom.exceptions import UnresolvableReferenceError

    try:
        params = resolve_zoom_params(element)
    except UnresolvableReferenceError:
        return False
"""

from typing import Any, Optional


class ImgzoomError(Exception):
    """Base exception for all imgzoom errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., paths, sources)
        retryable: Whether this error might succeed on retry
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Resolution Errors
# =============================================================================


class ResolutionError(ImgzoomError):
    """Base exception for locating the annotation or document to edit."""

    pass


class UnresolvableReferenceError(ResolutionError):
    """The image reference matches none of the known annotation syntaxes."""

    def __init__(
        self,
        message: str = "Unresolvable image reference",
        *,
        src: Optional[str] = None,
        **context: Any,
    ) -> None:
        if src is not None:
            context["src"] = src[:100] + "..." if len(src) > 100 else src
        super().__init__(message, **context)


class NoOwningDocumentError(ResolutionError):
    """The image element is not rendered by any open markdown pane."""

    def __init__(
        self,
        message: str = "No open document owns this image",
        *,
        src: Optional[str] = None,
        **context: Any,
    ) -> None:
        if src is not None:
            context["src"] = src
        super().__init__(message, **context)


# =============================================================================
# Edit Errors
# =============================================================================


class EditError(ImgzoomError):
    """Base exception for size computations that produce no edit."""

    pass


class NoOpEditError(EditError):
    """The requested step would cross the minimum size; the line is kept."""

    def __init__(
        self,
        message: str = "Size would drop below the minimum",
        *,
        size: Optional[int] = None,
        minimum: Optional[int] = None,
        **context: Any,
    ) -> None:
        if size is not None:
            context["size"] = size
        if minimum is not None:
            context["minimum"] = minimum
        super().__init__(message, **context)


# =============================================================================
# File Operation Errors
# =============================================================================


class FileOperationError(ImgzoomError):
    """Base exception for file operations."""

    pass


class FileReadError(FileOperationError):
    """Failed to read a document."""

    def __init__(
        self,
        message: str = "Failed to read file",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, **context)


class FileWriteError(FileOperationError):
    """Failed to write a document."""

    def __init__(
        self,
        message: str = "Failed to write file",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, **context)


# =============================================================================
# Probe Errors
# =============================================================================


class ProbeError(ImgzoomError):
    """The natural width of an image could not be determined."""

    def __init__(
        self,
        message: str = "Could not determine natural width",
        *,
        target: Optional[str] = None,
        **context: Any,
    ) -> None:
        if target:
            context["target"] = target
        super().__init__(message, retryable=True, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ImgzoomError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)
