"""Tests for the imgzoom exception hierarchy."""

import pytest

from imgzoom.exceptions import (
    ConfigurationError,
    EditError,
    FileOperationError,
    FileReadError,
    ImgzoomError,
    NoOpEditError,
    NoOwningDocumentError,
    ProbeError,
    ResolutionError,
    UnresolvableReferenceError,
)


class TestHierarchy:
    """Test the exception class hierarchy."""

    @pytest.mark.parametrize(
        "error_class, parent",
        [
            (UnresolvableReferenceError, ResolutionError),
            (NoOwningDocumentError, ResolutionError),
            (NoOpEditError, EditError),
            (FileReadError, FileOperationError),
            (ResolutionError, ImgzoomError),
            (EditError, ImgzoomError),
            (ProbeError, ImgzoomError),
            (ConfigurationError, ImgzoomError),
        ],
    )
    def test_subclass(self, error_class, parent):
        assert issubclass(error_class, parent)

    def test_builtin_not_shadowed(self):
        assert not issubclass(ResolutionError, ReferenceError)


class TestMessages:
    """Test message and context formatting."""

    def test_plain_message(self):
        error = ImgzoomError("Something broke")
        assert str(error) == "Something broke"
        assert error.context == {}
        assert error.retryable is False

    def test_context_in_message(self):
        error = NoOpEditError(size=20, minimum=50)
        assert str(error) == "Size would drop below the minimum (size=20, minimum=50)"

    def test_long_source_is_truncated(self):
        error = UnresolvableReferenceError(src="x" * 150)
        assert error.context["src"] == "x" * 100 + "..."

    def test_probe_errors_are_retryable(self):
        error = ProbeError(target="https://example.com/a.png")
        assert error.retryable is True
        assert "https://example.com/a.png" in str(error)

    def test_configuration_setting(self):
        error = ConfigurationError("bad", setting="stepSize")
        assert error.context == {"setting": "stepSize"}
