"""Tests for centralized error handling utilities."""

import pytest

from pixelforge.utils.errors import (
    AppError,
    DecodeError,
    EncodeError,
    ErrorCategory,
    PresetError,
    RenderError,
    StorageError,
    SurfaceAllocationError,
    format_user_error,
    handle_errors,
)


class TestAppError:
    """Tests for AppError base class."""

    def test_basic_error(self):
        """Basic error creation should work."""
        error = AppError("Test error")
        assert str(error) == "Test error"
        assert error.category == ErrorCategory.RECOVERABLE
        assert error.user_message == "Test error"

    def test_error_with_category(self):
        error = AppError("Test error", category=ErrorCategory.FATAL)
        assert error.category == ErrorCategory.FATAL

    def test_error_with_original(self):
        """Error wrapping original exception should work."""
        original = ValueError("Original error")
        error = AppError("Wrapped error", original_error=original)
        assert error.original_error is original
        assert "ValueError" in str(error)


class TestRenderErrors:
    """Each render failure kind is distinguishable."""

    def test_decode_error(self):
        error = DecodeError("bad header", source="/tmp/a.jpg")
        assert isinstance(error, RenderError)
        assert error.category == ErrorCategory.PROCESSING
        assert error.source == "/tmp/a.jpg"
        assert "could not be read" in error.user_message

    def test_surface_allocation_error(self):
        error = SurfaceAllocationError("too big", width=20000, height=20000)
        assert isinstance(error, RenderError)
        assert error.category == ErrorCategory.RESOURCE
        assert (error.width, error.height) == (20000, 20000)

    def test_encode_error(self):
        error = EncodeError("no encoder", output_format="WEBP")
        assert error.category == ErrorCategory.FATAL
        assert error.output_format == "WEBP"

    def test_storage_error(self):
        error = StorageError("disk full", path="/out")
        assert error.category == ErrorCategory.FILE_IO
        assert error.path == "/out"

    def test_kinds_are_distinct(self):
        kinds = [DecodeError, SurfaceAllocationError, EncodeError, StorageError]
        for kind in kinds:
            others = [k for k in kinds if k is not kind]
            assert not any(isinstance(kind("x"), other) for other in others)

    def test_preset_error_is_not_a_render_error(self):
        error = PresetError("missing name")
        assert error.category == ErrorCategory.USER_INPUT
        assert not isinstance(error, RenderError)


class TestHandleErrorsDecorator:
    """Tests for handle_errors decorator."""

    def test_successful_function(self):
        @handle_errors(fallback_value=None)
        def successful_func():
            return "success"

        assert successful_func() == "success"

    def test_fallback_on_error(self):
        @handle_errors(fallback_value="fallback")
        def failing_func():
            raise ValueError("Test error")

        assert failing_func() == "fallback"

    def test_callable_fallback(self):
        """Decorator should support callable fallback."""
        @handle_errors(fallback_value=dict)
        def failing_func():
            raise OSError("Test error")

        assert failing_func() == {}

    def test_reraise_option(self):
        @handle_errors(fallback_value=None, reraise=True, category=ErrorCategory.FILE_IO)
        def failing_func():
            raise ValueError("Test error")

        with pytest.raises(AppError) as exc_info:
            failing_func()
        assert exc_info.value.category == ErrorCategory.FILE_IO
        assert isinstance(exc_info.value.original_error, ValueError)

    def test_app_errors_pass_through(self):
        @handle_errors(fallback_value="fallback")
        def failing_func():
            raise StorageError("nowhere to write")

        with pytest.raises(StorageError):
            failing_func()

    def test_preserves_function_metadata(self):
        @handle_errors(fallback_value=None)
        def documented_func():
            """This is a docstring."""
            return "result"

        assert documented_func.__name__ == "documented_func"
        assert "docstring" in documented_func.__doc__


class TestFormatUserError:
    """Tests for format_user_error function."""

    def test_format_app_error(self):
        error = AppError("Technical details", user_message="User friendly message")
        assert format_user_error(error) == "User friendly message"

    def test_format_app_error_with_context(self):
        error = StorageError("EACCES", user_message="Cannot save here")
        assert format_user_error(error, context="saving") == "Error saving: Cannot save here"

    def test_format_file_not_found(self):
        error = FileNotFoundError("No such file or directory: '/path/to/file'")
        result = format_user_error(error, context="loading image")
        assert "File not found" in result
        assert "loading image" in result

    def test_format_permission_denied(self):
        error = PermissionError("Permission denied: '/path/to/file'")
        assert "Permission denied" in format_user_error(error)

    def test_format_memory_error(self):
        error = MemoryError("Out of memory")
        assert "memory" in format_user_error(error).lower()

    def test_format_generic_error(self):
        result = format_user_error(RuntimeError("boom"), context="rendering")
        assert result == "Error rendering: boom"
