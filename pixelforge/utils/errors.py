# Error types and error-handling helpers
"""
Exceptions raised by the engine and the helpers that report them.

Every exception carries an ``ErrorCategory`` and a short ``user_message``
suitable for the command line. A single render fails with exactly one of
the four ``RenderError`` kinds:

- ``DecodeError``: the source is missing, unreadable or not an image
- ``SurfaceAllocationError``: no pixel buffer of the source size
- ``EncodeError``: the output format is unsupported or encoding failed
- ``StorageError``: no writable destination, or the write failed

Preset payload problems raise ``PresetError``, which is not a render failure.
"""

import functools
from enum import Enum
from typing import Any, Callable, Optional, TypeVar, Union

from .logger import get_logger

logger = get_logger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


class ErrorCategory(Enum):
    """Categories of errors for consistent handling."""
    RECOVERABLE = "recoverable"      # Caller can continue with a fallback
    USER_INPUT = "user_input"        # Bad preset payload or argument
    FILE_IO = "file_io"              # Store or output file problems
    PROCESSING = "processing"        # Source could not be decoded
    RESOURCE = "resource"            # Pixel surface could not be allocated
    CONFIGURATION = "configuration"  # Settings/config errors
    FATAL = "fatal"                  # Encoding failed; retrying will not help


class AppError(Exception):
    """Base exception; subclasses set ``category`` and ``default_user_message``."""

    category = ErrorCategory.RECOVERABLE
    default_user_message: Optional[str] = None

    def __init__(
        self,
        message: str,
        category: Optional[ErrorCategory] = None,
        original_error: Optional[Exception] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        if category is not None:
            self.category = category
        self.original_error = original_error
        self.user_message = user_message or self.default_user_message or message

    @property
    def message(self) -> str:
        return self.args[0]

    def __str__(self) -> str:
        if self.original_error is None:
            return self.message
        return f"{self.message} (caused by: {type(self.original_error).__name__})"


class RenderError(AppError):
    """One render call failed; see the subclasses for the stage."""


class DecodeError(RenderError):
    category = ErrorCategory.PROCESSING
    default_user_message = "The image could not be read. It may be corrupt or unsupported."

    def __init__(self, message: str, source: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.source = source


class SurfaceAllocationError(RenderError):
    category = ErrorCategory.RESOURCE
    default_user_message = "Not enough memory to render this image. Try again later."

    def __init__(self, message: str, width: int = 0, height: int = 0, **kwargs):
        super().__init__(message, **kwargs)
        self.width = width
        self.height = height


class EncodeError(RenderError):
    category = ErrorCategory.FATAL

    def __init__(self, message: str, output_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.output_format = output_format


class StorageError(RenderError):
    category = ErrorCategory.FILE_IO
    default_user_message = "The output could not be saved. Choose another location or free some space."

    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.path = path


class PresetError(AppError):
    """A preset, filter or clipboard payload is missing fields or has bad values."""
    category = ErrorCategory.USER_INPUT


def handle_errors(
    fallback_value: Any = None,
    category: ErrorCategory = ErrorCategory.RECOVERABLE,
    log_level: str = "warning",
    reraise: bool = False,
    user_message: Optional[str] = None,
) -> Callable[[F], F]:
    """
    Decorator that logs unexpected exceptions and substitutes a fallback.

    AppError subclasses propagate untouched. Anything else is logged under
    ``category`` and then either wrapped in an AppError (``reraise=True``)
    or replaced by ``fallback_value``, which is called on each failure if it
    is callable.

    Example:
        @handle_errors(fallback_value=dict, category=ErrorCategory.FILE_IO)
        def read_store(path):
            ...
    """
    log = getattr(logger, log_level, logger.warning)

    def decorator(func: F) -> F:
        where = f"{func.__module__}.{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except AppError:
                raise
            except Exception as e:
                log("%s failed in %s: %s", category.value, where, e)
                if reraise:
                    raise AppError(str(e), category=category, original_error=e, user_message=user_message) from e
                return fallback_value() if callable(fallback_value) else fallback_value

        return wrapper  # type: ignore
    return decorator


# Fragments of OS error text and the short message shown instead
_KNOWN_FAILURES = (
    ("no such file or directory", "File not found"),
    ("permission denied", "Permission denied"),
    ("no space left on device", "Disk is full"),
)


def format_user_error(error: Union[Exception, str], context: Optional[str] = None) -> str:
    """
    Turn an error into a one-line message for the user.

    Args:
        error: The error or error message.
        context: What was being done, e.g. "saving preset".
    """
    if isinstance(error, AppError):
        return f"Error {context}: {error.user_message}" if context else error.user_message

    text = str(error)
    lowered = text.lower()
    if isinstance(error, MemoryError) or "out of memory" in lowered:
        return "Not enough memory to complete this operation. Try with a smaller image."
    for fragment, friendly in _KNOWN_FAILURES:
        if fragment in lowered:
            return f"{friendly} while {context}" if context else friendly
    return f"Error {context}: {text}" if context else f"An error occurred: {text}"
