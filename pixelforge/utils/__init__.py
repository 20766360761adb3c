# This file makes the 'utils' directory a Python package.

from .errors import (
    AppError,
    RenderError,
    DecodeError,
    SurfaceAllocationError,
    EncodeError,
    StorageError,
    PresetError,
    ErrorCategory,
    handle_errors,
    format_user_error,
)
from .logger import get_logger

__all__ = [
    'AppError',
    'RenderError',
    'DecodeError',
    'SurfaceAllocationError',
    'EncodeError',
    'StorageError',
    'PresetError',
    'ErrorCategory',
    'handle_errors',
    'format_user_error',
    'get_logger',
]
