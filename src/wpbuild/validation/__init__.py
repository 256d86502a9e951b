"""
Validation and error handling for the wpbuild package.

This module provides input validation and error handling with consistent
error reporting across the application.
"""

from .exceptions import (
    BundlerEngineError,
    CompilationError,
    ErrorSeverity,
    ValidationError,
    handle_config_error,
    handle_engine_error,
    handle_error,
)

from .validators import (
    validate_bool,
    validate_enum_choice,
    validate_non_empty_string,
    validate_positive_integer,
    validate_slug,
    validate_string_mapping,
)

__all__ = [
    # Errors
    "BundlerEngineError",
    "CompilationError",
    "ErrorSeverity",
    "ValidationError",
    "handle_config_error",
    "handle_engine_error",
    "handle_error",
    # Validators
    "validate_bool",
    "validate_enum_choice",
    "validate_non_empty_string",
    "validate_positive_integer",
    "validate_slug",
    "validate_string_mapping",
]
