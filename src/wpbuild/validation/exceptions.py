"""
Exception types and error handling helpers.

This module provides the error handling functionality shared by the
configuration, engine and orchestration layers, plus the two domain
errors a build can end with.
"""

import logging
from enum import Enum
from typing import Any, Iterable, List, Optional, Union

_module_logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ValidationError(Exception):
    """
    Exception raised when validation fails.
    
    This is the main exception type used by the configuration validators.
    """
    
    def __init__(self, message: str, field_name: Optional[str] = None, 
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class CompilationError(Exception):
    """
    Raised when the bundler reported one or more compilation errors.

    The message is the newline-joined list of formatted errors; the list
    itself is kept on ``errors`` in the order the bundler reported it.
    """

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__("\n".join(self.errors))


class BundlerEngineError(Exception):
    """
    Raised when the bundling engine failed before producing statistics.

    Examples are an unusable configuration, a missing bundler executable or
    a statistics file that could not be read.
    """

    def __init__(self, message: str, exit_code: Optional[int] = None,
                 stderr: str = ""):
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Log ``error`` at ``severity`` and re-raise it unless told otherwise.

    DEBUG and CRITICAL entries carry the traceback.

    Args:
        error: The exception to report
        context: Where it happened, e.g. "production build"
        severity: ErrorSeverity member or its string value
        reraise: Raise ``error`` again after logging
        logger: Logger of the calling module, this module's by default
    """
    target = logger or _module_logger
    level = ErrorSeverity(severity.lower()) if isinstance(severity, str) else severity

    log = getattr(target, level.value)
    with_traceback = level in (ErrorSeverity.DEBUG, ErrorSeverity.CRITICAL)
    log(f"Error in {context}: {error}", exc_info=True if with_traceback else None)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_engine_error(error: Exception, context: str, **kwargs) -> None:
    """Handle bundler engine errors."""
    handle_error(error, f"bundler engine {context}", **kwargs)
