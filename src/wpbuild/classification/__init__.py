"""
Compilation message formatting and outcome classification.
"""

from .classifier import SUMMARY_OPTIONS, classify_messages, classify_statistics
from .messages import (
    FRIENDLY_SYNTAX_ERROR_LABEL,
    format_message,
    format_messages,
    is_likely_syntax_error,
)

__all__ = [
    "FRIENDLY_SYNTAX_ERROR_LABEL",
    "SUMMARY_OPTIONS",
    "classify_messages",
    "classify_statistics",
    "format_message",
    "format_messages",
    "is_likely_syntax_error",
]
