"""
Classification of a finished compilation into a build outcome.
"""

import logging

from ..engine.stats import CompilationStatistics
from ..models.results import BuildOutcome, CompilationMessages
from .messages import format_messages

logger = logging.getLogger(__name__)

# Keep the success log to assets and entry points.
SUMMARY_OPTIONS = dict(
    colors=False,
    assets=True,
    chunks=False,
    entrypoints=True,
    hash=False,
    version=False,
    modules=False,
    built_at=False,
    timings=False,
)


def classify_messages(messages: CompilationMessages, stats: CompilationStatistics) -> BuildOutcome:
    """Map formatted messages to exactly one outcome.

    The checks run in order and the first match wins:

    1. no errors and no warnings -> SUCCESS with the asset summary
    2. any error -> ERROR with the errors, whatever the warnings
    3. otherwise -> WARN with the newline-joined warnings

    Args:
        messages: Formatted errors and warnings, in reported order.
        stats: Statistics the summary is rendered from on success.

    Returns:
        The BuildOutcome of the compilation.
    """
    if not messages.errors and not messages.warnings:
        return BuildOutcome.success(stats.to_string(**SUMMARY_OPTIONS))
    if messages.errors:
        return BuildOutcome.failed(messages.errors)
    return BuildOutcome.warn("\n".join(messages.warnings))


def classify_statistics(stats: CompilationStatistics) -> BuildOutcome:
    """Format the verbose report of ``stats`` and classify it."""
    messages = format_messages(stats.to_json("verbose"))
    outcome = classify_messages(messages, stats)
    logger.debug(f"Classified compilation as {outcome.status.value}")
    return outcome
