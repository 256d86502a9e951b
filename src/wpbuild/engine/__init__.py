"""
Bundling engine integration.

The orchestrator only talks to AbstractBundlerEngine and AbstractCompiler;
WebpackCliEngine is the production implementation.
"""

from .base import (
    AbstractBundlerEngine,
    AbstractCompiler,
    CompletionCallback,
    ProgressCallback,
)
from .process import terminate_process_tree
from .stats import CompilationStatistics, format_size
from .webpack_cli import WebpackCliCompiler, WebpackCliEngine, parse_progress_line

__all__ = [
    "AbstractBundlerEngine",
    "AbstractCompiler",
    "CompilationStatistics",
    "CompletionCallback",
    "ProgressCallback",
    "WebpackCliCompiler",
    "WebpackCliEngine",
    "format_size",
    "parse_progress_line",
    "terminate_process_tree",
]
