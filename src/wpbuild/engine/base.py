"""
Defines the interface between the build orchestrator and a bundling engine.

This module provides:
- CompletionCallback: the one-shot callback a compiler reports through.
- AbstractCompiler: one submitted compilation, run exactly once.
- AbstractBundlerEngine: accepts a composed configuration and hands back
  a compiler for it.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..composer import EngineConfiguration
from .stats import CompilationStatistics

logger = logging.getLogger(__name__)

# callback(fatal_error, statistics); exactly one of the two is set.
CompletionCallback = Callable[[Optional[BaseException], Optional[CompilationStatistics]], None]
# on_progress(percent, message)
ProgressCallback = Callable[[int, str], None]


class AbstractCompiler(ABC):
    """
    A compilation submitted to a bundling engine.

    Implementations perform the compilation away from the caller's thread
    and must invoke the completion callback exactly once: with an
    exception when the engine itself failed, otherwise with statistics.
    """

    @abstractmethod
    def run(self, callback: CompletionCallback,
            on_progress: Optional[ProgressCallback] = None) -> None:
        """Start the compilation and return without waiting for it."""
        raise NotImplementedError


class AbstractBundlerEngine(ABC):
    """
    Abstract base class for bundling engines.
    """

    @abstractmethod
    def submit(self, config: EngineConfiguration) -> AbstractCompiler:
        """Create a compiler for a composed configuration."""
        raise NotImplementedError

    def shutdown(self) -> None:
        """Stop any compilation still running. Engines without processes do nothing."""
        logger.debug(f"{type(self).__name__} has nothing to shut down")
