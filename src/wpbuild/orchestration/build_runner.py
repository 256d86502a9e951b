"""
Production build orchestration.

BuildRunner owns a single asynchronous compilation: it composes the
production configuration, submits it to the bundling engine, suspends until
the engine's one-shot completion callback fires and classifies the
statistics into a BuildOutcome.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from ..classification import classify_statistics
from ..composer import WebpackConfigComposer
from ..engine import (
    AbstractBundlerEngine,
    CompilationStatistics,
    ProgressCallback,
    WebpackCliEngine,
)
from ..models.config import ProjectConfig, ServerConfig
from ..models.results import BuildOutcome, BuildStatus
from ..validation import BundlerEngineError, ErrorSeverity, handle_error

logger = logging.getLogger(__name__)

_Completion = Tuple[Optional[BaseException], Optional[CompilationStatistics]]


class BuildRunner:
    """
    Runs one production compilation to completion and classifies it.

    The runner keeps nothing between calls: every ``build()`` composes a
    fresh configuration and starts an independent engine run, so two calls
    with the same inputs and the same engine statistics give equal outcomes.
    Overlapping calls are not queued or de-duplicated.
    """

    def __init__(
        self,
        project_config: ProjectConfig,
        server_config: ServerConfig,
        cwd: Union[str, Path],
        *,
        composer: Optional[WebpackConfigComposer] = None,
        engine: Optional[AbstractBundlerEngine] = None,
        on_progress: Optional[ProgressCallback] = None,
    ):
        """
        Store the build inputs. No I/O happens here.

        Args:
            project_config: Bundles and output settings
            server_config: Local server settings
            cwd: Absolute project root
            composer: Configuration composer, WebpackConfigComposer by default
            engine: Bundling engine, WebpackCliEngine by default
            on_progress: Receives ``(percent, message)`` while compiling
        """
        self.project_config = project_config
        self.server_config = server_config
        self.cwd = Path(cwd)
        self.composer = composer or WebpackConfigComposer()
        self.engine = engine or WebpackCliEngine()
        self.on_progress = on_progress

    async def build(self) -> BuildOutcome:
        """
        Compile the project in production mode.

        Returns:
            SUCCESS with the asset summary, WARN with the joined warnings or
            ERROR with the compilation errors

        Raises:
            BundlerEngineError: If the engine failed before producing
                statistics
        """
        logger.info(f"Starting production build of '{self.project_config.slug}' in {self.cwd}")

        config = self.composer.compose(
            self.project_config, self.server_config, self.cwd, False
        )
        compiler = self.engine.submit(config)

        loop = asyncio.get_running_loop()
        completion: "asyncio.Future[_Completion]" = loop.create_future()

        def resolve(error: Optional[BaseException], stats: Optional[CompilationStatistics]) -> None:
            if completion.cancelled():
                logger.debug("Build was cancelled, dropping the bundler result")
                return
            if completion.done():
                logger.warning("Ignoring repeated completion callback from the bundler")
                return
            completion.set_result((error, stats))

        def on_complete(error: Optional[BaseException], stats: Optional[CompilationStatistics]) -> None:
            # Engines may call back from any thread.
            loop.call_soon_threadsafe(resolve, error, stats)

        compiler.run(on_complete, on_progress=self.on_progress)
        error, stats = await completion

        if error is not None:
            if not isinstance(error, BundlerEngineError):
                wrapped = BundlerEngineError(f"Bundler failed: {error}")
                wrapped.__cause__ = error
                error = wrapped
            handle_error(
                error=error,
                context="production build",
                severity=ErrorSeverity.ERROR,
                reraise=True,
                logger=logger,
            )
        if stats is None:
            handle_error(
                error=BundlerEngineError("Bundler finished without statistics"),
                context="production build",
                severity=ErrorSeverity.ERROR,
                reraise=True,
                logger=logger,
            )

        outcome = classify_statistics(stats)
        if outcome.status is BuildStatus.SUCCESS:
            logger.info("Production build completed successfully.")
        elif outcome.status is BuildStatus.WARN:
            logger.warning("Production build completed with warnings.")
        else:
            logger.error(f"Production build failed with {len(outcome.errors)} errors.")
        return outcome

    async def build_or_raise(self) -> BuildOutcome:
        """
        Like ``build()``, but compilation errors raise CompilationError
        whose message is the newline-joined error list.
        """
        outcome = await self.build()
        return outcome.raise_for_status()
