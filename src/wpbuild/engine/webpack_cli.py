"""
Bundling engine backed by the webpack command-line interface.

Every compiler renders its configuration into a temporary CommonJS module,
runs webpack on it from a worker thread and reads the stats report webpack
writes with ``--json <file>``. Progress lines on stderr are forwarded to an
optional progress callback while the run is in flight.
"""

import json
import logging
import re
import subprocess
import tempfile
import threading
from collections import deque
from pathlib import Path
from typing import Dict, Optional, Sequence

from ..composer import EngineConfiguration, render_config_module
from ..validation import BundlerEngineError, ErrorSeverity, handle_engine_error
from .base import AbstractBundlerEngine, AbstractCompiler, CompletionCallback, ProgressCallback
from .process import terminate_process_tree
from .stats import CompilationStatistics

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = ("npx", "webpack")
PROGRESS_PATTERN = re.compile(r"\[webpack\.Progress\]\s+(\d{1,3})%\s*(.*)$")
STDERR_TAIL_LINES = 50

# webpack-cli: 0 = success, 1 = compilation errors, 2 = configuration or internal error.
EXIT_CODE_FATAL = 2


def parse_progress_line(line: str) -> Optional[tuple]:
    """Extract ``(percent, message)`` from a webpack progress line."""
    match = PROGRESS_PATTERN.search(line.strip())
    if not match:
        return None
    percent = min(int(match.group(1)), 100)
    return percent, match.group(2).strip()


class WebpackCliCompiler(AbstractCompiler):
    """
    One webpack run for one composed configuration.
    """

    def __init__(
        self,
        config: EngineConfiguration,
        cwd: Path,
        engine: "WebpackCliEngine",
    ):
        self.config = config
        self.cwd = Path(cwd)
        self.engine = engine
        self._started = False
        self._thread: Optional[threading.Thread] = None

    def run(self, callback: CompletionCallback,
            on_progress: Optional[ProgressCallback] = None) -> None:
        """
        Start webpack on a daemon worker thread.

        Raises:
            RuntimeError: If this compiler was already run
        """
        if self._started:
            raise RuntimeError("Compiler has already been run")
        self._started = True

        self._thread = threading.Thread(
            target=self._run_and_report,
            args=(callback, on_progress),
            name=f"wpbuild-webpack-{id(self):x}",
            daemon=True,
        )
        self._thread.start()

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the worker thread, mainly for tests and shutdown."""
        if self._thread is not None:
            self._thread.join(timeout)

    def _run_and_report(self, callback: CompletionCallback,
                        on_progress: Optional[ProgressCallback]) -> None:
        try:
            stats = self.compile(on_progress)
        except BundlerEngineError as e:
            handle_engine_error(e, "compilation run", severity=ErrorSeverity.ERROR,
                                reraise=False, logger=logger)
            callback(e, None)
            return
        except Exception as e:
            handle_engine_error(e, "compilation run", severity=ErrorSeverity.CRITICAL,
                                reraise=False, logger=logger)
            error = BundlerEngineError(f"Unexpected bundler failure: {e}")
            error.__cause__ = e
            callback(error, None)
            return
        callback(None, stats)

    def build_command(self, config_file: Path, stats_file: Path) -> list:
        return [
            *self.engine.command,
            "--config", str(config_file),
            "--json", str(stats_file),
            "--progress",
            *self.engine.extra_args,
        ]

    def compile(self, on_progress: Optional[ProgressCallback] = None) -> CompilationStatistics:
        """
        Run webpack synchronously and return its statistics.

        Raises:
            BundlerEngineError: If webpack could not be started, failed
                before compiling or left no readable stats report
        """
        with tempfile.TemporaryDirectory(prefix="wpbuild-") as tmp:
            config_file = Path(tmp) / "webpack.config.js"
            stats_file = Path(tmp) / "stats.json"
            config_file.write_text(render_config_module(self.config), encoding="utf-8")

            command = self.build_command(config_file, stats_file)
            logger.debug(f"Executing command: '{' '.join(command)}' in '{self.cwd}'")
            try:
                process = subprocess.Popen(
                    command,
                    cwd=self.cwd,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.PIPE,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                )
            except FileNotFoundError as e:
                raise BundlerEngineError(f"Bundler executable not found: {command[0]}") from e

            self.engine._register(process)
            try:
                stderr_tail = self._consume_stderr(process, on_progress)
                return_code = process.wait()
            finally:
                self.engine._unregister(process)

            logger.info(f"webpack finished with exit code {return_code}")
            if return_code < 0 or return_code >= EXIT_CODE_FATAL:
                raise BundlerEngineError(
                    f"webpack exited with code {return_code}",
                    exit_code=return_code,
                    stderr=stderr_tail,
                )

            if not stats_file.exists():
                raise BundlerEngineError(
                    "webpack did not write a statistics report",
                    exit_code=return_code,
                    stderr=stderr_tail,
                )
            try:
                raw = json.loads(stats_file.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                raise BundlerEngineError(
                    f"Could not parse webpack statistics report: {e}",
                    exit_code=return_code,
                    stderr=stderr_tail,
                ) from e

        return CompilationStatistics(raw)

    def _consume_stderr(self, process: subprocess.Popen,
                        on_progress: Optional[ProgressCallback]) -> str:
        tail = deque(maxlen=STDERR_TAIL_LINES)
        for line in process.stderr:
            progress = parse_progress_line(line)
            if progress is None:
                tail.append(line.rstrip("\n"))
                continue
            if on_progress is not None:
                on_progress(*progress)
        return "\n".join(tail)


class WebpackCliEngine(AbstractBundlerEngine):
    """
    Runs compilations through ``webpack`` (via ``npx`` by default).
    """

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_COMMAND,
        extra_args: Sequence[str] = (),
    ):
        """
        Args:
            command: Program and arguments that invoke the webpack CLI
            extra_args: Arguments appended to every webpack invocation
        """
        self.command = tuple(command)
        self.extra_args = tuple(extra_args)
        self._active: Dict[int, subprocess.Popen] = {}
        self._lock = threading.Lock()

    def submit(self, config: EngineConfiguration) -> WebpackCliCompiler:
        """
        Create a compiler for a composed configuration.

        The run's working directory is the ``context`` of the first
        compiler configuration.

        Raises:
            ValueError: If the configuration holds no compiler configs
        """
        if not config:
            raise ValueError("Cannot submit an empty configuration")
        cwd = Path(config[0].get("context") or Path.cwd())
        return WebpackCliCompiler(config, cwd, self)

    @property
    def active_pids(self) -> list:
        with self._lock:
            return list(self._active)

    def _register(self, process: subprocess.Popen) -> None:
        with self._lock:
            self._active[process.pid] = process

    def _unregister(self, process: subprocess.Popen) -> None:
        with self._lock:
            self._active.pop(process.pid, None)

    def shutdown(self) -> None:
        """Terminate the process tree of every compilation still running."""
        for pid in self.active_pids:
            terminate_process_tree(pid, "webpack")
