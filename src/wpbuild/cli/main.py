"""
Command-line interface for wpbuild.

This module provides the ``wpbuild`` entry point. The ``build`` command
loads the project and server configuration of a project root, runs a
production build and reports the outcome.
"""

import argparse
import asyncio
import logging
import shlex
import sys
import tomllib
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from ..config import load_build_configs
from ..engine import WebpackCliEngine
from ..models.results import BuildStatus
from ..orchestration import BuildRunner
from ..reporting import (
    end_build_info,
    pretty_print_error,
    print_intro,
    print_outcome,
    progress_line,
)
from ..system import PackageManagerDetector, resolve_cwd
from ..validation import BundlerEngineError, CompilationError, ValidationError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_COMPILATION_ERROR = 1
EXIT_FATAL = 2
EXIT_INTERRUPTED = 130

CONTEXT_HELP = (
    "Path to the project root. Defaults to the current working directory. "
    "Relative paths are resolved from the current working directory. The "
    "root should be the directory 'wp-content/<plugins|themes>/<slug>/' maps to."
)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wpbuild",
        description="Bundle the assets of a WordPress plugin or theme.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output to stderr."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Create production ready files.")
    build.add_argument("-c", "--context", type=str, help=CONTEXT_HELP)
    build.add_argument(
        "-p", "--project-config", type=Path,
        help="Project configuration file. Defaults to wpbuild.project.toml in the project root.",
    )
    build.add_argument(
        "-s", "--server-config", type=Path,
        help="Server configuration file. Defaults to wpbuild.server.toml in the project root.",
    )
    build.add_argument(
        "--webpack", type=str, default="npx webpack",
        help="Command that runs the webpack CLI (default: 'npx webpack').",
    )
    return parser


def run_build(args: argparse.Namespace, console: Console) -> int:
    """Run the build command and return the process exit code."""
    cwd = resolve_cwd(args.context)
    logger.info(f"Project root: {cwd}")

    try:
        project_config, server_config = load_build_configs(
            cwd, args.project_config, args.server_config
        )
    except (FileNotFoundError, tomllib.TOMLDecodeError, ValidationError) as e:
        pretty_print_error(e, "Could not load the project configuration", console)
        return EXIT_FATAL

    engine = WebpackCliEngine(command=shlex.split(args.webpack))
    try:
        with console.status(progress_line(0)) as status:
            runner = BuildRunner(
                project_config,
                server_config,
                cwd,
                engine=engine,
                on_progress=lambda percent, message: status.update(progress_line(percent, message)),
            )
            outcome = asyncio.run(runner.build())
    except KeyboardInterrupt:
        logger.warning("Interrupted, stopping webpack")
        engine.shutdown()
        return EXIT_INTERRUPTED
    except BundlerEngineError as e:
        pretty_print_error(e, "The bundler could not run", console)
        return EXIT_FATAL

    if outcome.status is BuildStatus.ERROR:
        pretty_print_error(
            CompilationError(outcome.errors), "Could not create production build", console
        )
        return EXIT_COMPILATION_ERROR

    print_outcome(outcome, console)
    if outcome.status is BuildStatus.SUCCESS:
        end_build_info(server_config.proxy, PackageManagerDetector(cwd), console)
    return EXIT_OK


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line interface for wpbuild.

    Raises:
        SystemExit: Always, with 0 for successful builds (warnings
            included), 1 for compilation errors, 2 for configuration or
            bundler failures and 130 when interrupted.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "build" and not shlex.split(args.webpack):
        parser.error("--webpack must name the command that runs webpack")
    setup_logging(args.verbose)

    console = Console()
    print_intro(console)

    if args.command == "build":
        sys.exit(run_build(args, console))
    parser.error(f"Unknown command: {args.command}")


if __name__ == "__main__":
    main_cli()
