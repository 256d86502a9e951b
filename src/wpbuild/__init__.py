"""
wpbuild: production asset builds for WordPress plugins and themes.

This package drives webpack to bundle the assets of a plugin or theme and
reports the result in the terminal.

The package is organized into specialized modules:
- config: Loading and validation of the project and server TOML files
- models: Configuration and result data structures
- validation: Field validation and error handling
- composer: Composition of webpack configurations
- engine: Bundling engine interface and the webpack CLI engine
- classification: Message formatting and outcome classification
- orchestration: The production build orchestrator
- system: Project root and package manager detection
- reporting: Terminal rendering
- cli: Command-line interface

Usage:
    From command line:
        wpbuild build --context path/to/plugin

    Programmatically:
        from wpbuild import BuildRunner, load_build_configs
        project, server = load_build_configs(cwd)
        outcome = asyncio.run(BuildRunner(project, server, cwd).build())
"""

from .config import load_build_configs
from .orchestration import BuildRunner
from .cli import main_cli

from .models import (
    BannerConfig,
    BuildOutcome,
    BuildStatus,
    CompilationMessages,
    FileEntry,
    ProjectConfig,
    ServerConfig,
)

from .validation import (
    BundlerEngineError,
    CompilationError,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "BuildRunner",
    "load_build_configs",
    "main_cli",
    # Models
    "BannerConfig",
    "BuildOutcome",
    "BuildStatus",
    "CompilationMessages",
    "FileEntry",
    "ProjectConfig",
    "ServerConfig",
    # Errors
    "BundlerEngineError",
    "CompilationError",
    "ValidationError",
]
