"""
Data models used throughout the build tool.

Configuration Models:
- Project description (entry points, output targets, banner)
- Local server settings

Result Models:
- Formatted compilation messages
- The classified outcome of a build
"""

from .config import BannerConfig, FileEntry, ProjectConfig, ServerConfig
from .results import BuildOutcome, BuildStatus, CompilationMessages

__all__ = [
    # Configuration
    "BannerConfig",
    "FileEntry",
    "ProjectConfig",
    "ServerConfig",
    # Results
    "BuildOutcome",
    "BuildStatus",
    "CompilationMessages",
]
