"""
Configuration loading for the wpbuild package.

This module loads the project and server TOML files of a project root and
validates them into frozen configuration models.
"""

from .loader import (
    PROJECT_CONFIG_FILENAME,
    SERVER_CONFIG_FILENAME,
    load_build_configs,
    load_project_config,
    load_server_config,
    load_toml_file,
)
from .validators import (
    validate_banner_config,
    validate_file_entries,
    validate_project_config,
    validate_server_config,
)

__all__ = [
    "PROJECT_CONFIG_FILENAME",
    "SERVER_CONFIG_FILENAME",
    "load_build_configs",
    "load_project_config",
    "load_server_config",
    "load_toml_file",
    "validate_banner_config",
    "validate_file_entries",
    "validate_project_config",
    "validate_server_config",
]
