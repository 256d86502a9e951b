"""
Configuration file loading utilities.

This module handles the low-level loading and parsing of the TOML files a
project keeps in its root directory: ``wpbuild.project.toml`` describing the
bundles and ``wpbuild.server.toml`` describing the local server.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from ..models.config import ProjectConfig, ServerConfig
from ..validation import handle_config_error, ErrorSeverity
from .validators import validate_project_config, validate_server_config

logger = logging.getLogger(__name__)

PROJECT_CONFIG_FILENAME = "wpbuild.project.toml"
SERVER_CONFIG_FILENAME = "wpbuild.server.toml"


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Read a TOML file of the project root.

    Raises:
        FileNotFoundError: If ``file_path`` is not a file; the message
            starts with ``description``
        tomllib.TOMLDecodeError: If the file is not valid TOML
    """
    if not file_path.is_file():
        logger.error(f"{description} not found: {file_path}")
        raise FileNotFoundError(f"{description} not found: {file_path}")

    logger.debug(f"Reading {description} {file_path}")
    try:
        return tomllib.loads(file_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"parsing {file_path.name}",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def _resolve(cwd: Path, path: Optional[Path], default_name: str) -> Path:
    if path is None:
        return cwd / default_name
    path = Path(path)
    return path if path.is_absolute() else cwd / path


def load_project_config(cwd: Path, path: Optional[Path] = None) -> ProjectConfig:
    """
    Load and validate the project configuration.

    Args:
        cwd: Project root the default file name and relative paths resolve against
        path: Optional explicit file, absolute or relative to cwd

    Returns:
        Validated ProjectConfig
    """
    project_file = _resolve(cwd, path, PROJECT_CONFIG_FILENAME)
    data = load_toml_file(project_file, "project configuration file")
    return validate_project_config(data.get("project", {}))


def load_server_config(cwd: Path, path: Optional[Path] = None) -> ServerConfig:
    """
    Load and validate the server configuration.

    The server file is per-developer and usually kept out of version
    control, so a missing file yields the default ServerConfig.
    """
    server_file = _resolve(cwd, path, SERVER_CONFIG_FILENAME)
    if not server_file.exists():
        logger.info(f"No server configuration at {server_file}, using defaults")
        return ServerConfig()
    data = load_toml_file(server_file, "server configuration file")
    return validate_server_config(data.get("server", {}))


def load_build_configs(
    cwd: Path,
    project_path: Optional[Path] = None,
    server_path: Optional[Path] = None,
) -> Tuple[ProjectConfig, ServerConfig]:
    """Load both configuration files of a project root."""
    try:
        project_config = load_project_config(cwd, project_path)
        server_config = load_server_config(cwd, server_path)
    except Exception as e:
        handle_config_error(
            error=e,
            context=f"loading configuration from {cwd}",
            severity=ErrorSeverity.ERROR,
            reraise=True,
            logger=logger
        )
        raise

    logger.info(
        f"Loaded project '{project_config.app_name}' with "
        f"{len(project_config.files)} file entries"
    )
    return project_config, server_config
