"""
Configuration validation utilities.

This module turns raw TOML tables into the frozen configuration models,
raising ValidationError with the dotted name of the offending field.
"""

import logging
from typing import Any, Dict, List

from ..models.config import BannerConfig, FileEntry, ProjectConfig, ServerConfig
from ..validation import (
    ValidationError,
    validate_bool,
    validate_enum_choice,
    validate_non_empty_string,
    validate_positive_integer,
    validate_slug,
    validate_string_mapping,
)

logger = logging.getLogger(__name__)

PROJECT_TYPES = ["plugin", "theme"]


def _require_table(value: Any, field_name: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ValidationError(
            f"{field_name} must be a table, got {type(value).__name__}",
            field_name=field_name,
            value=value,
        )
    return value


def _validate_entry(entry: Any, field_name: str) -> Dict[str, List[str]]:
    if not isinstance(entry, dict) or not entry:
        raise ValidationError(
            f"{field_name} must be a non-empty table of entry points",
            field_name=field_name,
            value=entry,
        )

    normalized: Dict[str, List[str]] = {}
    for name, modules in entry.items():
        # A single module is allowed as a plain string.
        if isinstance(modules, str):
            modules = [modules]
        if not isinstance(modules, list) or not modules:
            raise ValidationError(
                f"{field_name}.{name} must be a path or a non-empty list of paths",
                field_name=f"{field_name}.{name}",
                value=modules,
            )
        normalized[name] = [
            validate_non_empty_string(module, field_name=f"{field_name}.{name}")
            for module in modules
        ]
    return normalized


def validate_file_entries(files_data: Any) -> List[FileEntry]:
    """
    Validate the ``[[project.files]]`` array.

    Raises:
        ValidationError: If the array is empty, an entry is malformed or
            two entries share a name
    """
    if not isinstance(files_data, list) or not files_data:
        raise ValidationError(
            "project.files must contain at least one file entry",
            field_name="project.files",
            value=files_data,
        )

    files: List[FileEntry] = []
    seen_names: List[str] = []
    for index, file_data in enumerate(files_data):
        prefix = f"project.files[{index}]"
        if not isinstance(file_data, dict):
            raise ValidationError(f"{prefix} must be a table", field_name=prefix, value=file_data)

        name = validate_slug(file_data.get("name"), field_name=f"{prefix}.name")
        if name in seen_names:
            raise ValidationError(
                f"{prefix}.name must be unique, '{name}' already exists",
                field_name=f"{prefix}.name",
                value=name,
            )
        seen_names.append(name)

        webpack_config = file_data.get("webpack_config", {})
        if not isinstance(webpack_config, dict):
            raise ValidationError(
                f"{prefix}.webpack_config must be a table",
                field_name=f"{prefix}.webpack_config",
                value=webpack_config,
            )

        files.append(
            FileEntry(
                name=name,
                entry=_validate_entry(file_data.get("entry"), f"{prefix}.entry"),
                webpack_config=dict(webpack_config),
            )
        )
    return files


def validate_banner_config(banner_data: Dict[str, Any]) -> BannerConfig:
    """Validate the optional ``[project.banner]`` table."""
    banner_data = _require_table(banner_data, "project.banner")
    fields = {}
    for key in ("author", "license", "link", "version", "copyright_text"):
        value = banner_data.get(key, "")
        if not isinstance(value, str):
            raise ValidationError(
                f"project.banner.{key} must be a string",
                field_name=f"project.banner.{key}",
                value=value,
            )
        fields[key] = value

    return BannerConfig(
        name=validate_non_empty_string(banner_data.get("name"), field_name="project.banner.name"),
        credit=validate_bool(banner_data.get("credit", True), field_name="project.banner.credit"),
        **fields,
    )


def validate_project_config(project_data: Dict[str, Any]) -> ProjectConfig:
    """
    Validate and create a ProjectConfig from the raw ``[project]`` table.

    Args:
        project_data: Raw project configuration from TOML

    Returns:
        Validated ProjectConfig instance

    Raises:
        ValidationError: If validation fails
    """
    project_data = _require_table(project_data, "project")
    app_name = validate_non_empty_string(project_data.get("app_name"), field_name="project.app_name")
    if not app_name.replace("_", "").isalnum():
        raise ValidationError(
            f"project.app_name must contain only letters, digits and underscores: {app_name}",
            field_name="project.app_name",
            value=app_name,
        )

    project_type = validate_enum_choice(
        project_data.get("type", "plugin"),
        valid_choices=PROJECT_TYPES,
        field_name="project.type",
        case_sensitive=False,
    )

    output_path = validate_non_empty_string(
        project_data.get("output_path", "dist"), field_name="project.output_path"
    ).strip("/")
    if not output_path or ".." in output_path.split("/"):
        raise ValidationError(
            f"project.output_path must be a directory inside the project: {output_path}",
            field_name="project.output_path",
            value=output_path,
        )

    banner_data = project_data.get("banner")
    banner = validate_banner_config(banner_data) if banner_data is not None else None

    config = ProjectConfig(
        app_name=app_name,
        type=project_type,
        slug=validate_slug(project_data.get("slug"), field_name="project.slug"),
        files=validate_file_entries(project_data.get("files")),
        output_path=output_path,
        has_react=validate_bool(project_data.get("has_react", False), field_name="project.has_react"),
        has_sass=validate_bool(project_data.get("has_sass", False), field_name="project.has_sass"),
        has_typescript=validate_bool(
            project_data.get("has_typescript", False), field_name="project.has_typescript"
        ),
        production_source_maps=validate_bool(
            project_data.get("production_source_maps", False),
            field_name="project.production_source_maps",
        ),
        optimize_split_chunks=validate_bool(
            project_data.get("optimize_split_chunks", True),
            field_name="project.optimize_split_chunks",
        ),
        alias=validate_string_mapping(project_data.get("alias", {}), field_name="project.alias"),
        externals=validate_string_mapping(
            project_data.get("externals", {}), field_name="project.externals"
        ),
        banner=banner,
    )
    logger.debug(f"Validated project configuration for '{config.slug}'")
    return config


def validate_server_config(server_data: Dict[str, Any]) -> ServerConfig:
    """
    Validate and create a ServerConfig from the raw ``[server]`` table.

    Raises:
        ValidationError: If validation fails
    """
    server_data = _require_table(server_data, "server")
    host = server_data.get("host")
    if host is not None:
        host = validate_non_empty_string(host, field_name="server.host")

    proxy = validate_non_empty_string(
        server_data.get("proxy", "http://localhost"), field_name="server.proxy"
    )
    if not proxy.startswith(("http://", "https://")):
        raise ValidationError(
            f"server.proxy must be an http(s) URL, got '{proxy}'",
            field_name="server.proxy",
            value=proxy,
        )

    port = validate_positive_integer(
        server_data.get("port", 3000), min_value=1, max_value=65535, field_name="server.port"
    )
    ui_port = validate_positive_integer(
        server_data.get("ui_port", 3001), min_value=1, max_value=65535, field_name="server.ui_port"
    )
    if port == ui_port:
        raise ValidationError(
            f"server.ui_port must differ from server.port ({port})",
            field_name="server.ui_port",
            value=ui_port,
        )

    return ServerConfig(
        host=host,
        port=port,
        proxy=proxy.rstrip("/"),
        ui_port=ui_port,
        open=validate_bool(server_data.get("open", True), field_name="server.open"),
        notify=validate_bool(server_data.get("notify", False), field_name="server.notify"),
    )
