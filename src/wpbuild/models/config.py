"""
Configuration data models.

This module contains the settings a build is composed from: the project
description (entry points, output targets) loaded from
``wpbuild.project.toml`` and the local server settings loaded from
``wpbuild.server.toml``. Both are frozen; the build never mutates them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class FileEntry:
    """
    One independently compiled bundle of a project.
    """

    # Unique name, also the sub-directory of the output path.
    name: str
    # Entry point name -> module paths relative to the project root.
    entry: Dict[str, List[str]]
    # Extra compiler settings shallow-merged over the composed config.
    webpack_config: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BannerConfig:
    """
    Licence banner prepended to production bundles.
    """

    name: str
    author: str = ""
    license: str = ""
    link: str = ""
    version: str = ""
    copyright_text: str = ""
    credit: bool = True


@dataclass(frozen=True)
class ProjectConfig:
    """
    Configuration of the plugin or theme being bundled.
    """

    # Short unique application name, used to namespace the runtime.
    app_name: str
    # Either "plugin" or "theme".
    type: str
    # Directory name under wp-content/plugins or wp-content/themes.
    slug: str
    files: List[FileEntry]
    output_path: str = "dist"
    has_react: bool = False
    has_sass: bool = False
    has_typescript: bool = False
    production_source_maps: bool = False
    optimize_split_chunks: bool = True
    alias: Dict[str, str] = field(default_factory=dict)
    externals: Dict[str, str] = field(default_factory=dict)
    banner: Optional[BannerConfig] = None


@dataclass(frozen=True)
class ServerConfig:
    """
    Local development server settings.
    """

    # Host the dev server binds to; None means the server picks one.
    host: Optional[str] = None
    port: int = 3000
    # URL of the local WordPress installation being proxied.
    proxy: str = "http://localhost"
    ui_port: int = 3001
    open: bool = True
    notify: bool = False
