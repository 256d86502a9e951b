"""
Composition of webpack configurations from project and server settings.

The composer produces one compiler configuration per file entry of the
project, so every entry is emitted into its own directory with its own
manifest and runtime.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from ..models.config import BannerConfig, FileEntry, ProjectConfig, ServerConfig
from ..validation import ValidationError
from .js_module import JsExpression, JsNew, JsRegExp

logger = logging.getLogger(__name__)

EngineConfiguration = List[Dict[str, Any]]

HMR_CLIENT = "webpack-hot-middleware/client?path=/__wpbuild_hmr&reload=true"


def _banner_text(banner: BannerConfig) -> str:
    lines = [banner.name]
    if banner.author:
        lines.append(f"@author {banner.author}")
    if banner.license:
        lines.append(f"@license {banner.license}")
    if banner.link:
        lines.append(f"@link {banner.link}")
    if banner.version:
        lines.append(f"@version {banner.version}")
    if banner.copyright_text:
        lines.append(banner.copyright_text)
    if banner.credit:
        lines.append("Compiled with wpbuild")
    return "\n".join(lines)


class WebpackConfigComposer:
    """
    Turns project settings, server settings and a project root into a
    bundler-ready configuration for development or production mode.
    """

    def compose(
        self,
        project_config: ProjectConfig,
        server_config: ServerConfig,
        cwd: Union[str, Path],
        is_development: bool,
    ) -> EngineConfiguration:
        """
        Compose the multi-compiler configuration.

        Args:
            project_config: Bundles and output settings
            server_config: Dev server settings, used for the public path
            cwd: Absolute project root relative paths resolve against
            is_development: Compose for the dev server instead of production

        Returns:
            One compiler configuration per file entry

        Raises:
            ValidationError: If the project defines no file entries
        """
        if not project_config.files:
            raise ValidationError(
                "project.files must contain at least one file entry",
                field_name="project.files",
                value=project_config.files,
            )

        cwd = Path(cwd)
        mode = "development" if is_development else "production"
        logger.debug(f"Composing {len(project_config.files)} {mode} configs for '{project_config.slug}'")

        return [
            self._compose_file(project_config, server_config, cwd, file_entry, is_development)
            for file_entry in project_config.files
        ]

    def public_path(
        self,
        project_config: ProjectConfig,
        server_config: ServerConfig,
        file_entry: FileEntry,
        is_development: bool,
    ) -> str:
        """URL prefix the emitted assets are served from."""
        path = (
            f"/wp-content/{project_config.type}s/{project_config.slug}/"
            f"{project_config.output_path}/{file_entry.name}/"
        )
        if is_development:
            host = server_config.host or "localhost"
            return f"http://{host}:{server_config.port}{path}"
        return path

    def _compose_file(
        self,
        project_config: ProjectConfig,
        server_config: ServerConfig,
        cwd: Path,
        file_entry: FileEntry,
        is_development: bool,
    ) -> Dict[str, Any]:
        entry = {}
        for name, modules in file_entry.entry.items():
            resolved = [str(cwd / module) for module in modules]
            if is_development:
                resolved.insert(0, f"{HMR_CLIENT}&name={file_entry.name}")
            entry[name] = resolved

        if is_development:
            devtool: Union[str, bool] = "eval-cheap-module-source-map"
        else:
            devtool = "source-map" if project_config.production_source_maps else False

        config: Dict[str, Any] = {
            "name": file_entry.name,
            "mode": "development" if is_development else "production",
            "context": str(cwd),
            "target": "web",
            "entry": entry,
            "output": {
                "path": str(cwd / project_config.output_path / file_entry.name),
                "filename": "[name].js" if is_development else "[name]-[contenthash:8].js",
                "publicPath": self.public_path(
                    project_config, server_config, file_entry, is_development
                ),
                "uniqueName": f"wpackio{project_config.app_name}{file_entry.name}",
                "clean": not is_development,
            },
            "devtool": devtool,
            "resolve": self._resolve(project_config, cwd),
            "externals": dict(project_config.externals),
            "module": {"rules": self._module_rules(project_config, is_development)},
            "plugins": self._plugins(project_config, is_development),
            "optimization": self._optimization(project_config, is_development),
            "stats": "verbose",
            "bail": False,
        }

        # Per-entry overrides win over everything composed above.
        config.update(file_entry.webpack_config)
        return config

    def _resolve(self, project_config: ProjectConfig, cwd: Path) -> Dict[str, Any]:
        extensions = [".js", ".mjs", ".json"]
        if project_config.has_react:
            extensions.append(".jsx")
        if project_config.has_typescript:
            extensions.extend([".ts", ".tsx"])

        alias = {}
        for name, target in project_config.alias.items():
            alias[name] = str(cwd / target) if target.startswith(".") else target

        return {"extensions": extensions, "alias": alias}

    def _style_loader(self, is_development: bool) -> Union[str, JsExpression]:
        if is_development:
            return "style-loader"
        return JsExpression('require("mini-css-extract-plugin").loader')

    def _module_rules(self, project_config: ProjectConfig, is_development: bool) -> List[Dict[str, Any]]:
        presets: List[Any] = [["@babel/preset-env", {"bugfixes": True}]]
        if project_config.has_react:
            presets.append(["@babel/preset-react", {"runtime": "automatic"}])

        rules: List[Dict[str, Any]] = [
            {
                "test": JsRegExp(r"\.m?jsx?$"),
                "exclude": JsRegExp(r"node_modules"),
                "use": [
                    {
                        "loader": "babel-loader",
                        "options": {"cacheDirectory": True, "presets": presets},
                    }
                ],
            }
        ]
        if project_config.has_typescript:
            rules.append(
                {
                    "test": JsRegExp(r"\.tsx?$"),
                    "exclude": JsRegExp(r"node_modules"),
                    "use": [{"loader": "ts-loader"}],
                }
            )

        css_use: List[Any] = [
            self._style_loader(is_development),
            {"loader": "css-loader", "options": {"importLoaders": 1}},
            "postcss-loader",
        ]
        rules.append({"test": JsRegExp(r"\.css$"), "use": css_use})
        if project_config.has_sass:
            rules.append(
                {
                    "test": JsRegExp(r"\.s[ac]ss$"),
                    "use": css_use[:1]
                    + [{"loader": "css-loader", "options": {"importLoaders": 2}}, "postcss-loader", "sass-loader"],
                }
            )

        rules.append(
            {
                "test": JsRegExp(r"\.(png|jpe?g|gif|svg|webp|woff2?|eot|ttf|otf)$", "i"),
                "type": "asset",
            }
        )
        return rules

    def _plugins(self, project_config: ProjectConfig, is_development: bool) -> List[Any]:
        plugins: List[Any] = [
            JsNew(
                "webpack",
                {
                    "__WPACKIO__": {
                        "appName": json.dumps(project_config.app_name),
                        "outputPath": json.dumps(project_config.output_path),
                    }
                },
                export="DefinePlugin",
            ),
            JsNew(
                "webpack-assets-manifest",
                {"output": "manifest.json", "writeToDisk": True, "entrypoints": True},
            ),
        ]

        if is_development:
            plugins.append(JsNew("webpack", {}, export="HotModuleReplacementPlugin"))
            return plugins

        plugins.append(JsNew("mini-css-extract-plugin", {"filename": "[name]-[contenthash:8].css"}))
        if project_config.banner is not None:
            plugins.append(
                JsNew(
                    "webpack",
                    {"banner": _banner_text(project_config.banner), "entryOnly": False},
                    export="BannerPlugin",
                )
            )
        return plugins

    def _optimization(self, project_config: ProjectConfig, is_development: bool) -> Dict[str, Any]:
        optimization: Dict[str, Any] = {"minimize": not is_development}
        if project_config.optimize_split_chunks:
            optimization["splitChunks"] = {"chunks": "all"}
            optimization["runtimeChunk"] = "single"
        else:
            optimization["splitChunks"] = False
        return optimization
