"""
Rendering of composed configurations as CommonJS modules.

A bundler configuration is mostly JSON, but some values only exist in
JavaScript: regular expressions in module rules and plugin instances. The
composer marks those with JsRegExp, JsNew and JsExpression and
render_config_module turns the whole structure into ``module.exports = ...``.
"""

import json
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any, Dict, Optional

INDENT = "  "


@dataclass(frozen=True)
class JsRegExp:
    """A JavaScript regular expression literal."""

    pattern: str
    flags: str = ""

    def render(self) -> str:
        escaped = self.pattern.replace("\\/", "/").replace("/", "\\/")
        return f"/{escaped}/{self.flags}"


@dataclass(frozen=True)
class JsExpression:
    """Raw JavaScript source emitted verbatim."""

    code: str

    def render(self) -> str:
        return self.code


@dataclass(frozen=True)
class JsNew:
    """``new (require(module)[.export])(options)``."""

    module: str
    options: Dict[str, Any] = field(default_factory=dict)
    export: Optional[str] = None

    def constructor(self) -> str:
        ctor = f"require({json.dumps(self.module)})"
        if self.export:
            ctor += f".{self.export}"
        return ctor


def _render_value(value: Any, depth: int) -> str:
    if isinstance(value, (JsRegExp, JsExpression)):
        return value.render()
    if isinstance(value, JsNew):
        return f"new ({value.constructor()})({_render_value(value.options, depth)})"
    if isinstance(value, PurePath):
        return json.dumps(str(value))
    if isinstance(value, dict):
        if not value:
            return "{}"
        inner = INDENT * (depth + 1)
        items = [
            f"{inner}{json.dumps(str(key))}: {_render_value(item, depth + 1)}"
            for key, item in value.items()
        ]
        return "{\n" + ",\n".join(items) + "\n" + INDENT * depth + "}"
    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        inner = INDENT * (depth + 1)
        items = [f"{inner}{_render_value(item, depth + 1)}" for item in value]
        return "[\n" + ",\n".join(items) + "\n" + INDENT * depth + "]"
    if value is None or isinstance(value, (str, bool, int, float)):
        return json.dumps(value)
    raise TypeError(f"Cannot render {type(value).__name__} into a config module")


def render_config_module(config: Any) -> str:
    """
    Serialize a composed configuration into a CommonJS module.

    Args:
        config: Dicts, lists, scalars, paths and JS marker objects

    Returns:
        Source text of a module exporting the configuration

    Raises:
        TypeError: If the configuration holds a value with no JS form
    """
    return '"use strict";\n\nmodule.exports = ' + _render_value(config, 0) + ";\n"
