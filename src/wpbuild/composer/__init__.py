"""
Configuration composition for the bundling engine.
"""

from .js_module import JsExpression, JsNew, JsRegExp, render_config_module
from .webpack_config import EngineConfiguration, WebpackConfigComposer

__all__ = [
    "EngineConfiguration",
    "JsExpression",
    "JsNew",
    "JsRegExp",
    "WebpackConfigComposer",
    "render_config_module",
]
