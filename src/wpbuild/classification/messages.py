"""
Normalization of raw webpack errors and warnings.

webpack messages carry loader headers, internal stack frames and verbose
resolver output. format_messages turns a raw stats report into short,
readable messages, following what create-react-app's
``formatWebpackMessages`` does for the same purpose.
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Union

from ..models.results import CompilationMessages

logger = logging.getLogger(__name__)

FRIENDLY_SYNTAX_ERROR_LABEL = "Syntax error:"

_LOADER_HEADER = re.compile(r"Module [A-z ]+\(from")
_PARSING_ERROR = re.compile(r"Line (\d+):(?:(\d+):)?\s*Parsing error: (.+)$")
_SMOOSHED_SYNTAX_ERROR = re.compile(r"SyntaxError\s+\((\d+):(\d+)\)\s*(.+?)\n")
_EXPORT_NOT_FOUND = re.compile(r"^.*export '(.+?)' was not found in '(.+?)'.*$", re.MULTILINE)
_DEFAULT_EXPORT_NOT_FOUND = re.compile(
    r"^.*export 'default' \(imported as '(.+?)'\) was not found in '(.+?)'.*$", re.MULTILINE
)
_NAMED_EXPORT_NOT_FOUND = re.compile(
    r"^.*export '(.+?)' \(imported as '(.+?)'\) was not found in '(.+?)'.*$", re.MULTILINE
)
_FILE_POSITION_SUFFIX = re.compile(r"^(.*) \d+:\d+-\d+$")
_SASS_MISSING = re.compile(r"Cannot find module.+sass")
_INTERNAL_STACK_FRAME = re.compile(r"^\s*at\s((?!webpack:).)*:\d+:\d+[\s)]*(\n|$)", re.MULTILINE)
_ANONYMOUS_STACK_FRAME = re.compile(r"^\s*at\s<anonymous>(\n|$)", re.MULTILINE)


def is_likely_syntax_error(message: str) -> bool:
    return FRIENDLY_SYNTAX_ERROR_LABEL in message


def _flatten(message: Union[str, Dict[str, Any]]) -> str:
    # webpack 5 reports objects, webpack 4 plain strings.
    if not isinstance(message, dict):
        return str(message)
    lines = []
    if message.get("moduleName"):
        location = message["moduleName"]
        if message.get("loc"):
            location += f" {message['loc']}"
        lines.append(location)
    lines.append(message.get("message", ""))
    return "\n".join(lines)


def _replace_parsing_error(line: str) -> str:
    match = _PARSING_ERROR.search(line)
    if not match:
        return line
    error_line, error_column, error_message = match.groups()
    position = f"{error_line}:{error_column}" if error_column else error_line
    return f"{FRIENDLY_SYNTAX_ERROR_LABEL} {error_message} ({position})"


def format_message(message: Union[str, Dict[str, Any]]) -> str:
    """Clean up a single webpack error or warning."""
    lines = _flatten(message).split("\n")

    # Loader headers like "Module build failed (from ./node_modules/...)".
    lines = [line for line in lines if not _LOADER_HEADER.search(line)]
    lines = [_replace_parsing_error(line) for line in lines]

    text = "\n".join(lines)
    text = _SMOOSHED_SYNTAX_ERROR.sub(lambda m: f"{FRIENDLY_SYNTAX_ERROR_LABEL} {m.group(3)} ({m.group(1)}:{m.group(2)})\n", text)
    text = _DEFAULT_EXPORT_NOT_FOUND.sub(
        lambda m: f"Attempted import error: '{m.group(2)}' does not contain a default export (imported as '{m.group(1)}').",
        text,
    )
    text = _NAMED_EXPORT_NOT_FOUND.sub(
        lambda m: f"Attempted import error: '{m.group(1)}' is not exported from '{m.group(3)}' (imported as '{m.group(2)}').",
        text,
    )
    text = _EXPORT_NOT_FOUND.sub(
        lambda m: f"Attempted import error: '{m.group(1)}' is not exported from '{m.group(2)}'.",
        text,
    )

    lines = text.split("\n")
    if len(lines) > 2 and lines[1].strip() == "":
        del lines[1]

    lines[0] = _FILE_POSITION_SUFFIX.sub(r"\1", lines[0])

    if len(lines) > 1 and lines[1].startswith("Module not found: "):
        lines = [
            lines[0],
            lines[1]
            .replace("Error: ", "")
            .replace("Module not found: Cannot find file:", "Cannot find file:"),
        ]

    if len(lines) > 1 and _SASS_MISSING.search(lines[1]):
        lines[1] = (
            "To import Sass files, you first need to install sass.\n"
            "Run `npm install sass` or `yarn add sass` inside your workspace."
        )

    text = "\n".join(lines)
    text = _INTERNAL_STACK_FRAME.sub("", text)
    text = _ANONYMOUS_STACK_FRAME.sub("", text)

    lines = text.split("\n")
    # Collapse runs of blank lines.
    lines = [
        line
        for index, line in enumerate(lines)
        if index == 0 or line.strip() != "" or line.strip() != lines[index - 1].strip()
    ]
    return "\n".join(lines).strip()


def _collect(raw: Dict[str, Any], key: str) -> List[Any]:
    messages = raw.get(key) or []
    if messages:
        return list(messages)
    collected: List[Any] = []
    for child in raw.get("children") or []:
        collected.extend(_collect(child, key))
    return collected


def _unique(messages: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for message in messages:
        if message in seen:
            continue
        seen.add(message)
        result.append(message)
    return result


def format_messages(raw: Dict[str, Any]) -> CompilationMessages:
    """
    Format the errors and warnings of a raw (verbose) stats report.

    Messages come from the top level of the report and, when it carries
    none, from its children. Duplicates are dropped keeping the first
    occurrence. When any error is a syntax error only the syntax errors
    are kept, since the rest are almost always caused by it.
    """
    errors = _unique(format_message(m) for m in _collect(raw, "errors"))
    warnings = _unique(format_message(m) for m in _collect(raw, "warnings"))

    if any(is_likely_syntax_error(error) for error in errors):
        errors = [error for error in errors if is_likely_syntax_error(error)]

    logger.debug(f"Formatted {len(errors)} errors and {len(warnings)} warnings")
    return CompilationMessages(errors=errors, warnings=warnings)
