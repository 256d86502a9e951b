"""
Unit tests for webpack message formatting.
"""

import pytest

from wpbuild.classification import (
    FRIENDLY_SYNTAX_ERROR_LABEL,
    format_message,
    format_messages,
)


@pytest.mark.unit
class TestFormatMessage:
    """Test cases for single message cleanup."""

    def test_plain_message_unchanged(self):
        assert format_message("Module not found: './foo'") == "Module not found: './foo'"

    def test_object_message_flattened(self):
        message = {
            "moduleName": "./src/app/index.js",
            "loc": "3:0-24",
            "message": "Unused variable x",
        }

        assert format_message(message) == "./src/app/index.js\nUnused variable x"

    def test_object_message_without_module(self):
        assert format_message({"message": "Conflicting order"}) == "Conflicting order"

    def test_loader_header_stripped(self):
        message = (
            "./src/style.scss\n"
            "Module build failed (from ./node_modules/sass-loader/dist/cjs.js):\n"
            "Undefined variable."
        )

        assert format_message(message) == "./src/style.scss\nUndefined variable."

    def test_parsing_error_becomes_syntax_error(self):
        message = "./src/app.js\nLine 4:12:  Parsing error: Unexpected token"

        assert format_message(message) == (
            f"./src/app.js\n{FRIENDLY_SYNTAX_ERROR_LABEL} Unexpected token (4:12)"
        )

    def test_smooshed_syntax_error(self):
        message = "./src/app.js\nSyntaxError (5:3) Unexpected token\n\n  3 | const a"

        formatted = format_message(message)

        assert formatted.startswith(f"./src/app.js\n{FRIENDLY_SYNTAX_ERROR_LABEL} Unexpected token (5:3)")

    def test_export_not_found(self):
        message = "./src/app.js\nexport 'helper' was not found in './utils'"

        assert format_message(message) == (
            "./src/app.js\nAttempted import error: 'helper' is not exported from './utils'."
        )

    def test_default_export_not_found(self):
        message = "./src/app.js\nexport 'default' (imported as 'Utils') was not found in './utils'"

        assert format_message(message) == (
            "./src/app.js\nAttempted import error: './utils' does not contain a default export "
            "(imported as 'Utils')."
        )

    def test_named_export_not_found(self):
        message = "./src/app.js\nexport 'helper' (imported as 'h') was not found in './utils'"

        assert format_message(message) == (
            "./src/app.js\nAttempted import error: 'helper' is not exported from './utils' "
            "(imported as 'h')."
        )

    def test_module_not_found_cleaned(self):
        message = (
            "./src/app.js 3:0-24\n"
            "Module not found: Error: Can't resolve './foo' in '/project/src'\n"
            "resolve './foo' in '/project/src'\n"
            "  using description file: /project/package.json"
        )

        assert format_message(message) == (
            "./src/app.js\nModule not found: Can't resolve './foo' in '/project/src'"
        )

    def test_blank_second_line_removed(self):
        message = "./src/app.js\n\nModule not found: Error: Can't resolve 'x' in '/p'"

        assert format_message(message) == "./src/app.js\nModule not found: Can't resolve 'x' in '/p'"

    def test_missing_sass_hint(self):
        message = "./src/style.scss\nCannot find module 'sass'"

        formatted = format_message(message)

        assert "To import Sass files, you first need to install sass." in formatted
        assert "Cannot find module" not in formatted

    def test_internal_stack_frames_removed(self):
        message = (
            "Error: boom\n"
            "    at Object.<anonymous> (/project/node_modules/x/index.js:10:5)\n"
            "    at <anonymous>\n"
            "    at webpack:///./src/app.js:3:1"
        )

        formatted = format_message(message)

        assert "node_modules/x/index.js" not in formatted
        assert "<anonymous>" not in formatted
        assert "webpack:///./src/app.js:3:1" in formatted

    def test_blank_line_runs_collapsed(self):
        assert format_message("first\nsecond\n\n\n\nthird") == "first\nsecond\n\nthird"


@pytest.mark.unit
class TestFormatMessages:
    """Test cases for whole-report formatting."""

    def test_order_preserved(self):
        raw = {"errors": [], "warnings": ["b", "a", "c"]}

        messages = format_messages(raw)

        assert messages.errors == []
        assert messages.warnings == ["b", "a", "c"]

    def test_duplicates_dropped(self):
        raw = {"errors": ["x", "y", "x"], "warnings": []}

        assert format_messages(raw).errors == ["x", "y"]

    def test_missing_keys(self):
        messages = format_messages({})

        assert messages.errors == []
        assert messages.warnings == []

    def test_children_used_when_top_level_empty(self):
        raw = {
            "errors": [],
            "warnings": [],
            "children": [
                {"name": "app", "errors": [{"message": "e1"}], "warnings": []},
                {"name": "admin", "errors": [], "warnings": [{"message": "w1"}]},
            ],
        }

        messages = format_messages(raw)

        assert messages.errors == ["e1"]
        assert messages.warnings == ["w1"]

    def test_top_level_wins_over_children(self):
        raw = {
            "errors": [{"message": "top"}],
            "children": [{"errors": [{"message": "top"}]}],
        }

        assert format_messages(raw).errors == ["top"]

    def test_syntax_errors_shadow_other_errors(self):
        raw = {
            "errors": [
                "./src/a.js\nModule not found: Error: Can't resolve 'x' in '/p'",
                "./src/b.js\nLine 1:1:  Parsing error: Unexpected token",
            ],
        }

        messages = format_messages(raw)

        assert messages.errors == [f"./src/b.js\n{FRIENDLY_SYNTAX_ERROR_LABEL} Unexpected token (1:1)"]
