"""
Unit tests for outcome classification.
"""

import pytest

from wpbuild.classification import SUMMARY_OPTIONS, classify_messages, classify_statistics
from wpbuild.models import BuildOutcome, BuildStatus, CompilationMessages


@pytest.mark.unit
class TestClassifyMessages:
    """Test cases for the three-way decision."""

    def test_success_uses_summary(self, stats_factory):
        stats = stats_factory()

        outcome = classify_messages(CompilationMessages(), stats)

        assert outcome == BuildOutcome.success(stats.to_string(**SUMMARY_OPTIONS))

    def test_warn_joins_warnings(self, stats_factory):
        messages = CompilationMessages(warnings=["one", "two"])

        outcome = classify_messages(messages, stats_factory())

        assert outcome.status is BuildStatus.WARN
        assert outcome.log == "one\ntwo"
        assert outcome.errors == ()

    def test_error_ignores_warnings(self, stats_factory):
        messages = CompilationMessages(errors=["broken"], warnings=["one"])

        outcome = classify_messages(messages, stats_factory())

        assert outcome.status is BuildStatus.ERROR
        assert outcome.errors == ("broken",)
        assert outcome.log == "broken"

    def test_summary_options_request_assets_and_entrypoints_only(self):
        enabled = sorted(key for key, value in SUMMARY_OPTIONS.items() if value)

        assert enabled == ["assets", "entrypoints"]


@pytest.mark.unit
class TestClassifyStatistics:
    """Test cases for classification straight from statistics."""

    def test_formats_before_classifying(self, stats_factory):
        stats = stats_factory(
            errors=[{"moduleName": "./src/app.js", "message": "Module not found: Error: Can't resolve './foo' in '/p'"}]
        )

        outcome = classify_statistics(stats)

        assert outcome.errors == ("./src/app.js\nModule not found: Can't resolve './foo' in '/p'",)

    def test_multi_compiler_warnings(self, stats_factory):
        stats = stats_factory(
            children=[
                {"name": "app", "errors": [], "warnings": ["w-app"]},
                {"name": "admin", "errors": [], "warnings": ["w-admin"]},
            ]
        )

        outcome = classify_statistics(stats)

        assert outcome == BuildOutcome.warn("w-app\nw-admin")
