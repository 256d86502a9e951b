"""
Unit tests for compilation statistics.
"""

import pytest

from wpbuild.engine import CompilationStatistics, format_size


@pytest.mark.unit
class TestFormatSize:
    """Test cases for webpack-style size formatting."""

    @pytest.mark.parametrize(
        "size,expected",
        [
            (0, "0 bytes"),
            (512, "512 bytes"),
            (1536, "1.5 KiB"),
            (1234567, "1.18 MiB"),
            (3 * 1024 ** 3, "3 GiB"),
            (0.5, "0.5 bytes"),
        ],
    )
    def test_sizes(self, size, expected):
        assert format_size(size) == expected

    def test_unknown(self):
        assert format_size(None) == "unknown size"
        assert format_size(float("nan")) == "unknown size"


@pytest.mark.unit
class TestToJson:
    """Test cases for structured reports."""

    def test_full_presets_copy(self, stats_factory):
        stats = stats_factory(errors=["boom"])

        report = stats.to_json("verbose")
        report["errors"].append("mutated")

        assert stats.to_json("normal")["errors"] == ["boom"]
        assert stats.to_json("summary")["assets"][0]["name"] == "main-1a2b3c4d.js"

    def test_messages_only(self, stats_factory):
        stats = stats_factory(errors=["e"], warnings=["w"])

        assert stats.to_json("errors-warnings") == {"errors": ["e"], "warnings": ["w"]}
        assert stats.to_json("errors-only") == {"errors": ["e"]}
        assert stats.to_json("none") == {}

    def test_messages_only_children(self):
        stats = CompilationStatistics(
            {"children": [{"name": "app", "errors": ["e"], "warnings": []}]}
        )

        assert stats.to_json("errors-only") == {"errors": [], "children": [{"errors": ["e"]}]}

    def test_unknown_preset(self, stats_factory):
        with pytest.raises(ValueError, match="Unknown stats preset"):
            stats_factory().to_json("everything")


@pytest.mark.unit
class TestMessages:
    """Test cases for error and warning detection."""

    def test_flags(self, stats_factory):
        assert not stats_factory().has_errors()
        assert stats_factory(errors=["e"]).has_errors()
        assert stats_factory(warnings=["w"]).has_warnings()

    def test_child_messages_count(self):
        stats = CompilationStatistics(
            {"errors": [], "warnings": [], "children": [{"errors": [], "warnings": ["w"]}]}
        )

        assert stats.has_warnings()
        assert not stats.has_errors()


@pytest.mark.unit
class TestToString:
    """Test cases for the human-readable summary."""

    def test_assets_and_entrypoints(self, stats_factory):
        text = stats_factory().to_string()

        assert text == (
            "asset main-1a2b3c4d.js 1.5 KiB [emitted] (name: main)\n"
            "Entrypoint main 1.5 KiB = main-1a2b3c4d.js"
        )

    def test_sections_disabled(self, stats_factory):
        assert stats_factory().to_string(assets=False, entrypoints=False) == ""

    def test_header_sections(self, stats_factory):
        text = stats_factory().to_string(hash=True, version=True, timings=True, assets=False,
                                         entrypoints=False)

        assert text.splitlines() == ["Hash: 3f2a9c", "Version: webpack 5.91.0", "Time: 812 ms"]

    def test_big_asset(self, stats_factory):
        stats = stats_factory(assets=[{"name": "vendor.js", "size": 400000, "isOverSizeLimit": True}])

        assert stats.to_string(entrypoints=False) == "asset vendor.js 391 KiB [big]"

    def test_webpack4_entrypoint_assets(self, stats_factory):
        stats = stats_factory(entrypoints={"main": {"assets": ["runtime.js", "main.js"], "assetsSize": 2048}})

        assert stats.to_string(assets=False) == "Entrypoint main 2 KiB = runtime.js main.js"

    def test_colors(self, stats_factory):
        text = stats_factory().to_string(colors=True, entrypoints=False)

        assert "\x1b[1m\x1b[32mmain-1a2b3c4d.js\x1b[39m\x1b[22m" in text

    def test_children_sections(self, stats_factory):
        stats = CompilationStatistics(
            {
                "children": [
                    stats_factory().to_json() | {"name": "app"},
                    {"name": "admin", "assets": [{"name": "admin.js", "size": 10}]},
                ]
            }
        )

        assert stats.to_string() == (
            "app:\n"
            "  asset main-1a2b3c4d.js 1.5 KiB [emitted] (name: main)\n"
            "  Entrypoint main 1.5 KiB = main-1a2b3c4d.js\n"
            "\n"
            "admin:\n"
            "  asset admin.js 10 bytes"
        )
