"""
Pytest configuration and shared fixtures for the wpbuild test suite.

This module provides common fixtures, fake bundling engines and sample
configuration for all test modules.
"""

import shutil
import sys
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wpbuild.engine import AbstractBundlerEngine, AbstractCompiler, CompilationStatistics  # noqa: E402
from wpbuild.models import FileEntry, ProjectConfig, ServerConfig  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_project_data():
    """Raw [project] table as written in wpbuild.project.toml."""
    return {
        "app_name": "wpackioDemo",
        "type": "plugin",
        "slug": "demo-plugin",
        "output_path": "dist",
        "has_react": True,
        "has_sass": True,
        "alias": {"@components": "./src/components"},
        "externals": {"jquery": "jQuery"},
        "files": [
            {"name": "app", "entry": {"main": ["./src/app/index.js"]}},
            {"name": "admin", "entry": {"settings": "./src/admin/settings.js"}},
        ],
        "banner": {
            "name": "Demo Plugin",
            "author": "Demo Author",
            "license": "GPL-3.0",
            "version": "1.2.0",
        },
    }


@pytest.fixture
def sample_server_data():
    """Raw [server] table as written in wpbuild.server.toml."""
    return {
        "host": "127.0.0.1",
        "port": 3030,
        "proxy": "http://wp.local",
        "ui_port": 3031,
        "open": False,
    }


@pytest.fixture
def project_config():
    return ProjectConfig(
        app_name="wpackioDemo",
        type="plugin",
        slug="demo-plugin",
        files=[FileEntry(name="app", entry={"main": ["./src/app/index.js"]})],
    )


@pytest.fixture
def server_config():
    return ServerConfig(host="127.0.0.1", port=3030, proxy="http://wp.local")


@pytest.fixture
def config_files(temp_dir, sample_project_data, sample_server_data):
    """Create project and server configuration files in a project root."""
    import toml

    project_file = temp_dir / "wpbuild.project.toml"
    with open(project_file, "w") as f:
        toml.dump({"project": sample_project_data}, f)

    server_file = temp_dir / "wpbuild.server.toml"
    with open(server_file, "w") as f:
        toml.dump({"server": sample_server_data}, f)

    return {"project": project_file, "server": server_file, "dir": temp_dir}


# ============================================================================
# Fake Bundling Engine
# ============================================================================


def make_stats(
    errors: Optional[List[Any]] = None,
    warnings: Optional[List[Any]] = None,
    **extra: Any,
) -> CompilationStatistics:
    """Build statistics with the given messages and a single emitted asset."""
    raw: Dict[str, Any] = {
        "errors": errors or [],
        "warnings": warnings or [],
        "hash": "3f2a9c",
        "version": "5.91.0",
        "time": 812,
        "assets": [
            {"name": "main-1a2b3c4d.js", "size": 1536, "emitted": True, "chunkNames": ["main"]}
        ],
        "entrypoints": {
            "main": {"name": "main", "assets": [{"name": "main-1a2b3c4d.js", "size": 1536}]}
        },
    }
    raw.update(extra)
    return CompilationStatistics(raw)


class FakeCompiler(AbstractCompiler):
    """Reports a canned result from a background thread, like a real engine."""

    def __init__(self, engine: "FakeEngine", config):
        self.engine = engine
        self.config = config

    def run(self, callback, on_progress=None):
        def report():
            if on_progress is not None:
                for percent, message in self.engine.progress:
                    on_progress(percent, message)
            for _ in range(self.engine.callback_count):
                callback(self.engine.error, self.engine.stats)

        thread = threading.Thread(target=report, daemon=True)
        thread.start()


class FakeEngine(AbstractBundlerEngine):
    """Bundling engine that records submissions and replays a fixed result."""

    def __init__(self, stats=None, error=None, progress=(), callback_count=1):
        self.stats = stats
        self.error = error
        self.progress = list(progress)
        self.callback_count = callback_count
        self.submitted = []

    def submit(self, config):
        self.submitted.append(config)
        return FakeCompiler(self, config)


@pytest.fixture
def fake_engine_factory():
    """Provide the FakeEngine class for building engines inline."""
    return FakeEngine


@pytest.fixture
def stats_factory():
    """Provide make_stats for building statistics inline."""
    return make_stats
