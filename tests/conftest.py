"""
Shared test fixtures and configuration.
"""

import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from mcp_installer.installers import UniversalInstaller


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Return a host config path inside a temp directory (not yet created)."""
    return tmp_path / "Claude" / "claude_desktop_config.json"


@pytest.fixture
def installer(config_path: Path) -> UniversalInstaller:
    return UniversalInstaller(config_path)


@pytest.fixture
def stub_tools(installer: UniversalInstaller):
    """Replace external tool probes with controllable AsyncMocks."""

    def _stub(runtime=True, registry=True, launcher=True):
        installer.registry.has_runtime = AsyncMock(return_value=runtime)
        installer.registry.is_registry_package = AsyncMock(return_value=registry)
        installer.registry.has_python_launcher = AsyncMock(return_value=launcher)
        installer.local._npm_install = AsyncMock(return_value=None)
        return installer

    return _stub


def read_json(path: Path):
    return json.loads(path.read_text())


def write_json(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))
