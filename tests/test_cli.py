"""
Tests for CLI commands: install, install-local, list and config-path.
"""

import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from typer.testing import CliRunner

from mcp_installer.cli.main import app
from mcp_installer.installers import LocalInstaller, RegistryInstaller
from tests.conftest import read_json, write_json

runner = CliRunner()


@pytest.fixture
def tools_present(monkeypatch):
    monkeypatch.setattr(RegistryInstaller, "has_runtime", AsyncMock(return_value=True))
    monkeypatch.setattr(
        RegistryInstaller, "is_registry_package", AsyncMock(return_value=True)
    )
    monkeypatch.setattr(
        RegistryInstaller, "has_python_launcher", AsyncMock(return_value=True)
    )
    monkeypatch.setattr(LocalInstaller, "_npm_install", AsyncMock(return_value=None))


class TestConfigPathCommand:
    def test_explicit_path(self, config_path: Path):
        result = runner.invoke(app, ["config-path", "--config-path", str(config_path)])
        assert result.exit_code == 0
        assert result.output.strip() == str(config_path)

    def test_path_from_settings(self, tmp_path: Path):
        settings = tmp_path / "settings.yaml"
        settings.write_text(f"host_config_path: {tmp_path / 'from-settings.json'}\n")
        result = runner.invoke(app, ["config-path", "--settings", str(settings)])
        assert result.exit_code == 0
        assert result.output.strip() == str(tmp_path / "from-settings.json")

    def test_bad_settings_file(self, tmp_path: Path):
        result = runner.invoke(
            app, ["config-path", "--settings", str(tmp_path / "missing.yaml")]
        )
        assert result.exit_code == 1
        assert "Error loading settings" in result.output


class TestInstallCommand:
    def test_install_registry_package(self, tools_present, config_path: Path):
        result = runner.invoke(
            app,
            [
                "install",
                "@acme/weather",
                "--arg",
                "units=metric",
                "--env",
                "API_KEY=abc=",
                "--config-path",
                str(config_path),
            ],
        )

        assert result.exit_code == 0, result.output
        assert "npx" in result.output
        assert read_json(config_path)["mcpServers"]["weather"] == {
            "command": "npx",
            "args": ["@acme/weather", "units=metric"],
            "env": {"API_KEY": "abc="},
        }

    def test_install_without_env_omits_field(self, tools_present, config_path: Path):
        result = runner.invoke(
            app, ["install", "left-pad", "--config-path", str(config_path)]
        )
        assert result.exit_code == 0, result.output
        assert "env" not in read_json(config_path)["mcpServers"]["left-pad"]

    def test_install_failure_exits_nonzero(self, monkeypatch, config_path: Path):
        monkeypatch.setattr(
            RegistryInstaller, "has_runtime", AsyncMock(return_value=False)
        )
        result = runner.invoke(
            app, ["install", "left-pad", "--config-path", str(config_path)]
        )
        assert result.exit_code == 1
        assert "Node.js" in result.output
        assert not config_path.exists()


class TestInstallLocalCommand:
    def test_install_local_package(
        self, tools_present, config_path: Path, tmp_path: Path
    ):
        pkg = tmp_path / "srv"
        pkg.mkdir()
        (pkg / "package.json").write_text(
            json.dumps({"name": "srv", "main": "server.js"})
        )

        result = runner.invoke(
            app, ["install-local", str(pkg), "--config-path", str(config_path)]
        )

        assert result.exit_code == 0, result.output
        assert read_json(config_path)["mcpServers"]["srv"] == {
            "command": "node",
            "args": [str((pkg / "server.js").resolve())],
        }

    def test_install_local_disabled_by_settings(
        self, tools_present, config_path: Path, tmp_path: Path
    ):
        settings = tmp_path / "settings.yaml"
        settings.write_text("enable_local_installs: false\n")

        result = runner.invoke(
            app,
            [
                "install-local",
                str(tmp_path),
                "--settings",
                str(settings),
                "--config-path",
                str(config_path),
            ],
        )

        assert result.exit_code == 1
        assert "disabled" in result.output


class TestListCommand:
    def test_empty(self, config_path: Path):
        result = runner.invoke(app, ["list", "--config-path", str(config_path)])
        assert result.exit_code == 0
        assert "No servers registered" in result.output

    def test_lists_entries(self, config_path: Path):
        write_json(
            config_path,
            {
                "mcpServers": {
                    "fetch": {"command": "uvx", "args": ["fetch"], "env": {"UA": "x"}}
                }
            },
        )
        result = runner.invoke(app, ["list", "--config-path", str(config_path)])
        assert result.exit_code == 0
        assert "fetch" in result.output
        assert "uvx" in result.output

    def test_lists_entries_of_unknown_shape(self, config_path: Path):
        write_json(
            config_path,
            {"mcpServers": {"legacy": "disabled", "fs": {"command": "npx", "args": []}}},
        )
        result = runner.invoke(app, ["list", "--config-path", str(config_path)])
        assert result.exit_code == 0, result.output
        assert "legacy" in result.output
        assert "disabled" in result.output
        assert "fs" in result.output
