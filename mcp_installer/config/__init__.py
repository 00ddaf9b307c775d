"""Configuration system for MCP Installer."""

from .manager import HostConfigManager, SettingsError, SettingsManager
from .models import HostConfig, InstallerSettings, ServerEntry
from .paths import default_host_config_path, resolve_host_config_path

__all__ = [
    "HostConfig",
    "HostConfigManager",
    "InstallerSettings",
    "ServerEntry",
    "SettingsError",
    "SettingsManager",
    "default_host_config_path",
    "resolve_host_config_path",
]
