"""MCP server installers."""

from .base import (
    BaseInstaller,
    InstallationError,
    InstallResult,
    parse_env_vars,
    server_name_for,
)
from .local import LocalInstaller, ManifestError, find_executables
from .registry import RegistryInstaller
from .universal import UniversalInstaller

__all__ = [
    "BaseInstaller",
    "InstallResult",
    "InstallationError",
    "LocalInstaller",
    "ManifestError",
    "RegistryInstaller",
    "UniversalInstaller",
    "find_executables",
    "parse_env_vars",
    "server_name_for",
]
