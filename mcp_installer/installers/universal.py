"""Installer front door shared by the MCP server and the CLI."""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..config.manager import HostConfigManager
from ..config.models import CommandsConfig
from .base import InstallResult
from .local import LocalInstaller
from .registry import RegistryInstaller

logger = logging.getLogger(__name__)


class UniversalInstaller:
    """Routes install requests to the registry or local installer.

    The host config path is fixed at construction; nothing here is global.
    """

    def __init__(
        self,
        config_path: Union[str, Path],
        commands: Optional[CommandsConfig] = None,
        enable_local_installs: bool = True,
    ):
        self.config_manager = HostConfigManager(config_path)
        self.commands = commands or CommandsConfig()
        self.enable_local_installs = enable_local_installs
        self.registry = RegistryInstaller(self.config_manager, self.commands)
        self.local = LocalInstaller(self.config_manager, self.commands)

    @property
    def config_path(self) -> Path:
        return self.config_manager.config_path

    async def install_registry_server(
        self,
        name: str,
        args: Optional[List[str]] = None,
        env: Optional[List[str]] = None,
    ) -> InstallResult:
        return await self.registry.install(name, args, env)

    async def install_local_server(
        self,
        path: str,
        args: Optional[List[str]] = None,
        env: Optional[List[str]] = None,
    ) -> InstallResult:
        if not self.enable_local_installs:
            return InstallResult.failure("Local installs are disabled.")
        return await self.local.install(path, args, env)
