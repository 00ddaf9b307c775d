"""Registry-based MCP server installer (npx first, uvx as fallback)."""

import logging
from typing import List, Optional

from ..config.models import ServerEntry
from .base import BaseInstaller, InstallResult, parse_env_vars, server_name_for

logger = logging.getLogger(__name__)

RESTART_HINT = "Tell the user to restart the app to pick it up."


class RegistryInstaller(BaseInstaller):
    """Installer for packages published to the npm or Python registries."""

    async def has_python_launcher(self) -> bool:
        return await self._probe([self.commands.uvx, "--version"])

    async def is_registry_package(self, name: str) -> bool:
        """Check the npm registry; lookup errors and unknown names look alike."""
        return await self._probe([self.commands.npm, "view", name, "version"])

    async def install(
        self,
        name: str,
        args: Optional[List[str]] = None,
        env: Optional[List[str]] = None,
    ) -> InstallResult:
        """Register a registry package, preferring npx over uvx."""
        if not await self.has_runtime():
            return InstallResult.failure(
                "Node.js is not installed, please install it first "
                "(https://nodejs.org)."
            )

        if await self.is_registry_package(name):
            command = self.commands.npx
        elif await self.has_python_launcher():
            command = self.commands.uvx
        else:
            return InstallResult.failure(
                f"{name} was not found on npm and Python uv is not installed. "
                "Ask the user to install uv (https://docs.astral.sh/uv/) and retry."
            )

        logger.info(f"Installing registry package {name} via {command}")
        server_name = server_name_for(name)
        entry = ServerEntry(
            command=command,
            args=[name, *(args or [])],
            env=parse_env_vars(env),
        )
        self._register({server_name: entry})

        return InstallResult.success(
            f"Installed MCP server {server_name} via {command} successfully! "
            f"{RESTART_HINT}"
        )
