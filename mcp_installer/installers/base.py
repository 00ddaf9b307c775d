"""Base installer interface."""

import asyncio
import logging
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

import mcp.types as types
from pydantic import BaseModel

from ..config.manager import HostConfigManager
from ..config.models import CommandsConfig, ServerEntry

logger = logging.getLogger(__name__)


class InstallationError(Exception):
    """Raised when an external command fails."""

    pass


class InstallResult(BaseModel):
    """Outcome of a single install request."""

    text: str
    is_error: bool = False

    @classmethod
    def success(cls, text: str) -> "InstallResult":
        return cls(text=text)

    @classmethod
    def failure(cls, text: str) -> "InstallResult":
        return cls(text=text, is_error=True)

    def to_content(self) -> list[types.TextContent]:
        return [types.TextContent(type="text", text=self.text)]


def parse_env_vars(env: Optional[List[str]]) -> Optional[Dict[str, str]]:
    """Turn KEY=VALUE strings into a mapping, splitting on the first '='.

    Returns None when env was not supplied at all, so callers can tell
    "no env" apart from an explicitly empty one.
    """
    if env is None:
        return None

    env_vars = {}
    for item in env:
        key, _, value = item.partition("=")
        env_vars[key] = value
    return env_vars


def server_name_for(package_name: str) -> str:
    """Strip an npm scope: '@scope/pkg' -> 'pkg'."""
    if package_name.startswith("@") and "/" in package_name:
        return package_name.split("/", 1)[1]
    return package_name


class BaseInstaller:
    """Shared plumbing for installers that register servers with the host."""

    def __init__(
        self,
        config_manager: HostConfigManager,
        commands: Optional[CommandsConfig] = None,
    ):
        self.config_manager = config_manager
        self.commands = commands or CommandsConfig()

    async def _run_command(
        self, cmd: list, cwd: Optional[Path] = None, env: Optional[Dict] = None
    ) -> subprocess.CompletedProcess:
        """Run a command asynchronously."""
        logger.debug(f"Running command: {' '.join(cmd)} in {cwd}")

        process = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=cwd,
            env=env,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )

        stdout, stderr = await process.communicate()

        if process.returncode != 0:
            error_msg = (
                f"Command failed: {' '.join(cmd)}\n"
                f"Stdout: {stdout.decode(errors='replace')}\n"
                f"Stderr: {stderr.decode(errors='replace')}"
            )
            raise InstallationError(error_msg)

        return subprocess.CompletedProcess(
            args=cmd, returncode=process.returncode, stdout=stdout, stderr=stderr
        )

    async def _probe(self, cmd: list, cwd: Optional[Path] = None) -> bool:
        """Return True iff the command runs and exits successfully.

        A missing executable and a failing one are both reported as False.
        """
        try:
            await self._run_command(cmd, cwd=cwd)
        except (InstallationError, OSError) as e:
            logger.debug(f"Probe failed: {' '.join(cmd)}: {e}")
            return False
        return True

    async def has_runtime(self) -> bool:
        return await self._probe([self.commands.node, "--version"])

    def _register(self, servers: Dict[str, ServerEntry]) -> List[str]:
        names = self.config_manager.add_servers(servers)
        for name in names:
            logger.info(f"Registered MCP server: {name}")
        return names
