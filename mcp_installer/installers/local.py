"""Local filesystem MCP server installer."""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from ..config.models import ServerEntry
from .base import (
    BaseInstaller,
    InstallationError,
    InstallResult,
    parse_env_vars,
    server_name_for,
)
from .registry import RESTART_HINT

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "package.json"


class ManifestError(Exception):
    """Raised when a package manifest cannot be read."""

    pass


def find_executables(install_path: Path) -> Dict[str, Path]:
    """Map executable names declared in package.json to absolute script paths.

    Uses the ``bin`` field when present; otherwise the single ``main`` entry
    (defaulting to index.js) named after the package.
    """
    manifest_path = install_path / MANIFEST_FILENAME
    try:
        with open(manifest_path, "r") as f:
            package_data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ManifestError(f"Could not read {manifest_path}: {e}")

    if not isinstance(package_data, dict):
        raise ManifestError(f"{manifest_path} does not contain a JSON object")

    package_name = package_data.get("name") or install_path.name
    bin_entries = package_data.get("bin")

    if isinstance(bin_entries, str):
        bin_entries = {package_name: bin_entries}
    elif not isinstance(bin_entries, dict) or not bin_entries:
        bin_entries = {package_name: package_data.get("main") or "index.js"}

    return {
        server_name_for(name): (install_path / entry).resolve()
        for name, entry in bin_entries.items()
    }


class LocalInstaller(BaseInstaller):
    """Installer for server sources already on this machine."""

    async def _npm_install(self, install_path: Path) -> None:
        """Run npm install in directory."""
        await self._run_command([self.commands.npm, "install"], cwd=install_path)

    async def install(
        self,
        path: str,
        args: Optional[List[str]] = None,
        env: Optional[List[str]] = None,
    ) -> InstallResult:
        """Install dependencies for a local package and register its executables."""
        install_path = Path(path).expanduser()

        if not install_path.exists():
            return InstallResult.failure(f"Path {path} does not exist locally!")

        install_path = install_path.resolve()
        if not (install_path / MANIFEST_FILENAME).exists():
            return InstallResult.failure(
                f"Can't figure out how to install {path}: no {MANIFEST_FILENAME} found."
            )

        logger.info(f"Installing Node.js dependencies in {install_path}")
        try:
            await self._npm_install(install_path)
        except (InstallationError, OSError) as e:
            logger.error(f"npm install failed in {install_path}: {e}")
            return InstallResult.failure(f"npm install failed for {path}: {e}")

        try:
            executables = find_executables(install_path)
        except ManifestError as e:
            return InstallResult.failure(f"Can't figure out how to install {path}: {e}")

        env_vars = parse_env_vars(env)
        servers = {
            name: ServerEntry(
                command=self.commands.node,
                args=[str(script), *(args or [])],
                env=dict(env_vars) if env_vars is not None else None,
            )
            for name, script in executables.items()
        }
        names = self._register(servers)

        return InstallResult.success(
            f"Installed the following MCP servers via npm successfully: "
            f"{', '.join(names)}. {RESTART_HINT}"
        )
