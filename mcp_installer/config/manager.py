"""Configuration managers for the host document and installer settings."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from .models import HostConfig, InstallerSettings, ServerEntry

logger = logging.getLogger(__name__)


class SettingsError(Exception):
    """Raised when the installer settings file cannot be used."""

    pass


class HostConfigManager:
    """Read-merge-write access to the host's JSON configuration document.

    There is no cross-process locking: two writers racing on the same file
    can lose one of the updates.
    """

    def __init__(self, config_path: Union[str, Path]):
        self.config_path = Path(config_path)

    def load(self) -> HostConfig:
        """Load the document; a missing or unparseable file reads as empty."""
        if not self.config_path.exists():
            return HostConfig()

        try:
            with open(self.config_path, "r") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable host config {self.config_path}: {e}")
            return HostConfig()

        if not isinstance(data, dict):
            logger.warning(f"Ignoring non-object host config {self.config_path}")
            return HostConfig()

        if not isinstance(data.get("mcpServers", {}), dict):
            logger.warning(f"Replacing non-object mcpServers in {self.config_path}")

        return HostConfig.model_validate(data)

    def save(self, config: HostConfig) -> None:
        """Write the whole document back, formatted for humans."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            json.dump(config.to_document(), f, indent=2)
            f.write("\n")

    def add_servers(self, servers: Dict[str, ServerEntry]) -> list[str]:
        """Merge server entries into the document and persist it."""
        config = self.load()
        for name, entry in servers.items():
            if name in config.mcp_servers:
                logger.info(f"Replacing existing server entry: {name}")
            config.mcp_servers[name] = entry.to_config()

        self.save(config)
        logger.debug(f"Wrote {len(servers)} server entries to {self.config_path}")
        return list(servers)

    def list_servers(self) -> Dict[str, Any]:
        return dict(self.load().mcp_servers)


class SettingsManager:
    def __init__(self, settings_path: Optional[str] = None):
        self.settings_path = Path(settings_path) if settings_path else None

    def load_settings(self) -> InstallerSettings:
        """Load and validate settings; defaults apply when no file is given."""
        if self.settings_path is None:
            return InstallerSettings()

        if not self.settings_path.exists():
            raise SettingsError(f"Settings file not found: {self.settings_path}")

        try:
            with open(self.settings_path, "r") as f:
                settings_data = yaml.safe_load(f) or {}

            # Expand environment variables
            settings_data = self._expand_env_vars(settings_data)

            return InstallerSettings(**settings_data)

        except yaml.YAMLError as e:
            raise SettingsError(f"Invalid YAML syntax: {e}")
        except (TypeError, ValidationError) as e:
            raise SettingsError(f"Settings validation failed: {e}")

    def _expand_env_vars(self, data: Any) -> Any:
        """Recursively expand environment variables in settings."""
        if isinstance(data, dict):
            return {k: self._expand_env_vars(v) for k, v in data.items()}
        elif isinstance(data, list):
            return [self._expand_env_vars(item) for item in data]
        elif isinstance(data, str) and data.startswith("${") and data.endswith("}"):
            env_var = data[2:-1]
            return os.getenv(env_var, data)
        else:
            return data
