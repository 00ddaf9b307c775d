"""Host configuration file locations."""

import os
import sys
from pathlib import Path
from typing import Optional

CONFIG_FILENAME = "claude_desktop_config.json"


def default_host_config_path(platform: Optional[str] = None) -> Path:
    """Return the per-OS location of the host's configuration document."""
    platform = platform or sys.platform
    home = Path.home()

    if platform == "darwin":
        return home / "Library" / "Application Support" / "Claude" / CONFIG_FILENAME

    if platform.startswith("win"):
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) if appdata else home / "AppData" / "Roaming"
        return base / "Claude" / CONFIG_FILENAME

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_config) if xdg_config else home / ".config"
    return base / "Claude" / CONFIG_FILENAME


def resolve_host_config_path(explicit: Optional[str] = None) -> Path:
    """Use an explicit path when given, otherwise the per-OS default."""
    if explicit:
        return Path(explicit).expanduser()
    return default_host_config_path()
