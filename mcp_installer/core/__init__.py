"""Core MCP Installer server."""

from .manager import MCPInstallerServer

__all__ = ["MCPInstallerServer"]
