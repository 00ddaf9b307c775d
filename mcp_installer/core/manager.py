"""MCP server exposing the installer as tools."""

import logging
from typing import Any, Dict, Optional

import mcp.types as types
from mcp.server.lowlevel import Server

from ..config.models import InstallerSettings
from ..config.paths import resolve_host_config_path
from ..installers import InstallResult, UniversalInstaller

logger = logging.getLogger(__name__)

INSTALL_REPO_TOOL = "install_repo_mcp_server"
INSTALL_LOCAL_TOOL = "install_local_mcp_server"

_ARGS_SCHEMA = {
    "type": "array",
    "items": {"type": "string"},
    "description": "The arguments to pass along",
}
_ENV_SCHEMA = {
    "type": "array",
    "items": {"type": "string"},
    "description": "The environment variables to set, delimited by =",
}


class ToolCallError(Exception):
    """Raised from a tool handler so the host sees the result with isError set."""

    pass


class MCPInstallerServer:
    """MCP server that installs other MCP servers into the host config."""

    def __init__(
        self,
        settings: Optional[InstallerSettings] = None,
        installer: Optional[UniversalInstaller] = None,
    ):
        self.settings = settings or InstallerSettings()

        if installer is None:
            installer = UniversalInstaller(
                resolve_host_config_path(self.settings.host_config_path),
                commands=self.settings.commands,
                enable_local_installs=self.settings.enable_local_installs,
            )
        self.installer = installer

        self.mcp_server = Server(self.settings.server.name)
        self._setup_mcp_handlers()

    def get_tools(self) -> list[types.Tool]:
        tools = [
            types.Tool(
                name=INSTALL_REPO_TOOL,
                description=(
                    "Install an MCP server via npx or uvx and register it "
                    "with the host application"
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "name": {
                            "type": "string",
                            "description": "The package name of the MCP server",
                        },
                        "args": _ARGS_SCHEMA,
                        "env": _ENV_SCHEMA,
                    },
                    "required": ["name"],
                },
            )
        ]

        if self.installer.enable_local_installs:
            tools.append(
                types.Tool(
                    name=INSTALL_LOCAL_TOOL,
                    description=(
                        "Install an MCP server from a local directory and "
                        "register it with the host application"
                    ),
                    inputSchema={
                        "type": "object",
                        "properties": {
                            "path": {
                                "type": "string",
                                "description": "The path to the MCP server code",
                            },
                            "args": _ARGS_SCHEMA,
                            "env": _ENV_SCHEMA,
                        },
                        "required": ["path"],
                    },
                )
            )

        return tools

    async def handle_tool_call(
        self, name: str, arguments: Optional[Dict[str, Any]]
    ) -> InstallResult:
        """Dispatch a tool call; every failure comes back as a result."""
        arguments = arguments or {}
        logger.info(f"Received tool call: {name}")

        try:
            if name == INSTALL_REPO_TOOL:
                return await self.installer.install_registry_server(
                    arguments["name"], arguments.get("args"), arguments.get("env")
                )
            if name == INSTALL_LOCAL_TOOL:
                return await self.installer.install_local_server(
                    arguments["path"], arguments.get("args"), arguments.get("env")
                )
            return InstallResult.failure(f"Unknown tool: {name}")
        except Exception as e:
            logger.error(f"Exception in tool call {name}: {e}", exc_info=True)
            return InstallResult.failure(f"Error installing MCP server: {e}")

    def _setup_mcp_handlers(self):
        """Set up MCP server handlers."""

        @self.mcp_server.list_tools()
        async def list_tools() -> list[types.Tool]:
            return self.get_tools()

        @self.mcp_server.call_tool()
        async def call_tool(name: str, arguments: dict) -> list[types.TextContent]:
            result = await self.handle_tool_call(name, arguments)
            if result.is_error:
                # The low-level server turns handler exceptions into isError results
                raise ToolCallError(result.text)
            return result.to_content()

    async def start(self) -> None:
        """Serve tool calls over stdio until the host disconnects."""
        from mcp.server.lowlevel.server import InitializationOptions
        from mcp.server.stdio import stdio_server

        logger.info(
            f"MCP Installer '{self.settings.server.name}' writing to "
            f"{self.installer.config_path}"
        )

        async with stdio_server() as streams:
            init_options = InitializationOptions(
                server_name=self.settings.server.name,
                server_version=self.settings.server.version,
                capabilities=types.ServerCapabilities(
                    tools=types.ToolsCapability(listChanged=False),
                ),
                instructions=None,
            )

            await self.mcp_server.run(*streams, initialization_options=init_options)
