"""Configuration data models."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ServerEntry(BaseModel):
    """Launch specification for one MCP server in the host config."""

    command: str
    args: List[str] = Field(default_factory=list)
    env: Optional[Dict[str, str]] = None  # None means no env field at all

    def to_config(self) -> Dict[str, Any]:
        """Serialize for the host config, omitting env when unset."""
        return self.model_dump(exclude_none=True)


class HostConfig(BaseModel):
    """The host application's JSON configuration document."""

    model_config = ConfigDict(extra="allow")

    # Entries are kept raw so shapes this tool doesn't write survive rewrites
    mcp_servers: Dict[str, Any] = Field(default_factory=dict, alias="mcpServers")

    @field_validator("mcp_servers", mode="before")
    @classmethod
    def _coerce_servers(cls, value: Any) -> Dict[str, Any]:
        return value if isinstance(value, dict) else {}

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ServerInfoConfig(BaseModel):
    name: str = "mcp-installer"
    version: str = "0.1.0"


class CommandsConfig(BaseModel):
    """External executables used for probing, installing and launching."""

    node: str = "node"
    npm: str = "npm"
    npx: str = "npx"
    uvx: str = "uvx"


class InstallerSettings(BaseModel):
    host_config_path: Optional[str] = None  # None means the per-OS default
    enable_local_installs: bool = True
    log_level: Literal["debug", "info", "warning", "error"] = "info"
    server: ServerInfoConfig = Field(default_factory=ServerInfoConfig)
    commands: CommandsConfig = Field(default_factory=CommandsConfig)
