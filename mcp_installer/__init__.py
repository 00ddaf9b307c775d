"""Install MCP servers and register them with a host application."""

__version__ = "0.1.0"
