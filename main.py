#!/usr/bin/env python3
"""Main entry point for MCP Installer when run as a script."""

import asyncio
import sys
from pathlib import Path

# Add the package to Python path
sys.path.insert(0, str(Path(__file__).parent))

from mcp_installer.config.models import InstallerSettings
from mcp_installer.core.manager import MCPInstallerServer


async def main():
    """Main entry point."""
    config_path = sys.argv[1] if len(sys.argv) > 1 else None

    try:
        server = MCPInstallerServer(InstallerSettings(host_config_path=config_path))
        await server.start()
    except KeyboardInterrupt:
        print("\nShutting down MCP Installer...", file=sys.stderr)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
