"""Main CLI interface for MCP Installer."""

import asyncio
import json
import logging
from typing import List, Optional

import typer
from rich import print as rich_print
from rich.console import Console
from rich.table import Table

from ..config.manager import HostConfigManager, SettingsError, SettingsManager
from ..config.models import InstallerSettings
from ..config.paths import resolve_host_config_path
from ..core.manager import MCPInstallerServer
from ..installers import InstallResult, UniversalInstaller

app = typer.Typer(help="MCP Installer - install MCP servers into a host application")
console = Console()

CONFIG_PATH_HELP = "Host configuration file (defaults to the per-OS location)"
SETTINGS_HELP = "Installer settings file (YAML)"


def load_settings(settings_path: Optional[str], config_path: Optional[str]):
    """Load settings, letting an explicit --config-path win over the file."""
    try:
        settings = SettingsManager(settings_path).load_settings()
    except SettingsError as e:
        rich_print(f"[red]Error loading settings: {e}[/red]")
        raise typer.Exit(1)

    if config_path:
        settings.host_config_path = config_path
    return settings


def build_installer(settings: InstallerSettings) -> UniversalInstaller:
    return UniversalInstaller(
        resolve_host_config_path(settings.host_config_path),
        commands=settings.commands,
        enable_local_installs=settings.enable_local_installs,
    )


def report(result: InstallResult) -> None:
    """Print an install result, exiting non-zero on failure."""
    if result.is_error:
        rich_print(f"[red]{result.text}[/red]")
        raise typer.Exit(1)
    rich_print(f"[green]{result.text}[/green]")


@app.command()
def serve(
    config_path: Optional[str] = typer.Option(
        None, "--config-path", "-p", help=CONFIG_PATH_HELP
    ),
    settings: Optional[str] = typer.Option(
        None, "--settings", "-c", help=SETTINGS_HELP
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
):
    """Run the installer as an MCP server over stdio."""
    installer_settings = load_settings(settings, config_path)
    setup_logging(verbose, installer_settings.log_level)

    try:
        asyncio.run(MCPInstallerServer(installer_settings).start())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Shutting down MCP Installer")
    except Exception as e:
        rich_print(f"[red]Error running MCP Installer: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def install(
    name: str = typer.Argument(..., help="Package name on npm or PyPI"),
    arg: Optional[List[str]] = typer.Option(
        None, "--arg", "-a", help="Extra launch argument (repeatable)"
    ),
    env: Optional[List[str]] = typer.Option(
        None, "--env", "-e", help="KEY=VALUE environment variable (repeatable)"
    ),
    config_path: Optional[str] = typer.Option(
        None, "--config-path", "-p", help=CONFIG_PATH_HELP
    ),
    settings: Optional[str] = typer.Option(
        None, "--settings", "-c", help=SETTINGS_HELP
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
):
    """Install a registry package and register it with the host."""
    installer_settings = load_settings(settings, config_path)
    setup_logging(verbose, installer_settings.log_level)
    installer = build_installer(installer_settings)

    try:
        result = asyncio.run(
            installer.install_registry_server(name, arg or None, env or None)
        )
    except Exception as e:
        rich_print(f"[red]Error installing server: {e}[/red]")
        raise typer.Exit(1)
    report(result)


@app.command("install-local")
def install_local(
    path: str = typer.Argument(..., help="Directory containing the server code"),
    arg: Optional[List[str]] = typer.Option(
        None, "--arg", "-a", help="Extra launch argument (repeatable)"
    ),
    env: Optional[List[str]] = typer.Option(
        None, "--env", "-e", help="KEY=VALUE environment variable (repeatable)"
    ),
    config_path: Optional[str] = typer.Option(
        None, "--config-path", "-p", help=CONFIG_PATH_HELP
    ),
    settings: Optional[str] = typer.Option(
        None, "--settings", "-c", help=SETTINGS_HELP
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
):
    """Install a local server directory and register its executables."""
    installer_settings = load_settings(settings, config_path)
    setup_logging(verbose, installer_settings.log_level)
    installer = build_installer(installer_settings)

    try:
        result = asyncio.run(
            installer.install_local_server(path, arg or None, env or None)
        )
    except Exception as e:
        rich_print(f"[red]Error installing server: {e}[/red]")
        raise typer.Exit(1)
    report(result)


@app.command("list")
def list_servers(
    config_path: Optional[str] = typer.Option(
        None, "--config-path", "-p", help=CONFIG_PATH_HELP
    ),
    settings: Optional[str] = typer.Option(
        None, "--settings", "-c", help=SETTINGS_HELP
    ),
):
    """List servers registered in the host configuration."""
    installer_settings = load_settings(settings, config_path)
    host_path = resolve_host_config_path(installer_settings.host_config_path)
    servers = HostConfigManager(host_path).list_servers()

    if not servers:
        rich_print(f"[yellow]No servers registered in {host_path}[/yellow]")
        return

    table = Table(title="Registered MCP Servers")
    table.add_column("Server", style="cyan")
    table.add_column("Command", style="magenta")
    table.add_column("Args", style="yellow")
    table.add_column("Env", style="green")

    for server_name, entry in servers.items():
        if not isinstance(entry, dict):
            table.add_row(server_name, "", json.dumps(entry), "")
            continue
        env_keys = ", ".join(entry.get("env") or {})
        table.add_row(
            server_name,
            str(entry.get("command", "")),
            json.dumps(entry.get("args", [])),
            env_keys,
        )

    console.print(table)


@app.command("config-path")
def config_path_command(
    config_path: Optional[str] = typer.Option(
        None, "--config-path", "-p", help=CONFIG_PATH_HELP
    ),
    settings: Optional[str] = typer.Option(
        None, "--settings", "-c", help=SETTINGS_HELP
    ),
):
    """Show which host configuration file would be written."""
    installer_settings = load_settings(settings, config_path)
    typer.echo(str(resolve_host_config_path(installer_settings.host_config_path)))


def setup_logging(verbose: bool, log_level: str = "info"):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else getattr(logging, log_level.upper())
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def main():
    """Main entry point for CLI."""
    app()
