"""Main CLI entry point for plugin-resources.

This module defines the Typer application and its commands. It is the
top-level caller that turns an aborted installation into a process exit.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import structlog
import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from plugin_resources import LogLevel

from . import __version__

if TYPE_CHECKING:
    from plugin_resources import InstallResult

app = typer.Typer(
    name="plugin-resources",
    help="Install the remote resources declared by plugins.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

EXIT_ERROR = 1
EXIT_ABORTED = 1
EXIT_BAD_ROOT = 2


def configure_logging(level: LogLevel) -> None:
    """Send installer events to stderr, dropping those below ``level``.

    aiohttp logs through the standard library, so the root logger follows the
    same level.
    """
    numeric_level = logging.getLevelNamesMapping()[level.value.upper()]

    logging.basicConfig(format="%(message)s", level=numeric_level, stream=sys.stderr, force=True)

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        # The install command may run more than once per process (tests), each
        # time against a different stderr.
        cache_logger_on_first_use=False,
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]plugin-resources[/bold blue] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """plugin-resources: install the remote resources declared by plugins."""


ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Configuration file. Defaults to $PLUGIN_RESOURCES_CONFIG, then the XDG location.",
    ),
]


@app.command()
def install(
    root: Annotated[Path, typer.Argument(help="Existing directory to install resources into.")],
    config_path: ConfigOption = None,
    log_level: Annotated[
        LogLevel | None,
        typer.Option("--log-level", "-l", help="Override the configured log level."),
    ] = None,
) -> None:
    """Fetch and install every declared resource under ROOT."""
    from plugin_resources import ConfigManager, ResourceInstaller, ResourceInstallError

    try:
        config_manager = ConfigManager(config_path)
        config = config_manager.load()
        plugins = config_manager.load_plugins()
    except (ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(code=EXIT_ERROR) from None

    configure_logging(log_level or config.log_level)

    if not plugins:
        console.print("[yellow]No plugins declared[/yellow]")
        return

    if not root.is_dir():
        console.print(f"[red]Install root does not exist or is not a directory: {root}[/red]")
        raise typer.Exit(code=EXIT_BAD_ROOT)

    installer = ResourceInstaller.from_config(config, plugins, output=sys.stderr)
    try:
        result = asyncio.run(installer.install_to(root))
    except ResourceInstallError as e:
        console.print(f"[red]Installation failed: {escape(str(e))}[/red]")
        raise typer.Exit(code=EXIT_ERROR) from None

    _print_result(result)
    if result.aborted:
        raise typer.Exit(code=EXIT_ABORTED)


@app.command(name="list")
def list_resources(config_path: ConfigOption = None) -> None:
    """Show where each declared resource would be installed, without fetching."""
    from plugin_resources import ConfigManager, ResourceInstallError, resolve

    try:
        plugins = ConfigManager(config_path).load_plugins()
    except (ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(code=EXIT_ERROR) from None

    if not plugins:
        console.print("[yellow]No plugins declared[/yellow]")
        return

    table = Table(title="Declared Resources")
    table.add_column("Plugin", style="cyan")
    table.add_column("Source")
    table.add_column("Installs To", style="green")

    for plugin in plugins:
        try:
            resolved = resolve(plugin)
        except ResourceInstallError as e:
            table.add_row(plugin.name, "", f"[red]{escape(str(e))}[/red]")
            continue
        for resource in resolved:
            table.add_row(plugin.name, resource.uri, str(resource.relative_path))

    console.print(table)


def _print_result(result: InstallResult) -> None:
    table = Table(title=f"Installed Resources (run {result.run_id})")
    table.add_column("Plugin", style="cyan")
    table.add_column("Path", style="green")
    table.add_column("Bytes", justify="right")
    table.add_column("Cached", justify="center")

    for item in result.installed:
        table.add_row(
            item.plugin_name,
            str(item.path.relative_to(result.root)),
            str(item.size_bytes),
            "yes" if item.from_cache else "",
        )

    console.print(table)

    if result.aborted:
        console.print(
            f"[bold red]Installation aborted[/bold red] at {result.failed_uri} "
            f"(plugin {result.failed_plugin})"
        )
    else:
        console.print(
            f"[bold green]Installed {len(result.installed)} resource(s)[/bold green], "
            f"{result.fetched} fetched"
        )


if __name__ == "__main__":
    app()
