"""Top-level ``fragcat config`` command.

Shows the resolved assembly settings and, with ``--show-origin``, whether
each value comes from the built-in defaults or .fragcat/config.yaml.
"""

from __future__ import annotations

import typer
from rich.markup import escape
from rich.table import Table

from fragcat.cli.helpers import console, err_console
from fragcat.config import (
    AssemblyConfig,
    config_path,
    load_assembly_config,
    save_assembly_config,
)
from fragcat.core.paths import resolve_project_root
from fragcat.exceptions import ConfigError


def config(
    show_origin: bool = typer.Option(
        False,
        "--show-origin",
        help="Show where each setting comes from (default or config file)",
    ),
    init: bool = typer.Option(
        False,
        "--init",
        help="Write .fragcat/config.yaml with the current settings",
    ),
) -> None:
    """Display the assembly configuration."""
    project_root = resolve_project_root()

    if init:
        existing = config_path(project_root)
        if existing.exists():
            console.print(f"[yellow]{existing} already exists; leaving it untouched.[/yellow]", highlight=False)
            raise typer.Exit(0)
        written = save_assembly_config(AssemblyConfig.defaults(project_root))
        console.print(f"[green]✓[/green] Wrote {written}", highlight=False)
        return

    try:
        settings = load_assembly_config(project_root)
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False, soft_wrap=True)
        raise typer.Exit(1)

    table = Table(title="Assembly Configuration", show_lines=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="bold")
    if show_origin:
        table.add_column("Origin", style="magenta")

    for name, value in settings.to_dict().items():
        display = ", ".join(value) if isinstance(value, list) else str(value)
        if show_origin:
            table.add_row(name, display, _format_origin(settings.origins.get(name)))
        else:
            table.add_row(name, display)

    console.print(table)


def _format_origin(origin: str | None) -> str:
    """Format an origin label for display with color coding."""
    if origin is None:
        return "[red]unknown[/red]"
    colors = {
        "config": "green",
        "default": "dim",
        "cli": "blue",
    }
    color = colors.get(origin, "white")
    return f"[{color}]{origin}[/{color}]"


__all__ = ["config"]
