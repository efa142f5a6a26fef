"""Order command: show the assembly order without writing."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from fragcat.cli.helpers import (
    ConsoleSink,
    console,
    err_console,
    print_cycle,
    quiet_logging,
    resolve_config_or_exit,
)
from fragcat.cli.ui import order_table
from fragcat.diagnostics import CollectingSink
from fragcat.exceptions import CyclicDependencyError, FragcatError
from fragcat.fragments.models import display_path
from fragcat.fragments.pipeline import plan_assembly


def order(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help="Fragment root directory"),
    extensions: Optional[List[str]] = typer.Option(None, "--ext", "-e", help="Fragment file extension (repeatable)"),
    encoding: Optional[str] = typer.Option(None, "--encoding", help="Text encoding for fragments"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
) -> None:
    """Print the order fragments would be assembled in."""
    if json_output:
        quiet_logging()
    config = resolve_config_or_exit(root, None, extensions, encoding)
    sink = CollectingSink() if json_output else ConsoleSink()

    try:
        plan = plan_assembly(config, sink=sink)
    except CyclicDependencyError as exc:
        if json_output:
            print(json.dumps({
                "status": "cycle",
                "error": str(exc),
                "cycle": [display_path(path, config.root_dir) for path in exc.cycle],
            }, indent=2))
        else:
            print_cycle(exc, config.root_dir)
        raise typer.Exit(1)
    except FragcatError as exc:
        if json_output:
            print(json.dumps({"status": "error", "error": str(exc)}, indent=2))
        else:
            err_console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False, soft_wrap=True)
        raise typer.Exit(1)

    if json_output:
        print(json.dumps({
            "status": "ok",
            "root": str(plan.root),
            "order": [
                {
                    "fragment": display_path(path, plan.root),
                    "requires": [display_path(dep, plan.root) for dep in plan.graph.dependencies_of(path)],
                }
                for path in plan.order
            ],
            **sink.to_dict(),
        }, indent=2))
        return

    if not plan.order:
        console.print(f"[yellow]No fragments found under {plan.root}[/yellow]", highlight=False)
        return
    console.print(order_table(plan.order, plan.graph, plan.root))


__all__ = ["order"]
