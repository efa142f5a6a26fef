"""Check command: validate fragment dependencies without writing.

Reports every directive that points at a missing fragment and, when the
graph is cyclic, one offending cycle.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from fragcat.cli.helpers import console, err_console, quiet_logging, resolve_config_or_exit
from fragcat.diagnostics import CollectingSink
from fragcat.exceptions import FragcatError
from fragcat.fragments.cycles import describe_cycle, find_cycle
from fragcat.fragments.discovery import discover_fragments
from fragcat.fragments.graph import build_dependency_graph
from fragcat.fragments.models import UnresolvedDependency, display_path
from fragcat.fragments.store import FragmentStore


def _unresolved_table(missing: List[UnresolvedDependency], root: Path) -> Table:
    table = Table(title="Unresolved Dependencies")
    table.add_column("Fragment", style="bold")
    table.add_column("Line", justify="right", style="cyan")
    table.add_column("Requires")
    for item in missing:
        table.add_row(display_path(item.dependent, root), str(item.line_number), item.raw_path)
    return table


def check(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help="Fragment root directory"),
    extensions: Optional[List[str]] = typer.Option(None, "--ext", "-e", help="Fragment file extension (repeatable)"),
    encoding: Optional[str] = typer.Option(None, "--encoding", help="Text encoding for fragments"),
    strict: bool = typer.Option(False, "--strict", help="Treat unresolved dependencies as failures"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
) -> None:
    """Validate directives and detect dependency cycles."""
    if json_output:
        quiet_logging()
    config = resolve_config_or_exit(root, None, extensions, encoding)

    try:
        paths = discover_fragments(config.root_dir, config.extensions, exclude=[config.output_file])
        store = FragmentStore.load(paths, encoding=config.encoding)
    except FragcatError as exc:
        if json_output:
            print(json.dumps({"status": "error", "error": str(exc)}, indent=2))
        else:
            err_console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False, soft_wrap=True)
        raise typer.Exit(1)

    fragment_root = config.root_dir
    missing: List[UnresolvedDependency] = []
    # Warnings are reported through the table below instead
    graph = build_dependency_graph(store, fragment_root, CollectingSink(), unresolved=missing)
    cycle = find_cycle(graph)

    failed = bool(cycle) or (strict and bool(missing))

    if json_output:
        print(json.dumps({
            "status": "fail" if failed else "ok",
            "fragments": len(graph),
            "edges": graph.edge_count,
            "unresolved": [
                {
                    "fragment": display_path(item.dependent, fragment_root),
                    "line": item.line_number,
                    "requires": item.raw_path,
                }
                for item in missing
            ],
            "cycle": [display_path(path, fragment_root) for path in cycle],
        }, indent=2))
        if failed:
            raise typer.Exit(1)
        return

    console.print(
        f"Checked {len(graph)} fragment(s), {graph.edge_count} dependency edge(s)",
        highlight=False,
    )
    if missing:
        console.print(_unresolved_table(missing, fragment_root))
    else:
        console.print("[green]✓[/green] All directives resolve")

    if cycle:
        err_console.print(
            f"[red]✗[/red] Cyclic dependency: {escape(describe_cycle(cycle, fragment_root))}",
            highlight=False,
            soft_wrap=True,
        )
    else:
        console.print("[green]✓[/green] No dependency cycles")

    if failed:
        raise typer.Exit(1)


__all__ = ["check"]
