"""Assemble command implementation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from fragcat.cli import StepTracker
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
from fragcat.fragments.pipeline import (
    STEP_DISCOVER,
    STEP_GRAPH,
    STEP_SORT,
    STEP_WRITE,
    run_assembly,
)

STEP_LABELS = [
    (STEP_DISCOVER, "Discover fragments"),
    (STEP_GRAPH, "Extract dependencies"),
    (STEP_SORT, "Order fragments"),
    (STEP_WRITE, "Write output"),
]


def assemble(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help="Fragment root directory (directive paths are relative to it)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="File to write the assembled document to"),
    extensions: Optional[List[str]] = typer.Option(None, "--ext", "-e", help="Fragment file extension (repeatable)"),
    encoding: Optional[str] = typer.Option(None, "--encoding", help="Text encoding for fragments and output"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Compute the order without writing anything"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
) -> None:
    """Concatenate fragments in dependency order into a single document."""
    if json_output:
        quiet_logging()
    config = resolve_config_or_exit(root, output, extensions, encoding)

    tracker = StepTracker("Assemble Fragments")
    for key, label in STEP_LABELS:
        tracker.add(key, label)
    if dry_run:
        tracker.skip(STEP_WRITE, "dry run")

    sink = CollectingSink() if json_output else ConsoleSink()
    payload: dict[str, object] = {
        "root": str(config.root_dir),
        "output": str(config.output_file),
        "dry_run": dry_run,
    }

    try:
        result = run_assembly(config, sink=sink, dry_run=dry_run, on_step=tracker.complete)
    except CyclicDependencyError as exc:
        tracker.fail_pending("cycle detected")
        if json_output:
            payload.update(
                status="cycle",
                error=str(exc),
                cycle=[display_path(path, config.root_dir) for path in exc.cycle],
                written=False,
                **sink.to_dict(),
            )
            print(json.dumps(payload, indent=2))
        else:
            console.print(tracker.render())
            print_cycle(exc, config.root_dir)
        raise typer.Exit(1)
    except FragcatError as exc:
        tracker.fail_pending(type(exc).__name__)
        if json_output:
            payload.update(status="error", error=str(exc), written=False, **sink.to_dict())
            print(json.dumps(payload, indent=2))
        else:
            console.print(tracker.render())
            err_console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False, soft_wrap=True)
        raise typer.Exit(1)

    order = [display_path(path, result.plan.root) for path in result.plan.order]
    if json_output:
        payload.update(
            status="ok",
            order=order,
            written=result.written,
            lines_written=result.lines_written,
            **sink.to_dict(),
        )
        print(json.dumps(payload, indent=2))
        return

    console.print(tracker.render())
    console.print()
    if dry_run:
        console.print(order_table(result.plan.order, result.plan.graph, result.plan.root))
        console.print("[yellow]Dry run:[/yellow] nothing was written.")
        return

    console.print(
        f"[green]Concatenation complete.[/green] Result written to {result.output}",
        highlight=False,
        soft_wrap=True,
    )


__all__ = ["assemble"]
