"""Reusable UI helpers for fragcat CLI output."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from rich.table import Table
from rich.tree import Tree

from fragcat.fragments.graph import DependencyGraph
from fragcat.fragments.models import display_path


class StepTracker:
    """Track and render pipeline steps with Rich trees."""

    def __init__(self, title: str):
        self.title = title
        self.steps = []  # list of dicts: {key, label, status, detail}

    def add(self, key: str, label: str):
        if key not in [s["key"] for s in self.steps]:
            self.steps.append({"key": key, "label": label, "status": "pending", "detail": ""})

    def complete(self, key: str, detail: str = ""):
        self._update(key, status="done", detail=detail)

    def skip(self, key: str, detail: str = ""):
        self._update(key, status="skipped", detail=detail)

    def fail_pending(self, detail: str = ""):
        """Mark the first unfinished step as failed and skip the rest."""
        failed = False
        for s in self.steps:
            if s["status"] == "pending":
                if not failed:
                    s["status"] = "error"
                    s["detail"] = detail or s["detail"]
                    failed = True
                else:
                    s["status"] = "skipped"

    def _update(self, key: str, status: str, detail: str):
        for s in self.steps:
            if s["key"] == key:
                s["status"] = status
                if detail:
                    s["detail"] = detail
                return
        # If not present, add it
        self.steps.append({"key": key, "label": key, "status": status, "detail": detail})

    def render(self) -> Tree:
        tree = Tree(f"[cyan]{self.title}[/cyan]", guide_style="grey50")
        for step in self.steps:
            label = step["label"]
            detail_text = step["detail"].strip() if step["detail"] else ""

            status = step["status"]
            if status == "done":
                symbol = "[green]●[/green]"
            elif status == "pending":
                symbol = "[green dim]○[/green dim]"
            elif status == "error":
                symbol = "[red]●[/red]"
            elif status == "skipped":
                symbol = "[yellow]○[/yellow]"
            else:
                symbol = " "

            if status == "pending":
                if detail_text:
                    line = f"{symbol} [bright_black]{label} ({detail_text})[/bright_black]"
                else:
                    line = f"{symbol} [bright_black]{label}[/bright_black]"
            else:
                if detail_text:
                    line = f"{symbol} [white]{label}[/white] [bright_black]({detail_text})[/bright_black]"
                else:
                    line = f"{symbol} [white]{label}[/white]"

            tree.add(line)
        return tree


def order_table(order: Sequence[Path], graph: DependencyGraph, root: Path) -> Table:
    """Table of the sort order: position, fragment, declared dependencies."""
    table = Table(title="Assembly Order", show_lines=False)
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Fragment", style="bold")
    table.add_column("Requires")

    for position, path in enumerate(order, start=1):
        requires = graph.dependencies_of(path)
        table.add_row(
            str(position),
            display_path(path, root),
            ", ".join(display_path(dep, root) for dep in requires) or "[dim]-[/dim]",
        )
    return table


__all__ = ["StepTracker", "order_table"]
