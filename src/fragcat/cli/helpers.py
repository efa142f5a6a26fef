"""Shared CLI plumbing: consoles, diagnostics, config resolution."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from fragcat.config import AssemblyConfig, load_assembly_config
from fragcat.core.paths import resolve_project_root
from fragcat.exceptions import ConfigError, CyclicDependencyError
from fragcat.fragments.cycles import describe_cycle

console = Console()
err_console = Console(stderr=True)


class ConsoleSink:
    """Diagnostic sink printing to the rich console and counting warnings."""

    def __init__(self, target: Console | None = None):
        self._console = target or err_console
        self.warning_count = 0
        self.error_count = 0

    def warning(self, message: str) -> None:
        self.warning_count += 1
        self._console.print(f"[yellow]{escape(message)}[/yellow]", highlight=False, soft_wrap=True)

    def error(self, message: str) -> None:
        self.error_count += 1
        self._console.print(f"[red]{escape(message)}[/red]", highlight=False, soft_wrap=True)


def configure_logging(verbose: bool) -> None:
    """Attach a rich handler to the ``fragcat`` logger."""
    package_logger = logging.getLogger("fragcat")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)
    handler = RichHandler(console=err_console, show_path=False, show_time=False)
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def quiet_logging() -> None:
    """Keep log records off the terminal while emitting JSON (unless verbose)."""
    package_logger = logging.getLogger("fragcat")
    if package_logger.level != logging.DEBUG:
        package_logger.setLevel(logging.CRITICAL)


def resolve_config_or_exit(
    root: Optional[Path] = None,
    output: Optional[Path] = None,
    extensions: Optional[List[str]] = None,
    encoding: Optional[str] = None,
) -> AssemblyConfig:
    """Load project config and apply CLI overrides, exiting 1 on config errors."""
    try:
        config = load_assembly_config(resolve_project_root())
    except ConfigError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False, soft_wrap=True)
        raise typer.Exit(1)
    return config.with_overrides(
        root_dir=root,
        output_file=output,
        extensions=extensions,
        encoding=encoding,
    )


def print_cycle(exc: CyclicDependencyError, root: Path) -> None:
    """Report a cyclic dependency on the error console."""
    err_console.print("[red]Error:[/red] Cyclic dependency detected between fragments:")
    if exc.cycle:
        err_console.print(f"  Cycle: {escape(describe_cycle(exc.cycle, root))}", highlight=False)
    else:
        err_console.print(f"  {len(exc.unsorted)} fragment(s) could not be ordered", highlight=False)


__all__ = [
    "ConsoleSink",
    "configure_logging",
    "console",
    "err_console",
    "print_cycle",
    "quiet_logging",
    "resolve_config_or_exit",
]
