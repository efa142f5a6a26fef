"""
fragcat - assemble one document from text fragments that require each other.

Fragments declare dependencies inline with ``*require '<path>'*``; fragcat
orders them so every fragment follows the ones it requires and writes the
result to a single file.

Usage:
    fragcat assemble
    fragcat assemble --root docs/parts --output build/book.txt
    fragcat order --json
    fragcat check --strict
"""

import sys

import typer
from rich.align import Align
from rich.console import Console
from rich.text import Text
from typer.core import TyperGroup

from fragcat.cli import commands
from fragcat.cli.helpers import configure_logging

__version__ = "0.3.0"

TAGLINE = "fragcat - dependency-ordered fragment assembly"

console = Console()


def show_banner():
    """Display the tagline banner."""
    console.print(Align.center(Text(TAGLINE, style="bold bright_cyan")))
    console.print(Align.center(Text(f"v{__version__}", style="dim")))
    console.print()


class BannerGroup(TyperGroup):
    """Custom group that shows banner before help."""

    def format_help(self, ctx, formatter):
        show_banner()
        super().format_help(ctx, formatter)


app = typer.Typer(
    name="fragcat",
    help="Assemble a document from fragments in dependency order",
    add_completion=False,
    invoke_without_command=True,
    cls=BannerGroup,
)


@app.callback()
def callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Show banner when no subcommand is provided."""
    configure_logging(verbose)
    if ctx.invoked_subcommand is None and "--help" not in sys.argv and "-h" not in sys.argv:
        show_banner()
        console.print(Align.center("[dim]Run 'fragcat --help' for usage information[/dim]"))
        console.print()


app.command(name="assemble")(commands.assemble)
app.command(name="order")(commands.order)
app.command(name="check")(commands.check)
app.command(name="config")(commands.config)


def main():
    app()


if __name__ == "__main__":
    main()
