#!/usr/bin/env python3
"""
graphnorm CLI

Main entrypoint for the graphnorm command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from graphnorm.cli.commands import demo, inspect
from graphnorm.logging_config import setup_logging

app = typer.Typer(
    name="graphnorm",
    help="Inspect and demo graph normalization",
    add_completion=False,
)

console = Console()

app.command(name="inspect")(inspect.inspect_command)
app.command(name="demo")(demo.demo_command)


@app.callback()
def configure(
    log_level: str = typer.Option(
        None,
        "--log-level",
        envvar="GRAPHNORM_LOG_LEVEL",
        help="Log level (DEBUG, INFO, WARNING, ERROR)",
    ),
):
    """Configure logging before any command runs."""
    setup_logging(level=log_level, fmt="text")


@app.command()
def version():
    """Show version information."""
    from graphnorm import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]graphnorm[/bold]", f"v{__version__}")
    table.add_row("Wire format", "val/ref/obj/fun/sym/proto")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
