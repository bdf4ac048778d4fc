"""
Demo command: run the bundled company graph through every stage
"""

import json

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from graphnorm.core import GraphnormError, to_wire
from graphnorm.demo import build_company, company_engine

console = Console()


def demo_command(
    no_refs: bool = typer.Option(False, "--no-refs", help="Fail on shared values instead of emitting references"),
):
    """
    Normalize, serialize and clone the demo company.

    Examples:
        graphnorm demo
        graphnorm demo --no-refs
    """
    engine = company_engine().with_options(no_refs=no_refs)
    company = build_company()

    console.print("[bold]Normalized tree[/bold]")
    try:
        item = engine.normalize(company)
    except GraphnormError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    console.print(Syntax(json.dumps(to_wire(item), indent=2), "json"))

    console.print("\n[bold]Serialized text[/bold]")
    text = engine.serialize(company)
    console.print(text, soft_wrap=True)

    cloned = engine.clone(company)
    cloned.employees[0].name = "jimmy"

    table = Table(title="Clone checks")
    table.add_column("Check", style="cyan")
    table.add_column("Result")
    table.add_row("original first employee", company.employees[0].name)
    table.add_row("cloned first employee (renamed)", cloned.employees[0].name)
    table.add_row(
        "index shares instances",
        str(cloned.employees_by_name["john"] is cloned.employees[0]),
    )
    table.add_row(
        "manager cycle kept",
        str(cloned.employees[3].employees[0] is cloned.employees[0]),
    )
    console.print(table)
