"""
Inspect command: show the item tree stored in a serialized file
"""

import json
from collections import Counter

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from graphnorm.core import (
    ArrayItem,
    FunctionItem,
    GraphnormError,
    Item,
    ObjectItem,
    Reference,
    SymbolItem,
    TypedState,
    Value,
    to_wire,
)
from graphnorm.core.codec import json_decode

console = Console()


def _describe(item: Item) -> str:
    if isinstance(item, Value):
        return f"[green]val[/green] {item.raw!r}"
    if isinstance(item, Reference):
        return f"[magenta]ref[/magenta] /{'/'.join(item.path)}"
    if isinstance(item, ObjectItem):
        return f"[cyan]obj[/cyan] ({len(item.fields)} fields)"
    if isinstance(item, ArrayItem):
        return f"[cyan]arr[/cyan] ({len(item.elements)} elements)"
    if isinstance(item, FunctionItem):
        return "[yellow]fun[/yellow]"
    if isinstance(item, SymbolItem):
        return f"[yellow]sym[/yellow] {item.descriptor}"
    return f"[bold blue]proto[/bold blue] {item.type_id}"


def build_tree(item: Item, label: str = "/") -> Tree:
    """Render an item tree as a rich Tree."""
    tree = Tree(f"[bold]{label}[/bold] {_describe(item)}")

    if isinstance(item, ObjectItem):
        for key, entry in item.fields.items():
            tree.add(build_tree(entry, key))
    elif isinstance(item, ArrayItem):
        for index, entry in enumerate(item.elements):
            tree.add(build_tree(entry, str(index)))
    elif isinstance(item, FunctionItem):
        tree.add(build_tree(item.inner, "fun"))
    elif isinstance(item, TypedState):
        tree.add(build_tree(item.state, "state"))

    return tree


def count_items(item: Item, counts: Counter) -> Counter:
    """Count item kinds in a tree."""
    counts[type(item).__name__] += 1
    if isinstance(item, ObjectItem):
        for entry in item.fields.values():
            count_items(entry, counts)
    elif isinstance(item, ArrayItem):
        for entry in item.elements:
            count_items(entry, counts)
    elif isinstance(item, FunctionItem):
        count_items(item.inner, counts)
    elif isinstance(item, TypedState):
        count_items(item.state, counts)
    return counts


def inspect_command(
    path: str = typer.Argument(..., help="File containing serialized text"),
    json_output: bool = typer.Option(False, "--json", help="Output the wire form as indented JSON"),
    stats: bool = typer.Option(False, "--stats", "-s", help="Show item counts"),
):
    """
    Show the intermediate item tree stored in a serialized file.

    Examples:
        graphnorm inspect snapshot.json
        graphnorm inspect snapshot.json --stats
        graphnorm inspect snapshot.json --json
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            item = json_decode(f.read())
    except FileNotFoundError:
        console.print(f"[red]Error: file not found: {path}[/red]")
        raise typer.Exit(1)
    except GraphnormError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if json_output:
        print(json.dumps(to_wire(item), indent=2, ensure_ascii=False))
        raise typer.Exit(0)

    console.print(build_tree(item, path))

    if stats:
        table = Table(title="Item counts")
        table.add_column("Kind", style="cyan")
        table.add_column("Count", justify="right")
        for kind, count in sorted(count_items(item, Counter()).items()):
            table.add_row(kind, str(count))
        console.print(table)
