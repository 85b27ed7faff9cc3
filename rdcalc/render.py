"""Rich rendering for parse trees and session summaries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from rdcalc.nodes import BinaryOp, Group, Literal, Node

if TYPE_CHECKING:
    from rdcalc.session import SessionStats


def format_value(value: float) -> str:
    """Default Python rendering of a result: 3.0, 0.1, inf, nan.

    This is str(float) on purpose, so whole numbers keep their ".0" and NaN
    prints as "nan" rather than the "14" / "NaN" of other float formatters.
    """
    return str(value)


def _label(node: Node, show_values: bool) -> str:
    if isinstance(node, Literal):
        label = f"[cyan]{node}[/cyan]"
    elif isinstance(node, Group):
        label = "[dim]( )[/dim]"
    else:
        label = f"[bold]{node.kind.value}[/bold] [dim]{node.kind.name.lower()}[/dim]"
    if show_values and not isinstance(node, Literal):
        label += f"  [green]= {format_value(node.evaluate())}[/green]"
    return label


def _add_children(branch: Tree, node: Node, show_values: bool) -> None:
    if isinstance(node, Group):
        children = [node.inner]
    elif isinstance(node, BinaryOp):
        children = [node.left, node.right]
    else:
        children = []
    for child in children:
        _add_children(branch.add(_label(child, show_values)), child, show_values)


def render_tree(node: Node, show_values: bool = False) -> Tree:
    """Build a Rich tree mirroring the expression tree.

    With show_values, every composite node is annotated with its value.
    """
    tree = Tree(_label(node, show_values))
    _add_children(tree, node, show_values)
    return tree


def render_summary(stats: SessionStats, console: Console) -> None:
    """Print a one-table summary of a finished session."""
    table = Table(title="Session summary", show_header=True, header_style="bold")
    table.add_column("Metric", style="dim", min_width=12)
    table.add_column("Value", justify="right")

    table.add_row("Expressions", str(stats.lines))
    table.add_row("Evaluated", f"[green]{stats.evaluated}[/green]")
    failed_style = "red" if stats.failed else "green"
    table.add_row("Failed", f"[{failed_style}]{stats.failed}[/{failed_style}]")
    table.add_row("Ended by", "quit" if stats.quit else "end of input")

    console.print()
    console.print(table)
