"""CLI for the rdcalc calculator.

Usage:
    python -m rdcalc                      # Read expressions from stdin until 'quit'
    python -m rdcalc --summary < exprs    # Same, then print a session summary
    python -m rdcalc eval "2 + 3 * 4"     # Evaluate expressions given as arguments
    python -m rdcalc eval -- "-5 + 3"     # Leading '-' needs the '--' separator
    python -m rdcalc tree "(2 + 3) * 4"   # Show the parse tree
    python -m rdcalc tree --json "1 / 0"  # Parse tree as JSON
"""

from __future__ import annotations

import json
import sys
from typing import Iterable, Optional

import typer
from rich.console import Console
from rich.markup import escape

from rdcalc.parser import PARSE_FAILURE_MESSAGE, parse
from rdcalc.render import format_value, render_summary, render_tree
from rdcalc.session import NESTING_FAILURE_MESSAGE, InputReadError, evaluate_line, run_session
from rdcalc.settings import Settings

app = typer.Typer(
    name="rdcalc",
    help="Recursive-descent calculator: one expression per line, 'quit' to stop",
)
console = Console(stderr=True)


def _stdin_lines() -> Iterable[str]:
    return sys.stdin


def _load_settings(
    prompt: Optional[str],
    verbose: bool,
    recursion_limit: Optional[int],
) -> Settings:
    """Environment settings with command-line overrides applied."""
    try:
        settings = Settings.from_env()
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(2)

    if prompt is not None:
        settings.prompt = prompt
    if verbose:
        settings.verbose = True
    if recursion_limit is not None:
        settings.recursion_limit = recursion_limit
    settings.apply()
    return settings


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    prompt: Optional[str] = typer.Option(None, "--prompt", help="Prompt shown (on stderr) before each line"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print each parse tree to stderr"),
    summary: bool = typer.Option(False, "--summary", help="Print a session summary when input ends"),
    recursion_limit: Optional[int] = typer.Option(None, "--recursion-limit", min=1, help="Raise the interpreter recursion limit"),
) -> None:
    """Evaluate expressions from stdin, one per line, until 'quit' or end of input."""
    settings = _load_settings(prompt, verbose, recursion_limit)
    ctx.obj = settings
    if ctx.invoked_subcommand is not None:
        return

    try:
        stats = run_session(_stdin_lines(), sys.stdout, console, settings)
    except InputReadError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    if summary:
        render_summary(stats, console)


@app.command("eval")
def cmd_eval(
    ctx: typer.Context,
    expressions: list[str] = typer.Argument(help="Expressions to evaluate, one value printed per expression"),
) -> None:
    """Evaluate expressions given on the command line."""
    settings: Settings = ctx.obj
    failures = 0
    for expression in expressions:
        value = evaluate_line(expression, console, verbose=settings.verbose)
        if value is None:
            failures += 1
            continue
        typer.echo(format_value(value))

    if failures:
        raise typer.Exit(1)


@app.command("tree")
def cmd_tree(
    expression: str = typer.Argument(help="Expression to parse"),
    as_json: bool = typer.Option(False, "--json", help="Print the tree as JSON"),
    values: bool = typer.Option(False, "--values", help="Annotate composite nodes with their values"),
) -> None:
    """Show how an expression parses."""
    try:
        node = parse(expression)
    except RecursionError:
        console.print(f"[red]{NESTING_FAILURE_MESSAGE}[/red]")
        raise typer.Exit(1)
    if node is None:
        console.print(f"[red]{PARSE_FAILURE_MESSAGE}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(node.to_dict(), indent=2))
    else:
        Console().print(render_tree(node, show_values=values))


if __name__ == "__main__":
    app()
