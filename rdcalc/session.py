"""Line-at-a-time calculator session.

Data flow per line:
1. Read the next line (read failures are fatal)
2. Stop on the quit command
3. Parse; report a diagnostic and move on if the line does not parse
4. Evaluate and write the value to the output stream

Values go to the plain output stream; every diagnostic goes to the Rich
console, which the CLI binds to stderr.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, TextIO

from rich.console import Console

from rdcalc.parser import PARSE_FAILURE_MESSAGE, evaluate, parse
from rdcalc.render import format_value, render_tree
from rdcalc.settings import Settings

QUIT_COMMAND = "quit"
NESTING_FAILURE_MESSAGE = "Expression is nested too deeply."


class InputReadError(Exception):
    """The input stream could not be read. Not recoverable."""

    def __init__(self, cause: BaseException):
        super().__init__(f"Error reading in from stdin: {cause}")
        self.cause = cause


@dataclass
class SessionStats:
    """Counters for one session.

    lines counts expression lines handled; the quit line itself is not one.
    """

    lines: int = 0
    evaluated: int = 0
    failed: int = 0
    quit: bool = False


def _strip_newline(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def _next_line(lines: Iterator[str], prompt: str, console: Console) -> Optional[str]:
    """Pull one line from the iterator, or None at end of input."""
    if prompt:
        console.print(prompt, end="", markup=False, highlight=False)
    try:
        return next(lines)
    except StopIteration:
        return None
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(e) from e


def evaluate_line(line: str, console: Console, verbose: bool = False) -> Optional[float]:
    """Parse and evaluate one line, reporting failures on the console.

    Returns the value, or None if the line was rejected.
    """
    try:
        tree = parse(line)
        if tree is None:
            console.print(f"[red]{PARSE_FAILURE_MESSAGE}[/red]")
            return None
        if verbose:
            console.print(render_tree(tree, show_values=True))
        return evaluate(tree)
    except RecursionError:
        console.print(f"[red]{NESTING_FAILURE_MESSAGE}[/red]")
        return None


def run_session(
    lines: Iterable[str],
    out: TextIO,
    console: Console,
    settings: Optional[Settings] = None,
) -> SessionStats:
    """Run the calculator over lines until the quit command or end of input.

    Args:
        lines: Source of input lines, e.g. sys.stdin.
        out: Stream receiving one value per evaluated line.
        console: Rich console for prompts, traces and diagnostics.
        settings: Session settings; defaults to Settings().

    Returns:
        SessionStats for the session.

    Raises:
        InputReadError: if reading from lines fails.
    """
    settings = settings or Settings()
    stats = SessionStats()
    source = iter(lines)

    while True:
        raw = _next_line(source, settings.prompt, console)
        if raw is None:
            break
        line = _strip_newline(raw)
        if line == QUIT_COMMAND:
            stats.quit = True
            break

        stats.lines += 1
        value = evaluate_line(line, console, verbose=settings.verbose)
        if value is None:
            stats.failed += 1
            continue

        stats.evaluated += 1
        out.write(format_value(value) + "\n")
        out.flush()

    return stats
