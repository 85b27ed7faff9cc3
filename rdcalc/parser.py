"""Backtracking recursive-descent parser for rdcalc expressions.

Precedence is encoded by which level calls which, loosest first:

    addition -> subtraction -> multiplication -> division
             -> exponentiation -> group -> literal

Every level returns a Match(node, rest) on success and None otherwise.
None is an ordinary "try something else" signal, never an error: the
caller still holds its original text and simply falls back.

Each binary level accepts at most one occurrence of its operator, since both
operands are parsed one level down. "1+2+3" therefore leaves "+3" unconsumed
and the whole line is rejected.
"""

from __future__ import annotations

from typing import Callable, NamedTuple, Optional

from rdcalc.nodes import BinaryOp, Group, Literal, Node, OpKind
from rdcalc.scanner import char_is, is_numeral_char, match_char, match_run, skip_spaces

PARSE_FAILURE_MESSAGE = "Couldn't parse input expression."


class Match(NamedTuple):
    """A successful partial parse: the node and the unconsumed input."""

    node: Node
    rest: str


Level = Callable[[str], Optional[Match]]


class ParseError(ValueError):
    """Raised by calculate() when a whole line does not parse."""

    def __init__(self, expression: str):
        super().__init__(PARSE_FAILURE_MESSAGE)
        self.expression = expression


# ---------------------------------------------------------------------------
# Atoms
# ---------------------------------------------------------------------------

def parse_literal(text: str) -> Optional[Match]:
    """Parse a numeral such as "42", "-1.5" or ".5".

    The run of digits, dots and minus signs is taken greedily and then
    handed to float(). A run float() rejects ("-", "1.2.3", "1-2") is a
    plain mismatch.
    """
    run = match_run(is_numeral_char, skip_spaces(text))
    if run is None:
        return None
    numeral, rest = run
    try:
        value = float(numeral)
    except ValueError:
        return None
    return Match(Literal(value), rest)


def parse_group(text: str) -> Optional[Match]:
    """Parse "( expression )", falling back to a literal."""
    return _parse_parenthesized(text) or parse_literal(text)


def _parse_parenthesized(text: str) -> Optional[Match]:
    opened = match_char(char_is("("), skip_spaces(text))
    if opened is None:
        return None
    inner = parse_addition(opened[1])
    if inner is None:
        return None
    closed = match_char(char_is(")"), skip_spaces(inner.rest))
    if closed is None:
        return None
    return Match(Group(inner.node), closed[1])


# ---------------------------------------------------------------------------
# Binary operator levels
# ---------------------------------------------------------------------------

def _parse_binary(kind: OpKind, child: Level, text: str) -> Optional[Match]:
    """Parse "child <op> child", or just "child" when no operator follows.

    Without an operator the answer is child(text), which is exactly the
    left match already in hand, so it is returned rather than re-parsed.
    """
    left = child(skip_spaces(text))
    if left is None:
        return None
    op = match_char(char_is(kind.value), skip_spaces(left.rest))
    if op is None:
        return left
    right = child(op[1])
    if right is None:
        return left
    return Match(BinaryOp(kind, left.node, right.node), right.rest)


def parse_exponentiation(text: str) -> Optional[Match]:
    return _parse_binary(OpKind.EXP, parse_group, text)


def parse_division(text: str) -> Optional[Match]:
    return _parse_binary(OpKind.DIV, parse_exponentiation, text)


def parse_multiplication(text: str) -> Optional[Match]:
    return _parse_binary(OpKind.MUL, parse_division, text)


def parse_subtraction(text: str) -> Optional[Match]:
    return _parse_binary(OpKind.SUB, parse_multiplication, text)


def parse_addition(text: str) -> Optional[Match]:
    return _parse_binary(OpKind.ADD, parse_subtraction, text)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def parse(text: str) -> Optional[Node]:
    """Parse a whole line into a tree.

    Returns None if the line is not an expression or if anything other than
    spaces is left over after it ("1+2)", "1 2").
    """
    match = parse_addition(text)
    if match is None or skip_spaces(match.rest):
        return None
    return match.node


def evaluate(node: Node) -> float:
    """Reduce a parsed tree to its value."""
    return node.evaluate()


def calculate(text: str) -> float:
    """Parse and evaluate one expression.

    Raises:
        ParseError: if text is not a complete expression.
    """
    node = parse(text)
    if node is None:
        raise ParseError(text)
    return evaluate(node)
