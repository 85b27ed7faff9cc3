"""Expression tree nodes for rdcalc.

Literal, Group and BinaryOp are the three node shapes the parser produces.
Every node is immutable, owns its children outright and knows how to
evaluate itself, so a parsed tree can be reduced without a separate visitor.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np


class OpKind(str, Enum):
    """Binary operators, valued by the character that spells them."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    EXP = "^"


# numpy ufuncs keep IEEE-754 semantics where plain floats would raise
# (1/0, 0**-1, (-1)**0.5, overflow)
_COMBINATORS = {
    OpKind.ADD: np.add,
    OpKind.SUB: np.subtract,
    OpKind.MUL: np.multiply,
    OpKind.DIV: np.divide,
    OpKind.EXP: np.power,
}


# just past the float64 maximum (~1.8e308)
_OVERFLOW_NUMERAL = "1" + "0" * 309


def format_number(value: float) -> str:
    """Positional decimal text for a literal, without exponent notation.

    An overflowed literal is written as 1 followed by 309 zeros, which
    float() reads back as infinity.
    """
    if np.isinf(value):
        return _OVERFLOW_NUMERAL if value > 0 else "-" + _OVERFLOW_NUMERAL
    return np.format_float_positional(value, trim="-")


@dataclass(frozen=True)
class Literal:
    """A numeral."""

    value: float

    def evaluate(self) -> float:
        return self.value

    def to_dict(self) -> dict:
        return {"type": "literal", "value": self.value}

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True)
class Group:
    """A parenthesized sub-expression."""

    inner: Node

    def evaluate(self) -> float:
        return self.inner.evaluate()

    def to_dict(self) -> dict:
        return {"type": "group", "inner": self.inner.to_dict()}

    def __str__(self) -> str:
        return f"({self.inner})"


@dataclass(frozen=True)
class BinaryOp:
    """One operator applied to a left and a right operand."""

    kind: OpKind
    left: Node
    right: Node

    def evaluate(self) -> float:
        """Evaluate left, then right, then combine as float64."""
        left = self.left.evaluate()
        right = self.right.evaluate()
        with np.errstate(all="ignore"):
            result = _COMBINATORS[self.kind](np.float64(left), np.float64(right))
        return float(result)

    def to_dict(self) -> dict:
        return {
            "type": "binary",
            "op": self.kind.value,
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
        }

    def __str__(self) -> str:
        return f"{self.left} {self.kind.value} {self.right}"


Node = Union[Literal, Group, BinaryOp]
