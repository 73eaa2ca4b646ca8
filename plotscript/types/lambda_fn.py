"""Closure representation for user procedures."""

from __future__ import annotations

from io import StringIO

from plotscript.types.environment import Environment
from plotscript.types.symbol import Symbol


class Lambda:
    """Formal parameters plus the Environment captured at construction.

    The body is not stored here: it is the tail of the Expression whose head
    carries this closure, so it is owned by the expression tree like any other
    child.
    """

    __slots__ = ("formals", "env")

    def __init__(self, formals: list[Symbol], env: Environment):
        self.formals: tuple[Symbol, ...] = tuple(formals)
        self.env: Environment = env

    @property
    def arity(self) -> int:
        return len(self.formals)

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(")
            buffer.write(" ".join(str(f) for f in self.formals))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Lambda {self}>"
