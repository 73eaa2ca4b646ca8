"""Atoms: the tagged leaf values of an expression tree."""

from __future__ import annotations

import re
from enum import Enum, auto
from typing import Any

from plotscript.types.symbol import Symbol


class AtomKind(Enum):
    NONE = auto()
    NUMBER = auto()
    COMPLEX = auto()
    SYMBOL = auto()
    STRING = auto()
    PROCEDURE = auto()
    # Markers for compound values; the payload lives in the Expression tail.
    LIST = auto()
    LAMBDA = auto()
    DISCRETE = auto()


NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


class Atom:
    """Immutable tagged value. Copying an Atom is copying a reference."""

    __slots__ = ("kind", "value")

    def __init__(self, kind: AtomKind = AtomKind.NONE, value: Any = None):
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "value", value)

    def __setattr__(self, name, value):
        raise AttributeError("Atom is immutable")

    # --- constructors ---
    @classmethod
    def number(cls, value: float) -> Atom:
        return cls(AtomKind.NUMBER, float(value))

    @classmethod
    def complex(cls, value: complex) -> Atom:
        return cls(AtomKind.COMPLEX, complex(value))

    @classmethod
    def symbol(cls, name: str | Symbol) -> Atom:
        return cls(AtomKind.SYMBOL, name if isinstance(name, Symbol) else Symbol(name))

    @classmethod
    def string(cls, text: str) -> Atom:
        return cls(AtomKind.STRING, text)

    @classmethod
    def procedure(cls, fn) -> Atom:
        return cls(AtomKind.PROCEDURE, fn)

    @classmethod
    def list_marker(cls) -> Atom:
        return cls(AtomKind.LIST)

    @classmethod
    def lambda_marker(cls, closure) -> Atom:
        return cls(AtomKind.LAMBDA, closure)

    @classmethod
    def discrete_marker(cls, name: str = "discrete") -> Atom:
        return cls(AtomKind.DISCRETE, name)

    @classmethod
    def from_token(cls, text: str) -> Atom:
        """Convert a raw reader token into an Atom.

        Numeric text becomes a NUMBER, double-quoted text a STRING (quotes
        stripped), anything else a SYMBOL.
        """
        if NUMBER_RE.fullmatch(text):
            return cls.number(float(text))
        if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
            return cls.string(text[1:-1])
        return cls.symbol(text)

    # --- predicates ---
    def is_none(self) -> bool:
        return self.kind is AtomKind.NONE

    def is_number(self) -> bool:
        return self.kind is AtomKind.NUMBER

    def is_complex(self) -> bool:
        return self.kind is AtomKind.COMPLEX

    def is_symbol(self) -> bool:
        return self.kind is AtomKind.SYMBOL

    def is_string(self) -> bool:
        return self.kind is AtomKind.STRING

    def is_procedure(self) -> bool:
        return self.kind is AtomKind.PROCEDURE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Atom) or self.kind is not other.kind:
            return False
        if self.kind in (AtomKind.PROCEDURE, AtomKind.LAMBDA):
            return self.value is other.value
        return self.value == other.value

    def __hash__(self) -> int:
        if self.kind in (AtomKind.PROCEDURE, AtomKind.LAMBDA):
            return hash((self.kind, id(self.value)))
        return hash((self.kind, self.value))

    def __repr__(self):
        return f"Atom({self.kind.name}, {self.value!r})"

    def __str__(self):
        match self.kind:
            case AtomKind.NONE:
                return "NONE"
            case AtomKind.NUMBER:
                return f"{self.value:g}"
            case AtomKind.COMPLEX:
                return f"({self.value.real:g},{self.value.imag:g})"
            case AtomKind.STRING:
                return f'"{self.value}"'
            case AtomKind.PROCEDURE:
                return getattr(self.value, "plotscript_name", "<procedure>")
            case AtomKind.LIST:
                return ""
            case AtomKind.LAMBDA:
                return "lambda"
            case AtomKind.DISCRETE:
                return f"{self.value}-plot"
        return str(self.value)
