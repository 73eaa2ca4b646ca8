from __future__ import annotations
import sys

# Characters the reader treats as delimiters; a symbol can never contain them.
DELIMITERS = frozenset('()";')


class Symbol:
    """Interned identifier carried by SYMBOL atoms."""

    __slots__ = ("name", "_hash")

    def __init__(self, name: str):
        if not name or any(c.isspace() or c in DELIMITERS for c in name):
            raise ValueError(f"invalid symbol name {name!r}")
        self.name = sys.intern(name)
        self._hash = hash(self.name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.name == other.name

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self):
        return f"Symbol({self.name!r})"

    def __str__(self):
        return self.name
