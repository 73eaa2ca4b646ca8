"""Expression trees.

An expression is an Atom called the head followed by a (possibly empty) list of
expressions called the tail. Each node exclusively owns its children: building
or copying an Expression clones the subtree, so no two trees share a node and
no node refers back to its parent.

Renderable results (points, lines, text, plots) additionally carry a property
map from names to Expressions. The constants below are the defaults reported
by the property getters and the layout parameters of the plot builders.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterable, Iterator, Optional, TYPE_CHECKING

from plotscript.types.atom import Atom, AtomKind
from plotscript.types.lambda_fn import Lambda
from plotscript.types.symbol import Symbol

if TYPE_CHECKING:
    from plotscript.types.environment import Environment


N = 20.0
A = 3.0
B = 3.0
C = 2.0
D = 2.0
P = 0.5

OBJECT_NAME = "object-name"


class Expression:
    __slots__ = ("head", "tail", "properties")

    def __init__(self, head: Optional[Atom] = None, tail: Iterable[Expression] = ()):
        self.head: Atom = head if head is not None else Atom()
        self.tail: list[Expression] = [child.copy() for child in tail]
        self.properties: dict[str, Expression] = {}

    # --- constructors ---
    @classmethod
    def make_list(cls, items: Iterable[Expression]) -> Expression:
        return cls(Atom.list_marker(), items)

    @classmethod
    def make_lambda(
        cls, formals: list[Symbol], body: Expression, env: Environment
    ) -> Expression:
        return cls(Atom.lambda_marker(Lambda(formals, env)), [body])

    @classmethod
    def make_discrete_plot(cls, items: Iterable[Expression], name: str = "discrete") -> Expression:
        return cls(Atom.discrete_marker(name), items)

    @classmethod
    def make_point(cls, x: float, y: float) -> Expression:
        point = cls.make_list([cls(Atom.number(x)), cls(Atom.number(y))])
        point.properties[OBJECT_NAME] = cls(Atom.string("point"))
        return point

    @classmethod
    def make_line(cls, start: Expression, end: Expression) -> Expression:
        line = cls.make_list([start, end])
        line.properties[OBJECT_NAME] = cls(Atom.string("line"))
        return line

    @classmethod
    def make_text(cls, text: str) -> Expression:
        label = cls(Atom.string(text))
        label.properties[OBJECT_NAME] = cls(Atom.string("text"))
        return label

    def copy(self) -> Expression:
        """Deep copy of the whole subtree, properties included."""
        clone = Expression(self.head)
        clone.tail = [child.copy() for child in self.tail]
        clone.properties = {k: v.copy() for k, v in self.properties.items()}
        return clone

    def __copy__(self) -> Expression:
        return self.copy()

    def __deepcopy__(self, memo) -> Expression:
        return self.copy()

    # --- tail access ---
    def append(self, atom: Atom) -> None:
        self.tail.append(Expression(atom))

    def tail_last(self) -> Optional[Expression]:
        return self.tail[-1] if self.tail else None

    def iter_tail(self) -> Iterator[Expression]:
        return iter(self.tail)

    def make_tail(self) -> list[Expression]:
        return [child.copy() for child in self.tail]

    def is_leaf(self) -> bool:
        return not self.tail

    # --- head classification ---
    def is_none(self) -> bool:
        return self.head.kind is AtomKind.NONE and not self.tail

    def is_head_number(self) -> bool:
        return self.head.kind is AtomKind.NUMBER

    def is_head_symbol(self) -> bool:
        return self.head.kind is AtomKind.SYMBOL

    def is_head_complex(self) -> bool:
        return self.head.kind is AtomKind.COMPLEX

    def is_head_list(self) -> bool:
        return self.head.kind is AtomKind.LIST

    def is_head_string(self) -> bool:
        return self.head.kind is AtomKind.STRING

    def is_head_procedure(self) -> bool:
        return self.head.kind is AtomKind.PROCEDURE

    def is_head_lambda(self) -> bool:
        return self.head.kind is AtomKind.LAMBDA

    def is_head_discrete(self) -> bool:
        return self.head.kind is AtomKind.DISCRETE

    def is_callable(self) -> bool:
        return self.head.kind in (AtomKind.PROCEDURE, AtomKind.LAMBDA)

    # --- evaluation ---
    def eval(self, env: Environment) -> Expression:
        """Evaluate using a post-order traversal (recursive)."""
        from plotscript.evaluation.evaluator import evaluate
        return evaluate(self, env)

    # --- properties ---
    def get_property(self, key: str) -> Optional[Expression]:
        return self.properties.get(key)

    def set_property(self, key: str, value: Expression) -> None:
        self.properties[key] = value.copy()

    def object_name(self) -> Optional[str]:
        name = self.properties.get(OBJECT_NAME)
        if name is not None and name.is_head_string():
            return name.head.value
        return None

    def is_plot_object(self) -> bool:
        return self.object_name() is not None or self.is_head_discrete()

    def _number_property(self, key: str, default: float) -> float:
        value = self.properties.get(key)
        if value is not None and value.is_head_number() and value.is_leaf():
            return value.head.value
        return default

    # --- shapes consumed by a renderer ---
    def is_point(self) -> bool:
        return (
            self.object_name() == "point"
            and self.is_head_list()
            and len(self.tail) == 2
            and all(c.is_head_number() and c.is_leaf() for c in self.tail)
        )

    def is_line(self) -> bool:
        return (
            self.object_name() == "line"
            and self.is_head_list()
            and len(self.tail) == 2
            and all(c.is_point() for c in self.tail)
        )

    def is_text(self) -> bool:
        return self.object_name() == "text" and self.is_head_string() and self.is_leaf()

    def is_discrete(self) -> bool:
        return self.is_head_discrete() and all(
            c.is_point() or c.is_line() or c.is_text() for c in self.tail
        )

    def get_size(self) -> float:
        return self._number_property("size", B)

    def get_thickness(self) -> float:
        return self._number_property("thickness", C)

    def get_position(self) -> Expression:
        position = self.properties.get("position")
        if position is not None and position.is_point():
            return position.copy()
        return Expression.make_point(0.0, 0.0)

    def get_text_scale(self) -> float:
        return self._number_property("text-scale", D)

    def get_text_rotation(self) -> float:
        return self._number_property("text-rotation", 0.0)

    # --- comparison ---
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expression):
            return NotImplemented
        if self.head != other.head or len(self.tail) != len(other.tail):
            return False
        if (self.is_plot_object() or other.is_plot_object()) and self.properties != other.properties:
            return False
        return all(a == b for a, b in zip(self.tail, other.tail))

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    # --- display ---
    def make_string(self) -> str:
        return str(self.head)

    def _write(self, buffer: StringIO, nested: bool) -> None:
        kind = self.head.kind
        if kind is AtomKind.NONE and not self.tail:
            buffer.write("NONE")
            return
        if not self.tail and kind not in (AtomKind.LIST, AtomKind.DISCRETE):
            text = self.make_string()
            if nested or kind is AtomKind.COMPLEX:
                buffer.write(text)
            else:
                buffer.write(f"({text})")
            return
        buffer.write("(")
        parts: list[str] = []
        if kind is AtomKind.LAMBDA:
            parts.append(f"lambda {self.head.value}")
        elif kind is not AtomKind.LIST:
            parts.append(self.make_string())
        for child in self.tail:
            with StringIO() as child_buf:
                child._write(child_buf, True)
                parts.append(child_buf.getvalue())
        buffer.write(" ".join(parts))
        buffer.write(")")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write(buffer, False)
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"Expression({self})"
