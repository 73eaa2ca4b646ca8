"""Runtime environment for plotscript.

The Environment stores bindings of Symbols to evaluated Expressions and supports
nested scopes via an `outer` link. Procedure calls push a child scope, evaluate
the body in it, and drop it on return; scopes are never shared between calls.
"""

from __future__ import annotations

import logging
from io import StringIO
from typing import Optional, TYPE_CHECKING

from plotscript.errors import UnboundSymbolError, MalformedSpecialFormError
from plotscript.types.symbol import Symbol

if TYPE_CHECKING:
    from plotscript.types.expression import Expression


class Environment:
    """Hierarchical mapping from Symbols to Expressions with builtin protection."""

    __slots__ = ("vars", "outer", "builtins")

    _logger = logging.getLogger("Environment")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, Expression] = {}
        self.outer: Environment | None = outer
        # Names registered by the host; only populated on the root scope.
        self.builtins: set[Symbol] = set()

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def is_builtin(self, name: Symbol) -> bool:
        return name in self.root().builtins

    def define(self, name: Symbol, value: Expression) -> None:
        """Bind `name` to `value` in this scope.

        Raises MalformedSpecialFormError if `name` is not a Symbol or names a
        builtin. User symbols may be rebound freely.
        """
        if not isinstance(name, Symbol):
            raise MalformedSpecialFormError(f"Cannot define {name} as a symbol")
        if self.is_builtin(name):
            raise MalformedSpecialFormError(f"attempt to redefine builtin {name}")
        self._logger.debug("define %s", name)
        self.vars[name] = value

    def define_builtin(self, name: Symbol, value: Expression) -> None:
        """Bind a host-provided name in the root scope and protect it."""
        root = self.root()
        root.vars[name] = value
        root.builtins.add(name)

    def bind(self, name: Symbol, value: Expression) -> None:
        """Bind a formal parameter; parameters may shadow builtins."""
        self.vars[name] = value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: Symbol) -> Expression:
        """Look up the value bound to `name`, walking outward through scopes.

        Raises UnboundSymbolError if not found.
        """
        env = self.find(name)
        if env is None:
            raise UnboundSymbolError(f"unknown symbol {name}")
        return env.vars[name]

    def push_scope(self) -> Environment:
        """Return a fresh child scope enclosed by this one."""
        return Environment(outer=self)

    def pop_scope(self) -> Environment:
        """Return the enclosing scope; the root cannot be popped."""
        if self.outer is None:
            raise RuntimeError("cannot pop the root scope")
        return self.outer

    def update(self, mapping: dict[Symbol, Expression]) -> None:
        """Bulk-register builtins in the root scope."""
        for k, v in mapping.items():
            if not isinstance(k, Symbol):
                raise MalformedSpecialFormError(f"Cannot define {k} as a symbol")
            self.define_builtin(k, v)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's user variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if k in self.builtins:
                continue
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env = self
            chain = []
            while env is not None:
                env_buf = StringIO()
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
