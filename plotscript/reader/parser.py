"""
  plotscript reader: lexer and parser

- Streaming, lazy parsing
- Emits Expression trees directly:

    - atom tokens -> leaf Expression (number, string or symbol Atom)
    - (head a b ...) -> Expression with head Atom and tail [a, b, ...]
    - () -> empty Expression (NONE head)
    - ; starts a comment running to the end of the line

  The head of a parenthesized form must be an atom.
"""

from __future__ import annotations

import re
from typing import Iterator, Optional, Iterable

from plotscript.errors import PlotscriptSyntaxError
from plotscript.types.atom import Atom
from plotscript.types.expression import Expression


TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r'|(?P<string>"[^"]*")'  # double-quoted strings, no escapes
    r'|(?P<atom>[^\s()";]+)'  # numbers and symbols
    r")",
)


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            if source[pos:].strip() == "":
                break
            raise PlotscriptSyntaxError(f"Unexpected char at {pos}: {source[pos:].lstrip()[0]!r}")
        pos = m.end()
        kind = m.lastgroup
        if kind == "comment":
            continue
        yield kind, m.group(kind)


class TokenStream:
    def __init__(self, token_iter: Iterable[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> Optional[Expression]:
        tok_type, tok_val = self.advance()
        if tok_type is None:
            return None

        if tok_type in ("atom", "string"):
            return Expression(Atom.from_token(tok_val))

        if tok_type == "rparen":
            raise PlotscriptSyntaxError("Unexpected ')'")

        # List form: the head must be an atom
        head_type, head_val = self.advance()
        if head_type is None:
            raise PlotscriptSyntaxError("Unmatched '('")
        if head_type == "rparen":
            return Expression()
        if head_type == "lparen":
            raise PlotscriptSyntaxError("Expected an atom at the head of a list")

        head = Atom.from_token(head_val)
        if head == Atom.symbol("list") and self.peek()[0] == "rparen":
            # `(list)` reads the same as `list`, so the empty list is built here
            self.advance()
            return Expression.make_list([])

        expr = Expression(head)
        while True:
            if self.peek()[0] is None:
                raise PlotscriptSyntaxError("Unmatched '('")
            if self.peek()[0] == "rparen":
                self.advance()
                return expr
            expr.tail.append(self.parse_expr())

    def parse_all(self) -> Iterator[Expression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def parse(source: str) -> list[Expression]:
    """Read every top-level form in `source`."""
    return list(TokenStream(lex(source)).parse_all())
