from __future__ import annotations

import cmath
import math
from typing import Callable

from plotscript.errors import ArityMismatchError, TypeMismatchError
from plotscript.types.atom import Atom
from plotscript.types.environment import Environment
from plotscript.types.expression import Expression
from plotscript.types.symbol import Symbol

Number = float | complex


# -------------------------------
# Argument helpers
# -------------------------------
def _arity(name: str, args: list[Expression], *counts: int) -> None:
    if len(args) not in counts:
        expected = " or ".join(str(c) for c in counts)
        raise ArityMismatchError(f"{name} expects {expected} argument(s), got {len(args)}")


def _number(name: str, arg: Expression, allow_complex: bool = True) -> Number:
    if arg.is_leaf():
        if arg.is_head_number():
            return arg.head.value
        if allow_complex and arg.is_head_complex():
            return arg.head.value
    kind = "numbers" if allow_complex else "real numbers"
    raise TypeMismatchError(f"arguments to {name} must be {kind}")


def _complex(name: str, arg: Expression) -> complex:
    if arg.is_leaf() and arg.is_head_complex():
        return arg.head.value
    raise TypeMismatchError(f"argument to {name} must be complex")


def _list(name: str, arg: Expression) -> Expression:
    if not arg.is_head_list():
        raise TypeMismatchError(f"argument to {name} must be a list")
    return arg


def _value(value: Number) -> Expression:
    if isinstance(value, complex):
        return Expression(Atom.complex(value))
    return Expression(Atom.number(value))


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, args: list[Expression]) -> Expression:
    return _value(sum((_number("+", a) for a in args), 0.0))


def sub(env: Environment, args: list[Expression]) -> Expression:
    _arity("-", args, 1, 2)
    values = [_number("-", a) for a in args]
    if len(values) == 1:
        return _value(-values[0])
    return _value(values[0] - values[1])


def mul(env: Environment, args: list[Expression]) -> Expression:
    result: Number = 1.0
    for a in args:
        result *= _number("*", a)
    return _value(result)


def div(env: Environment, args: list[Expression]) -> Expression:
    _arity("/", args, 1, 2)
    values = [_number("/", a) for a in args]
    if len(values) == 1:
        values.insert(0, 1.0)
    if values[1] == 0:
        raise TypeMismatchError("division by zero")
    return _value(values[0] / values[1])


def expt(env: Environment, args: list[Expression]) -> Expression:
    _arity("^", args, 2)
    base, exponent = (_number("^", a) for a in args)
    if base == 0 and (isinstance(exponent, complex) or exponent < 0):
        raise TypeMismatchError("zero cannot be raised to a negative or complex power")
    try:
        return _value(base ** exponent)
    except OverflowError:
        raise TypeMismatchError("result of ^ is out of range")


def sqrt(env: Environment, args: list[Expression]) -> Expression:
    _arity("sqrt", args, 1)
    x = _number("sqrt", args[0])
    if isinstance(x, complex) or x < 0:
        return _value(cmath.sqrt(x))
    return _value(math.sqrt(x))


def ln(env: Environment, args: list[Expression]) -> Expression:
    _arity("ln", args, 1)
    x = _number("ln", args[0])
    if isinstance(x, complex):
        if x == 0:
            raise TypeMismatchError("ln of zero is undefined")
        return _value(cmath.log(x))
    if x <= 0:
        raise TypeMismatchError("argument to ln must be positive")
    return _value(math.log(x))


def _unary_real(name: str, fn: Callable[[float], float]):
    def unary(env: Environment, args: list[Expression]) -> Expression:
        _arity(name, args, 1)
        return _value(fn(_number(name, args[0], allow_complex=False)))
    return unary


# -------------------------------
# Complex numbers
# -------------------------------
def real(env: Environment, args: list[Expression]) -> Expression:
    _arity("real", args, 1)
    return _value(_complex("real", args[0]).real)


def imag(env: Environment, args: list[Expression]) -> Expression:
    _arity("imag", args, 1)
    return _value(_complex("imag", args[0]).imag)


def mag(env: Environment, args: list[Expression]) -> Expression:
    _arity("mag", args, 1)
    return _value(abs(_complex("mag", args[0])))


def arg(env: Environment, args: list[Expression]) -> Expression:
    _arity("arg", args, 1)
    return _value(cmath.phase(_complex("arg", args[0])))


def conj(env: Environment, args: list[Expression]) -> Expression:
    _arity("conj", args, 1)
    return _value(_complex("conj", args[0]).conjugate())


# -------------------------------
# List operations
# -------------------------------
def list_builtin(env: Environment, args: list[Expression]) -> Expression:
    return Expression.make_list(args)


def first(env: Environment, args: list[Expression]) -> Expression:
    _arity("first", args, 1)
    lst = _list("first", args[0])
    if lst.is_leaf():
        raise TypeMismatchError("argument to first is an empty list")
    return lst.tail[0].copy()


def rest(env: Environment, args: list[Expression]) -> Expression:
    _arity("rest", args, 1)
    lst = _list("rest", args[0])
    if lst.is_leaf():
        raise TypeMismatchError("argument to rest is an empty list")
    return Expression.make_list(lst.tail[1:])


def length(env: Environment, args: list[Expression]) -> Expression:
    _arity("length", args, 1)
    return _value(float(len(_list("length", args[0]).tail)))


def append(env: Environment, args: list[Expression]) -> Expression:
    _arity("append", args, 2)
    lst = _list("append", args[0])
    return Expression.make_list([*lst.tail, args[1]])


def join(env: Environment, args: list[Expression]) -> Expression:
    _arity("join", args, 2)
    left, right = (_list("join", a) for a in args)
    return Expression.make_list([*left.tail, *right.tail])


def range_builtin(env: Environment, args: list[Expression]) -> Expression:
    _arity("range", args, 3)
    start, stop, step = (_number("range", a, allow_complex=False) for a in args)
    if start > stop:
        raise TypeMismatchError("range lower bound exceeds upper bound")
    if step <= 0:
        raise TypeMismatchError("range step must be positive")
    count = int(math.floor((stop - start) / step + 1e-9)) + 1
    return Expression.make_list([_value(start + i * step) for i in range(count)])


# -------------------------------
# Plot constructors
# -------------------------------
def make_point(env: Environment, args: list[Expression]) -> Expression:
    _arity("make-point", args, 2)
    x, y = (_number("make-point", a, allow_complex=False) for a in args)
    return Expression.make_point(x, y)


def make_line(env: Environment, args: list[Expression]) -> Expression:
    _arity("make-line", args, 2)
    if not all(a.is_point() for a in args):
        raise TypeMismatchError("arguments to make-line must be points")
    return Expression.make_line(args[0], args[1])


def make_text(env: Environment, args: list[Expression]) -> Expression:
    _arity("make-text", args, 1)
    if not (args[0].is_head_string() and args[0].is_leaf()):
        raise TypeMismatchError("argument to make-text must be a string")
    return Expression.make_text(args[0].head.value)


# -------------------------------
# Registration
# -------------------------------
def procedure(name: str, fn: Callable) -> Expression:
    fn.plotscript_name = name
    return Expression(Atom.procedure(fn))


PROCEDURES: dict[str, Callable] = {
    '+': add,
    '-': sub,
    '*': mul,
    '/': div,
    '^': expt,
    'sqrt': sqrt,
    'ln': ln,
    'sin': _unary_real('sin', math.sin),
    'cos': _unary_real('cos', math.cos),
    'tan': _unary_real('tan', math.tan),
    'real': real,
    'imag': imag,
    'mag': mag,
    'arg': arg,
    'conj': conj,
    'list': list_builtin,
    'first': first,
    'rest': rest,
    'length': length,
    'append': append,
    'join': join,
    'range': range_builtin,
    'make-point': make_point,
    'make-line': make_line,
    'make-text': make_text,
}

CONSTANTS: dict[str, Number] = {
    'pi': math.pi,
    'e': math.e,
    'I': 1j,
}


def register(env: Environment):
    env.update({Symbol(name): procedure(name, fn) for name, fn in PROCEDURES.items()})
    env.update({Symbol(name): _value(value) for name, value in CONSTANTS.items()})
