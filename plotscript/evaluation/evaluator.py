"""Core evaluator for plotscript.

Evaluates an Expression tree by post-order traversal: arguments are evaluated
before the procedure they feed, left to right. Dispatch is an exhaustive match
over FormKind. Nesting depth is bounded; crossing the ceiling raises
StackExhaustedError instead of overflowing the Python stack.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import assert_never

from plotscript.config import DEFAULT_MAX_DEPTH, get_config
from plotscript.errors import NotCallableError, StackExhaustedError
from plotscript.evaluation.apply import apply
from plotscript.evaluation.forms import FormKind, classify
from plotscript.evaluation.special_forms import SPECIAL_FORMS
from plotscript.types.environment import Environment
from plotscript.types.expression import Expression

_logger = logging.getLogger("Evaluator")


def evaluate(expr: Expression, env: Environment, max_depth: int | None = None) -> Expression:
    """
    Top-level entry point: evaluate `expr` in `env` with a fresh depth count.
    """
    limit = max_depth if max_depth is not None else get_config().max_depth
    try:
        return evaluate0(expr, env, 0, limit)
    except RecursionError as exc:
        _logger.warning("Python recursion limit reached below depth ceiling %d", limit)
        raise StackExhaustedError("maximum recursion depth exceeded") from exc


def evaluate0(
    expr: Expression,
    env: Environment,
    depth: int = 0,
    limit: int = DEFAULT_MAX_DEPTH,
) -> Expression:
    """
    Single evaluation step at nesting level `depth`.
    """
    if depth > limit:
        _logger.warning("evaluation depth ceiling %d exceeded", limit)
        raise StackExhaustedError(f"maximum recursion depth {limit} exceeded")

    evaluate_fn = partial(evaluate0, limit=limit)
    kind = classify(expr)
    match kind:
        case FormKind.LITERAL:
            return expr.copy()
        case FormKind.SYMBOL:
            return env.lookup(expr.head.value).copy()
        case FormKind.CALL:
            if not expr.is_head_symbol():
                raise NotCallableError(f"{expr.make_string()} is not a procedure")
            proc = env.lookup(expr.head.value)
            args = [evaluate_fn(arg, env, depth + 1) for arg in expr.tail]
            return apply(proc, args, env, evaluate_fn, depth)
        case (
            FormKind.DEFINE
            | FormKind.BEGIN
            | FormKind.LAMBDA
            | FormKind.APPLY
            | FormKind.MAP
            | FormKind.SET_PROPERTY
            | FormKind.GET_PROPERTY
            | FormKind.DISCRETE_PLOT
            | FormKind.CONTINUOUS_PLOT
        ):
            return SPECIAL_FORMS[kind](expr.tail, env, evaluate_fn, depth)
        case _:
            assert_never(kind)
