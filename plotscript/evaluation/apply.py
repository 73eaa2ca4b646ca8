"""Application engine for plotscript.

Centralizes procedure invocation so the evaluator and the `apply`, `map` and
`continuous-plot` special forms share one set of semantics:
- Lambdas bind their formals in a freshly pushed child of the captured scope,
  evaluate the body there, and drop the scope on return.
- Builtins are Python callables invoked with the caller's env and the list of
  already-evaluated argument Expressions.
"""

import logging

from plotscript import EvaluatorFn
from plotscript.errors import ArityMismatchError, NotCallableError
from plotscript.evaluation.forms import is_keyword
from plotscript.types.environment import Environment
from plotscript.types.expression import Expression
from plotscript.types.lambda_fn import Lambda

_logger = logging.getLogger("Apply")


def apply_lambda(
    fn: Expression,
    args: list[Expression],
    evaluate_fn: EvaluatorFn,
    depth: int,
) -> Expression:
    """Apply a lambda Expression to already-evaluated arguments.

    The argument count must equal the number of formals; there is no partial
    application. Each call gets its own scope, so sibling calls never observe
    each other's bindings, while closures created inside the body keep the
    scope alive for as long as they are referenced.
    """
    closure: Lambda = fn.head.value
    if len(args) != closure.arity:
        raise ArityMismatchError(
            f"procedure {closure} expects {closure.arity} argument(s), got {len(args)}"
        )
    scope = closure.env.push_scope()
    for name, value in zip(closure.formals, args):
        scope.bind(name, value)
    _logger.debug("call lambda %s at depth %d with %s", closure, depth, scope)
    return evaluate_fn(fn.tail[0], scope, depth + 1)


def apply(
    proc: Expression,
    args: list[Expression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    depth: int,
) -> Expression:
    """Apply either a lambda or a builtin procedure.

    Raises NotCallableError for anything else.
    """
    if proc.is_head_lambda():
        return apply_lambda(proc, args, evaluate_fn, depth)
    if proc.is_head_procedure() and proc.is_leaf():
        return proc.head.value(env, args)
    raise NotCallableError(f"{proc} is not a procedure")


def evaluate_procedure(
    expr: Expression,
    env: Environment,
    evaluate_fn: EvaluatorFn,
    depth: int,
    form: str,
) -> Expression:
    """Evaluate the procedure argument of `form` and check it is callable.

    A bare special-form keyword reads the same as an empty application of that
    form, so it is rejected before evaluation.
    """
    if expr.is_leaf() and expr.is_head_symbol() and is_keyword(expr.head.value):
        raise NotCallableError(f"special form {expr.head.value} cannot be used as a procedure in {form}")
    proc = evaluate_fn(expr, env, depth + 1)
    if not proc.is_callable():
        raise NotCallableError(f"first argument to {form} is not a procedure: {proc}")
    return proc
