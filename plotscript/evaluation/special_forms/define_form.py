from plotscript import EvaluatorFn
from plotscript.errors import MalformedSpecialFormError
from plotscript.evaluation.forms import is_keyword
from plotscript.types.environment import Environment
from plotscript.types.expression import Expression


def define_form(
    tail: list[Expression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    depth: int,
) -> Expression:
    """
    (define name value)
    The name is not evaluated. Special-form keywords and builtins cannot be
    rebound; user symbols can.
    """
    if len(tail) != 2:
        raise MalformedSpecialFormError("define requires exactly 2 arguments")

    name_expr, value_expr = tail
    if not (name_expr.is_head_symbol() and name_expr.is_leaf()):
        raise MalformedSpecialFormError("first argument to define must be a symbol")
    name = name_expr.head.value
    if is_keyword(name):
        raise MalformedSpecialFormError(f"attempt to redefine special form {name}")

    value = evaluate_fn(value_expr, env, depth + 1)
    env.define(name, value)
    return value.copy()
