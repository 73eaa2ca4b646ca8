from plotscript import EvaluatorFn
from plotscript.errors import MalformedSpecialFormError
from plotscript.evaluation.forms import is_keyword
from plotscript.types.atom import Atom
from plotscript.types.environment import Environment
from plotscript.types.expression import Expression
from plotscript.types.symbol import Symbol


def parse_formals(params: Expression) -> list[Symbol]:
    """Read a parameter list: `()`, `(x)` or `(x y ...)`.

    The reader builds `(x y)` as head `x` with tail `[y]`, so the head is the
    first formal. Every formal must be a plain symbol, distinct, and not a
    special-form keyword.
    """
    if params.is_none():
        return []
    if params.is_head_list() and params.is_leaf():
        # The reader turns `(list)` into the empty list value.
        return [Symbol("list")]
    candidates = [Expression(params.head), *params.tail]
    formals: list[Symbol] = []
    for c in candidates:
        if not (c.is_head_symbol() and c.is_leaf()):
            raise MalformedSpecialFormError(f"lambda parameter {c} is not a symbol")
        name = c.head.value
        if is_keyword(name):
            raise MalformedSpecialFormError(f"lambda parameter cannot be special form {name}")
        if name in formals:
            raise MalformedSpecialFormError(f"duplicate lambda parameter {name}")
        formals.append(name)
    return formals


def lambda_form(
    tail: list[Expression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    depth: int,
) -> Expression:
    # (lambda (params) body...) with one or more body forms.
    # Several body forms are wrapped in an implicit begin.
    if len(tail) < 2:
        raise MalformedSpecialFormError("lambda requires a parameter list and a body")

    formals = parse_formals(tail[0])
    body_forms = tail[1:]
    if len(body_forms) == 1:
        body = body_forms[0]
    else:
        body = Expression(Atom.symbol("begin"), body_forms)

    # The current scope is captured by reference, not copied.
    return Expression.make_lambda(formals, body, env)
