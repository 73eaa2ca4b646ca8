from plotscript import EvaluatorFn
from plotscript.errors import MalformedSpecialFormError
from plotscript.types.environment import Environment
from plotscript.types.expression import Expression


def begin_form(
    tail: list[Expression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    depth: int,
) -> Expression:
    if not tail:
        raise MalformedSpecialFormError("begin requires at least one expression")
    result = Expression()
    for e in tail:
        result = evaluate_fn(e, env, depth + 1)
    return result
