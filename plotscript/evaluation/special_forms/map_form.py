from plotscript import EvaluatorFn
from plotscript.errors import MalformedSpecialFormError, TypeMismatchError
from plotscript.evaluation.apply import apply as apply_engine, evaluate_procedure
from plotscript.types.environment import Environment
from plotscript.types.expression import Expression


def map_form(
    tail: list[Expression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    depth: int,
) -> Expression:
    """
    (map fn list)
    Applies fn to each element, left to right, and collects the results in a
    new list.
    """
    if len(tail) != 2:
        raise MalformedSpecialFormError("map expects exactly two arguments: procedure and list")

    fn_val = evaluate_procedure(tail[0], env, evaluate_fn, depth, "map")

    items = evaluate_fn(tail[1], env, depth + 1)
    if not items.is_head_list():
        raise TypeMismatchError("second argument to map must evaluate to a list")

    results = [
        apply_engine(fn_val, [item], env, evaluate_fn, depth)
        for item in items.iter_tail()
    ]
    return Expression.make_list(results)
