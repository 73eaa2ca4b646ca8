from plotscript import EvaluatorFn
from plotscript.errors import MalformedSpecialFormError, TypeMismatchError
from plotscript.evaluation.apply import apply as apply_engine, evaluate_procedure
from plotscript.types.environment import Environment
from plotscript.types.expression import Expression


def apply_form(
    tail: list[Expression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    depth: int,
) -> Expression:
    """
    (apply fn args)
    Evaluates fn and args, then delegates to the central application engine,
    which enforces arity for lambdas and fixed-arity builtins.
    """
    if len(tail) != 2:
        raise MalformedSpecialFormError(
            "apply expects exactly two arguments: procedure and argument list"
        )

    fn_expr, args_expr = tail
    fn_val = evaluate_procedure(fn_expr, env, evaluate_fn, depth, "apply")

    args_val = evaluate_fn(args_expr, env, depth + 1)
    if not args_val.is_head_list():
        raise TypeMismatchError("second argument to apply must evaluate to a list")

    return apply_engine(fn_val, args_val.make_tail(), env, evaluate_fn, depth)
