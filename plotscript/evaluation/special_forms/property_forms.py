from plotscript import EvaluatorFn
from plotscript.errors import MalformedSpecialFormError, TypeMismatchError
from plotscript.types.environment import Environment
from plotscript.types.expression import Expression, OBJECT_NAME


PLOT_OBJECT_NAMES = ("point", "line", "text")


def _is_number(value: Expression) -> bool:
    return value.is_head_number() and value.is_leaf()


def _check_value(key: str, value: Expression) -> None:
    """Reject rendering hints the renderer could not use."""
    if key in ("size", "thickness"):
        if not _is_number(value) or value.head.value < 0:
            raise TypeMismatchError(f"{key} must be a non-negative number")
    elif key == "text-scale":
        if not _is_number(value) or value.head.value <= 0:
            raise TypeMismatchError("text-scale must be a positive number")
    elif key == "text-rotation":
        if not _is_number(value):
            raise TypeMismatchError("text-rotation must be a number")
    elif key == "position":
        if not value.is_point():
            raise TypeMismatchError("position must be a point")
    elif key == OBJECT_NAME:
        if not (value.is_head_string() and value.head.value in PLOT_OBJECT_NAMES):
            raise TypeMismatchError(f"object-name must be one of {', '.join(PLOT_OBJECT_NAMES)}")


def _eval_key(key_expr: Expression, env: Environment, evaluate_fn: EvaluatorFn, depth: int) -> str:
    key = evaluate_fn(key_expr, env, depth + 1)
    if not (key.is_head_string() and key.is_leaf()):
        raise TypeMismatchError("property name must be a string")
    return key.head.value


def set_property_form(
    tail: list[Expression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    depth: int,
) -> Expression:
    """
    (set-property key value target)
    Returns a copy of target carrying the property; target itself is left
    untouched. Only plot objects accept properties.
    """
    if len(tail) != 3:
        raise MalformedSpecialFormError("set-property requires exactly 3 arguments")

    key = _eval_key(tail[0], env, evaluate_fn, depth)
    value = evaluate_fn(tail[1], env, depth + 1)
    target = evaluate_fn(tail[2], env, depth + 1)
    if not target.is_plot_object():
        raise TypeMismatchError(f"cannot set property {key} on {target}: not a plot object")
    _check_value(key, value)

    result = target.copy()
    result.set_property(key, value)
    return result


def get_property_form(
    tail: list[Expression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    depth: int,
) -> Expression:
    """
    (get-property key target)
    Returns the property value, or NONE when target does not carry it.
    """
    if len(tail) != 2:
        raise MalformedSpecialFormError("get-property requires exactly 2 arguments")

    key = _eval_key(tail[0], env, evaluate_fn, depth)
    target = evaluate_fn(tail[1], env, depth + 1)
    value = target.get_property(key)
    return value.copy() if value is not None else Expression()
