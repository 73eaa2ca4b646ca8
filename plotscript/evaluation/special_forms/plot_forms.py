from plotscript import EvaluatorFn
from plotscript.errors import MalformedSpecialFormError, TypeMismatchError
from plotscript.evaluation.apply import apply as apply_engine, evaluate_procedure
from plotscript.plotting import parse_options, layout_discrete, layout_continuous
from plotscript.types.atom import Atom
from plotscript.types.environment import Environment
from plotscript.types.expression import Expression


def _coordinates(entry: Expression) -> tuple[float, float]:
    # Accepts points from make-point as well as bare (list x y) pairs.
    if entry.is_head_list() and len(entry.tail) == 2 and all(
        c.is_head_number() and c.is_leaf() for c in entry.tail
    ):
        return entry.tail[0].head.value, entry.tail[1].head.value
    raise TypeMismatchError(f"plot data entry {entry} is not an (x y) pair")


def discrete_plot_form(
    tail: list[Expression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    depth: int,
) -> Expression:
    """
    (discrete-plot data [options])
    data is a non-empty list of (x y) pairs.
    """
    if len(tail) not in (1, 2):
        raise MalformedSpecialFormError("discrete-plot requires data and optional options")

    data = evaluate_fn(tail[0], env, depth + 1)
    if not data.is_head_list() or data.is_leaf():
        raise TypeMismatchError("discrete-plot data must be a non-empty list")
    options = parse_options(evaluate_fn(tail[1], env, depth + 1) if len(tail) == 2 else None)

    points = [_coordinates(entry) for entry in data.iter_tail()]
    return Expression.make_discrete_plot(layout_discrete(points, options), "discrete")


def continuous_plot_form(
    tail: list[Expression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    depth: int,
) -> Expression:
    """
    (continuous-plot fn (list xmin xmax) [options])
    fn takes one number and must return a number.
    """
    if len(tail) not in (2, 3):
        raise MalformedSpecialFormError("continuous-plot requires a procedure, bounds and optional options")

    fn = evaluate_procedure(tail[0], env, evaluate_fn, depth, "continuous-plot")
    bounds = evaluate_fn(tail[1], env, depth + 1)
    xmin, xmax = _coordinates(bounds)
    if not xmin < xmax:
        raise TypeMismatchError("continuous-plot bounds must satisfy lower < upper")
    options = parse_options(evaluate_fn(tail[2], env, depth + 1) if len(tail) == 3 else None)

    def sample(x: float) -> float:
        y = apply_engine(fn, [Expression(Atom.number(float(x)))], env, evaluate_fn, depth)
        if not (y.is_head_number() and y.is_leaf()):
            raise TypeMismatchError(f"continuous-plot procedure returned non-number {y}")
        return y.head.value

    return Expression.make_discrete_plot(layout_continuous(sample, xmin, xmax, options), "continuous")
