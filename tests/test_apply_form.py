import pytest

from plotscript.builtins import procedure
from plotscript.errors import ArityMismatchError, NotCallableError, TypeMismatchError, MalformedSpecialFormError
from plotscript.evaluation.evaluator import evaluate
from plotscript.reader.parser import parse
from plotscript.types.atom import Atom
from plotscript.types.expression import Expression
from plotscript.types.symbol import Symbol


def num(value) -> Expression:
    return Expression(Atom.number(value))


def run(env, source: str) -> Expression:
    result = Expression()
    for form in parse(source):
        result = evaluate(form, env)
    return result


# -----------------------------
# Apply form basic behaviors
# -----------------------------

def test_apply_builtin_plus_with_list(env):
    # (apply + (list 1 2 3)) => 6
    assert run(env, "(apply + (list 1 2 3))") == num(6)


def test_apply_lambda_defined_via_define(env):
    src = """
    (define add2 (lambda (a b) (+ a b)))
    (apply add2 (list 10 20))
    """
    assert run(env, src) == num(30)


def test_apply_inline_lambda(env):
    assert run(env, "(apply (lambda (x) (begin x)) (list 5))") == num(5)


def test_apply_args_must_evaluate_to_list(env):
    with pytest.raises(TypeMismatchError) as exc:
        run(env, "(apply + 123)")
    assert "must evaluate to a list" in str(exc.value)


@pytest.mark.parametrize("args", ["(list)", "(list 1 2)"])
def test_apply_arity_mismatch_for_lambda(env, args):
    src = f"""
    (define id (lambda (x) x))
    (apply id {args})
    """
    with pytest.raises(ArityMismatchError):
        run(env, src)


def test_apply_arity_mismatch_for_fixed_arity_builtin(env):
    with pytest.raises(ArityMismatchError):
        run(env, "(apply sqrt (list 1 2))")


def test_apply_non_procedure(env):
    with pytest.raises(NotCallableError):
        run(env, "(apply 5 (list 1))")


def test_apply_requires_two_arguments(env):
    with pytest.raises(MalformedSpecialFormError):
        run(env, "(apply +)")


def test_call_arity_mismatch(env):
    with pytest.raises(ArityMismatchError):
        run(env, "(define f (lambda (a b) a)) (f 1)")


# -----------------------------
# map
# -----------------------------

def test_map_doubles_in_order(env):
    result = run(env, "(map (lambda (x) (* 2 x)) (list 1 2 3))")
    assert result == Expression.make_list([num(2), num(4), num(6)])
    assert str(result) == "(2 4 6)"


def test_map_builtin(env):
    assert run(env, "(map sqrt (list 4 9))") == Expression.make_list([num(2), num(3)])


def test_map_empty_list(env):
    assert run(env, "(map sqrt (list))") == Expression.make_list([])


def test_map_applies_left_to_right(env):
    seen = []

    def record(_, args):
        seen.append(args[0].head.value)
        return args[0]

    env.define_builtin(Symbol("record"), procedure("record", record))
    run(env, "(map (lambda (x) (record x)) (list 3 1 2))")
    assert seen == [3.0, 1.0, 2.0]


def test_call_arguments_evaluated_left_to_right(env):
    seen = []

    def record(_, args):
        seen.append(args[0].head.value)
        return args[0]

    env.define_builtin(Symbol("record"), procedure("record", record))
    run(env, "(+ (record 1) (record 2) (record 3))")
    assert seen == [1.0, 2.0, 3.0]


def test_map_errors(env):
    with pytest.raises(NotCallableError):
        run(env, "(map 3 (list 1))")
    with pytest.raises(TypeMismatchError):
        run(env, "(map sqrt 4)")
    with pytest.raises(ArityMismatchError):
        run(env, "(map (lambda (a b) a) (list 1 2))")
    with pytest.raises(MalformedSpecialFormError):
        run(env, "(map sqrt)")


@pytest.mark.parametrize(
    "source",
    [
        "(map begin (list 1 2))",
        "(apply define (list 1 2))",
        "(continuous-plot lambda (list 0 1))",
    ],
)
def test_special_form_keyword_is_not_a_procedure(env, source):
    with pytest.raises(NotCallableError, match="special form"):
        run(env, source)
