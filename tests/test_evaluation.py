import logging

import pytest

from plotscript.errors import (
    MalformedSpecialFormError,
    NotCallableError,
    UnboundSymbolError,
    ErrorKind,
)
from plotscript.evaluation.evaluator import evaluate
from plotscript.evaluation.forms import FormKind, classify
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


# -----------------------------------------------------
# Literals and lookup
# -----------------------------------------------------

@pytest.mark.parametrize("expr", [num(5), num(-2.5), Expression(Atom.string("hi")), Expression(Atom.complex(2j))])
def test_self_evaluating_literals(env, expr):
    assert evaluate(expr, env) == expr


def test_eval_method_delegates_to_evaluator(env):
    assert num(7).eval(env) == num(7)


def test_define_and_lookup(env):
    assert run(env, "(define a 10)") == num(10)
    assert run(env, "a") == num(10)
    assert env.lookup(Symbol("a")) == num(10)


def test_unbound_symbol(env):
    with pytest.raises(UnboundSymbolError) as exc:
        run(env, "nope")
    assert exc.value.kind is ErrorKind.UNBOUND_SYMBOL


def test_unbound_procedure(env):
    with pytest.raises(UnboundSymbolError):
        run(env, "(nope 1 2)")


def test_lookup_returns_copy(env):
    run(env, "(define xs (list 1 2))")
    value = run(env, "xs")
    value.append(Atom.number(3))
    assert run(env, "xs") == Expression.make_list([num(1), num(2)])


def test_builtin_constants(env):
    assert run(env, "(define two-pi (* 2 pi))").head.value == pytest.approx(6.283185307)
    assert run(env, "I") == Expression(Atom.complex(1j))


# -----------------------------------------------------
# define
# -----------------------------------------------------

def test_user_symbol_may_be_redefined(env):
    assert run(env, "(define a 1) (define a 2) a") == num(2)


@pytest.mark.parametrize("source", ["(define + 1)", "(define pi 3)", "(define make-point 0)"])
def test_builtins_cannot_be_redefined(env, source):
    with pytest.raises(MalformedSpecialFormError):
        run(env, source)


@pytest.mark.parametrize("keyword", ["define", "begin", "lambda", "apply", "map", "set-property", "discrete-plot"])
def test_special_forms_cannot_be_redefined(env, keyword):
    with pytest.raises(MalformedSpecialFormError):
        run(env, f"(define {keyword} 1)")


@pytest.mark.parametrize("source", ["(define a)", "(define a 1 2)", "(define 1 2)", '(define "a" 2)'])
def test_define_malformed(env, source):
    with pytest.raises(MalformedSpecialFormError):
        run(env, source)


def test_define_failure_leaves_no_binding(env):
    with pytest.raises(UnboundSymbolError):
        run(env, "(define a (+ 1 missing))")
    with pytest.raises(UnboundSymbolError):
        run(env, "a")


# -----------------------------------------------------
# begin
# -----------------------------------------------------

def test_begin_sequencing(env):
    assert run(env, "(begin (define a 10) (define b 20) (+ a b))") == num(30)


def test_begin_requires_body(env):
    with pytest.raises(MalformedSpecialFormError):
        run(env, "(begin)")


# -----------------------------------------------------
# lambda and closures
# -----------------------------------------------------

def test_lambda_returns_procedure_without_evaluating_body(env):
    fn = run(env, "(lambda (x) (undefined-thing x))")
    assert fn.is_head_lambda()
    assert fn.is_callable()
    assert str(fn) == "(lambda (x) (undefined-thing x))"


def test_lambda_identity_with_begin(env):
    assert run(env, "(define f (lambda (x) (begin x))) (f 5)") == num(5)


def test_lambda_multiple_params(env):
    assert run(env, "(define f (lambda (a b) (- a b))) (f 10 3)") == num(7)


def test_lambda_multiple_body_forms(env):
    assert run(env, "(define f (lambda (x) (define y (* x 2)) (+ y 1))) (f 4)") == num(9)


def test_lambda_body_defines_stay_local(env):
    run(env, "(define f (lambda (x) (define inner x))) (f 4)")
    with pytest.raises(UnboundSymbolError):
        run(env, "inner")


def test_closure_retains_enclosing_scope(env):
    src = """
    (define make-adder (lambda (n) (lambda (x) (+ x n))))
    (define add5 (make-adder 5))
    (define add7 (make-adder 7))
    (add5 10)
    """
    assert run(env, src) == num(15)
    assert run(env, "(add7 10)") == num(17)


def test_closure_sees_later_definitions_in_captured_scope(env):
    run(env, "(define f (lambda (x) (+ x offset)))")
    run(env, "(define offset 100)")
    assert run(env, "(f 1)") == num(101)


def test_parameters_shadow_globals(env):
    assert run(env, "(define x 1) (define f (lambda (x) (* x 10))) (f 3)") == num(30)
    assert run(env, "x") == num(1)


def test_parameters_may_shadow_builtins(env):
    assert run(env, "(define f (lambda (pi) (+ pi 1))) (f 1)") == num(2)


def test_list_may_be_a_parameter(env):
    assert run(env, "(define f (lambda (list) (first list))) (f (list 7 8))") == num(7)
    assert run(env, "(define g (lambda (list x) (length list))) (g (list 1 2) 0)") == num(2)


def test_zero_parameter_lambda_via_apply(env):
    assert run(env, "(define f (lambda () 42)) (apply f (list))") == num(42)


@pytest.mark.parametrize("source", ["(lambda (x))", "(lambda)", "(lambda (1) 1)", "(lambda (x x) x)", "(lambda (define) 1)"])
def test_lambda_malformed(env, source):
    with pytest.raises(MalformedSpecialFormError):
        run(env, source)


# -----------------------------------------------------
# Calls
# -----------------------------------------------------

def test_nested_call_post_order(env):
    assert run(env, "(+ 1 (* 2 (- 10 4)))") == num(13)


def test_literal_head_not_callable(env):
    with pytest.raises(NotCallableError) as exc:
        run(env, "(5 1)")
    assert exc.value.kind is ErrorKind.NOT_CALLABLE


def test_non_procedure_binding_not_callable(env):
    with pytest.raises(NotCallableError):
        run(env, "(define x 3) (x 1)")


@pytest.mark.parametrize(
    "source, kind",
    [
        ("5", FormKind.LITERAL),
        ("x", FormKind.SYMBOL),
        ("(define a 1)", FormKind.DEFINE),
        ("(begin 1)", FormKind.BEGIN),
        ("(lambda (x) x)", FormKind.LAMBDA),
        ("(apply f (list))", FormKind.APPLY),
        ("(map f (list 1))", FormKind.MAP),
        ('(set-property "size" 1 p)', FormKind.SET_PROPERTY),
        ('(get-property "size" p)', FormKind.GET_PROPERTY),
        ("(discrete-plot data)", FormKind.DISCRETE_PLOT),
        ("(continuous-plot f (list 0 1))", FormKind.CONTINUOUS_PLOT),
        ("(f 1 2)", FormKind.CALL),
        ("(1 2)", FormKind.CALL),
    ],
)
def test_classify(source, kind):
    (expr,) = parse(source)
    assert classify(expr) is kind


def test_evaluated_values_classify_as_literals():
    assert classify(Expression.make_list([num(1)])) is FormKind.LITERAL


# -----------------------------------------------------
# Scopes
# -----------------------------------------------------

def test_push_and_pop_scope(env):
    env.define(Symbol("a"), num(1))
    child = env.push_scope()
    child.define(Symbol("a"), num(2))
    assert child.lookup(Symbol("a")) == num(2)
    assert child.pop_scope() is env
    assert env.lookup(Symbol("a")) == num(1)


def test_pop_root_scope_fails(env):
    with pytest.raises(RuntimeError):
        env.pop_scope()


def test_child_scope_cannot_redefine_builtin(env):
    with pytest.raises(MalformedSpecialFormError):
        env.push_scope().define(Symbol("sqrt"), num(1))


def test_scope_rendering(env):
    env.define(Symbol("a"), num(1))
    child = env.push_scope()
    child.bind(Symbol("x"), num(2))
    assert str(env) == "{a: (1)}"
    assert str(child) == "{x: (2)} -> ..."
    assert repr(child) == "<Environment chain: {x: (2)} -> {a: (1)}>"


def test_lambda_call_logs_bound_scope(env, caplog):
    with caplog.at_level(logging.DEBUG, logger="Apply"):
        run(env, "(define f (lambda (x) x)) (f 3)")
    assert "call lambda (x) at depth 0 with {x: (3)} -> ..." in caplog.text
