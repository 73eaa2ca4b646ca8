import pytest

from plotscript.config import DEFAULT_MAX_DEPTH, PlotscriptConfig, get_config
from plotscript.errors import ErrorKind, StackExhaustedError, UnboundSymbolError
from plotscript.interpreter import Interpreter


def test_infinite_recursion_is_stack_exhausted(interp):
    interp.eval("(define f (lambda (x) (f x)))")
    with pytest.raises(StackExhaustedError) as exc:
        interp.eval("(f 1)")
    assert exc.value.kind is ErrorKind.STACK_EXHAUSTED
    assert exc.value.fatal


def test_interpreter_usable_after_stack_exhausted(interp):
    interp.eval("(define f (lambda (x) (f x)))")
    with pytest.raises(StackExhaustedError):
        interp.eval("(f 1)")
    assert interp.eval("(+ 1 2)").head.value == 3


def test_configured_ceiling_applies():
    interp = Interpreter(PlotscriptConfig(max_depth=10))
    nested = "(begin " * 20 + "1" + ")" * 20
    with pytest.raises(StackExhaustedError):
        interp.eval(nested)
    shallow = "(begin " * 3 + "1" + ")" * 3
    assert interp.eval(shallow).head.value == 1


def test_recoverable_errors_are_not_fatal(interp):
    with pytest.raises(UnboundSymbolError) as exc:
        interp.eval("missing")
    assert not exc.value.fatal


def test_config_from_environment(monkeypatch):
    monkeypatch.setenv("PLOTSCRIPT_MAX_DEPTH", "50")
    assert get_config().max_depth == 50


@pytest.mark.parametrize("raw", ["", "abc", "-3", "0"])
def test_config_ignores_bad_values(monkeypatch, raw):
    monkeypatch.setenv("PLOTSCRIPT_MAX_DEPTH", raw)
    assert get_config().max_depth == DEFAULT_MAX_DEPTH


def test_config_default(monkeypatch):
    monkeypatch.delenv("PLOTSCRIPT_MAX_DEPTH", raising=False)
    assert get_config() == PlotscriptConfig()
