import pytest

from plotscript.builtins import register
from plotscript.interpreter import Interpreter
from plotscript.types.environment import Environment


@pytest.fixture
def env():
    """Fresh root environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def interp():
    return Interpreter()
