from __future__ import annotations

import logging

from plotscript.builtins import register
from plotscript.config import PlotscriptConfig, get_config
from plotscript.evaluation.evaluator import evaluate
from plotscript.reader.parser import lex, TokenStream
from plotscript.types.environment import Environment
from plotscript.types.expression import Expression


class Interpreter:
    """
    Reads and evaluates plotscript source text.
    Maintains one Environment across calls, so definitions persist between
    top-level evaluations until reset() is called.
    """

    _logger = logging.getLogger("Interpreter")

    def __init__(self, config: PlotscriptConfig | None = None):
        self.config: PlotscriptConfig = config if config is not None else get_config()
        self.env: Environment = Environment()
        register(self.env)

    def reset(self) -> None:
        """Drop all user definitions and start from the builtins again."""
        self._logger.info("Resetting environment")
        self.env = Environment()
        register(self.env)

    def eval(self, code: str) -> Expression:
        """Evaluate every top-level form in `code`; return the last value.

        Errors propagate to the caller. A failing form aborts the call, but
        definitions made by earlier forms remain in the environment.
        """
        stream = TokenStream(lex(code))
        result = Expression()
        for expr in stream.parse_all():
            result = evaluate(expr, self.env, self.config.max_depth)
        return result
