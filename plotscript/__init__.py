# Core type aliases for plotscript.
#
# Code and runtime values share one representation: an Expression tree (a head
# Atom plus an ordered tail of child Expressions). Parsed forms and evaluated
# results are both Expressions.
#
# Naming guidance:
# - EvaluatorFn: the evaluator callable handed to special forms and the apply
#   engine, so they can recurse without importing the evaluator module.
# - BuiltinFn:   the signature of procedures registered in the root scope.

from typing import Any, Callable

# Evaluator function type: (expr, env, depth) -> Expression
EvaluatorFn = Callable[..., Any]

# Builtin procedure type: (env, args) -> Expression
BuiltinFn = Callable[[Any, list], Any]
