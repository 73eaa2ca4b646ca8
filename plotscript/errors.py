from enum import Enum


class PlotscriptError(Exception):
    """ Base class for all plotscript errors"""
    pass


class PlotscriptSyntaxError(PlotscriptError):
    """ Raised when source text cannot be read into an expression"""


class ErrorKind(str, Enum):
    UNBOUND_SYMBOL = "unbound-symbol"
    TYPE_MISMATCH = "type-mismatch"
    ARITY_MISMATCH = "arity-mismatch"
    NOT_CALLABLE = "not-callable"
    MALFORMED_SPECIAL_FORM = "malformed-special-form"
    STACK_EXHAUSTED = "stack-exhausted"


class EvalError(PlotscriptError):
    """ Raised when evaluation of an expression fails"""
    kind: ErrorKind
    fatal = False

    def __str__(self):
        return f"Error during evaluation: {super().__str__()}"


class UnboundSymbolError(EvalError):
    """ Raised when a symbol is used before it is bound"""
    kind = ErrorKind.UNBOUND_SYMBOL


class TypeMismatchError(EvalError):
    """ Raised when a value has the wrong type for an operation"""
    kind = ErrorKind.TYPE_MISMATCH


class ArityMismatchError(EvalError):
    """ Raised when the number of arguments passed to a procedure is incorrect"""
    kind = ErrorKind.ARITY_MISMATCH


class NotCallableError(EvalError):
    """ Raised when a non-procedure is placed in call position"""
    kind = ErrorKind.NOT_CALLABLE


class MalformedSpecialFormError(EvalError):
    """ Raised when a special form has the wrong shape"""
    kind = ErrorKind.MALFORMED_SPECIAL_FORM


class StackExhaustedError(EvalError):
    """ Raised when evaluation nests deeper than the configured ceiling.

    Fatal for the current evaluation unit: the host reports it and starts over
    with a fresh top-level evaluation.
    """
    kind = ErrorKind.STACK_EXHAUSTED
    fatal = True
