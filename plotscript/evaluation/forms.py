"""Closed set of expression forms recognised by the evaluator.

Every Expression classifies into exactly one FormKind; the evaluator matches on
the kind, so adding a form means adding a member here and an arm there.
"""

from enum import Enum, auto

from plotscript.types.atom import AtomKind
from plotscript.types.expression import Expression
from plotscript.types.symbol import Symbol


class FormKind(Enum):
    LITERAL = auto()
    SYMBOL = auto()
    DEFINE = auto()
    BEGIN = auto()
    LAMBDA = auto()
    APPLY = auto()
    MAP = auto()
    SET_PROPERTY = auto()
    GET_PROPERTY = auto()
    DISCRETE_PLOT = auto()
    CONTINUOUS_PLOT = auto()
    CALL = auto()


FORM_KEYWORDS: dict[Symbol, FormKind] = {
    Symbol("define"): FormKind.DEFINE,
    Symbol("begin"): FormKind.BEGIN,
    Symbol("lambda"): FormKind.LAMBDA,
    Symbol("apply"): FormKind.APPLY,
    Symbol("map"): FormKind.MAP,
    Symbol("set-property"): FormKind.SET_PROPERTY,
    Symbol("get-property"): FormKind.GET_PROPERTY,
    Symbol("discrete-plot"): FormKind.DISCRETE_PLOT,
    Symbol("continuous-plot"): FormKind.CONTINUOUS_PLOT,
}

# Heads that mark an already-evaluated compound value.
VALUE_KINDS = (AtomKind.LIST, AtomKind.LAMBDA, AtomKind.DISCRETE)


def is_keyword(name: Symbol) -> bool:
    return name in FORM_KEYWORDS


def classify(expr: Expression) -> FormKind:
    head = expr.head
    if head.kind is AtomKind.SYMBOL:
        form = FORM_KEYWORDS.get(head.value)
        if form is not None:
            return form
        return FormKind.SYMBOL if expr.is_leaf() else FormKind.CALL
    if expr.is_leaf() or head.kind in VALUE_KINDS:
        return FormKind.LITERAL
    return FormKind.CALL
