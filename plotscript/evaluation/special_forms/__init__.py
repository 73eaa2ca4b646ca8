"""Registry of special forms for the plotscript evaluator.

Maps each special FormKind to the handler implementing its evaluation rule.
Handlers share one signature: (tail, env, evaluate_fn, depth) -> Expression.
"""

from plotscript.evaluation.forms import FormKind
from plotscript.evaluation.special_forms.define_form import define_form
from plotscript.evaluation.special_forms.begin_form import begin_form
from plotscript.evaluation.special_forms.lambda_form import lambda_form
from plotscript.evaluation.special_forms.apply_form import apply_form
from plotscript.evaluation.special_forms.map_form import map_form
from plotscript.evaluation.special_forms.property_forms import set_property_form, get_property_form
from plotscript.evaluation.special_forms.plot_forms import discrete_plot_form, continuous_plot_form

SPECIAL_FORMS = {
    FormKind.DEFINE: define_form,
    FormKind.BEGIN: begin_form,
    FormKind.LAMBDA: lambda_form,
    FormKind.APPLY: apply_form,
    FormKind.MAP: map_form,
    FormKind.SET_PROPERTY: set_property_form,
    FormKind.GET_PROPERTY: get_property_form,
    FormKind.DISCRETE_PLOT: discrete_plot_form,
    FormKind.CONTINUOUS_PLOT: continuous_plot_form,
}
