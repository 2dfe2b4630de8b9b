"""Built-in metric registrations."""

from __future__ import annotations

from timegen.registries.metrics import register_metric

from timegen.components.evaluation import metrics as m

# label-based metrics accept any output; scores are thresholded into labels
register_metric("accuracy")(m.accuracy)
register_metric("balanced_accuracy")(m.balanced_accuracy)
register_metric("precision")(m.precision)
register_metric("recall")(m.recall)
register_metric("f1")(m.f1)
register_metric("kappa")(m.kappa)

# score-based metrics need binary decision values (or P(class 1) for auc)
register_metric("auc", output_types=("dval", "prob"), binary_only=True)(m.auc)
register_metric("tval", output_types=("dval",), binary_only=True)(m.tval)
register_metric("dval", output_types=("dval",), binary_only=True)(m.dval)
