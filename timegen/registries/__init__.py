"""Registries for pluggable components.

Adding a classifier, metric or cross-validation scheme means:
- add an implementation
- register it
- the engine resolves it by id, nothing else changes
"""

from .classifiers import list_classifiers, make_classifier_adapter, make_model_builder, register_classifier
from .metrics import get_metric, list_metrics, register_metric
from .splitters import list_cv_kinds, make_fold_generator, register_fold_generator
