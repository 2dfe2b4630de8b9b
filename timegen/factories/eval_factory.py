from __future__ import annotations
from typing import Optional

from timegen.contracts.choices import OutputType
from timegen.components.interfaces import PerformanceAggregator
from timegen.components.evaluation.aggregate import MetricAggregator


def make_aggregator(
    metric: Optional[str],
    *,
    output_type: OutputType,
    n_classes: int,
) -> Optional[PerformanceAggregator]:
    """
    Create the performance aggregator; None when raw outputs are requested.
    """
    if metric is None:
        return None
    return MetricAggregator(metric=metric, output_type=output_type, n_classes=n_classes)
