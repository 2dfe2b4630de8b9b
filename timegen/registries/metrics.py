from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, FrozenSet

import numpy as np

from timegen.registries.base import Registry

# (output, y, *, output_type, n_classes) -> reduced array
MetricFn = Callable[..., np.ndarray]


@dataclass(frozen=True)
class MetricSpec:
    """A registered performance metric and the classifier outputs it accepts."""

    name: str
    fn: MetricFn
    output_types: FrozenSet[str]
    binary_only: bool = False


_METRICS: Registry[str, MetricSpec] = Registry(_name="metrics")

_BUILTINS_LOADED = False


def register_metric(
    name: str,
    *,
    output_types: tuple[str, ...] = ("clabel", "dval", "prob"),
    binary_only: bool = False,
) -> Callable[[MetricFn], MetricFn]:
    """Decorator registering a vectorised metric function under ``name``."""

    def deco(fn: MetricFn) -> MetricFn:
        _METRICS.register(name)(
            MetricSpec(name=name, fn=fn, output_types=frozenset(output_types), binary_only=binary_only)
        )
        return fn

    return deco


def _ensure_builtins() -> None:
    global _BUILTINS_LOADED
    if _BUILTINS_LOADED:
        return
    from timegen.registries.builtins import metrics as _  # noqa: F401
    _BUILTINS_LOADED = True


def get_metric(name: str) -> MetricSpec:
    _ensure_builtins()
    return _METRICS.get(name)


def list_metrics() -> list[str]:
    _ensure_builtins()
    return sorted(_METRICS.keys())
