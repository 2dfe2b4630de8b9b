"""Built-in fold generator registrations."""

from __future__ import annotations

from timegen.registries.splitters import register_fold_generator

from timegen.components.splitters.folds import (
    HoldOutGenerator,
    KFoldGenerator,
    LeaveOutGenerator,
    NoSplitGenerator,
)


@register_fold_generator("kfold")
def _kfold():
    return KFoldGenerator()


@register_fold_generator("leaveout")
def _leaveout():
    return LeaveOutGenerator()


@register_fold_generator("holdout")
def _holdout():
    return HoldOutGenerator()


@register_fold_generator("none")
def _none():
    return NoSplitGenerator()
