import numpy as np
import pytest

from timegen.components.splitters.folds import effective_num_sets
from timegen.core.errors import DataShapeError
from timegen.factories.fold_factory import make_folds


def test_stratified_kfold_partitions_samples_exactly_once():
    y = np.repeat([1, 2], 20)
    part = make_folds("kfold", y, k=5, stratify=True, seed=0)
    assert part.num_sets == 5

    all_test = np.concatenate([part.test_indices(i) for i in range(5)])
    assert np.array_equal(np.sort(all_test), np.arange(40))
    for i in range(5):
        assert np.intersect1d(part.train_indices(i), part.test_indices(i)).size == 0
        # classes stay balanced within each test fold
        assert np.bincount(y[part.test_indices(i)])[1:].tolist() == [4, 4]


def test_masks_match_indices():
    y = np.repeat([1, 2], 10)
    part = make_folds("kfold", y, k=2, stratify=False, seed=1)
    assert np.array_equal(np.flatnonzero(part.test(0)), np.sort(part.test_indices(0)))
    assert not np.any(part.training(0) & part.test(0))
    assert part.test_size(0) + part.test_size(1) == 20


def test_same_seed_same_partition():
    y = np.repeat([1, 2], 15)
    a = make_folds("kfold", y, k=3, seed=11)
    b = make_folds("kfold", y, k=3, seed=11)
    for i in range(3):
        assert np.array_equal(a.test_indices(i), b.test_indices(i))


def test_leaveout_uses_one_set_per_sample():
    y = np.array([1, 1, 1, 2, 2, 2])
    part = make_folds("leaveout", y)
    assert part.num_sets == 6
    assert all(part.test_size(i) == 1 for i in range(6))


def test_holdout_single_split():
    y = np.repeat([1, 2], 20)
    part = make_folds("holdout", y, p=0.25, stratify=True, seed=0)
    assert part.num_sets == 1
    assert part.test_size(0) == 10
    assert np.array_equal(
        np.sort(np.concatenate([part.train_indices(0), part.test_indices(0)])), np.arange(40)
    )


def test_none_trains_and_tests_on_everything():
    y = np.repeat([1, 2], 5)
    part = make_folds("none", y)
    assert part.num_sets == 1
    assert np.array_equal(part.train_indices(0), part.test_indices(0))


def test_stratified_kfold_needs_k_samples_per_class():
    y = np.array([1] * 3 + [2] * 20)
    with pytest.raises(DataShapeError):
        make_folds("kfold", y, k=5, stratify=True)


def test_kfold_needs_k_samples():
    with pytest.raises(DataShapeError):
        make_folds("kfold", np.array([1, 2, 1]), k=5, stratify=False)


@pytest.mark.parametrize("kind,expected", [("kfold", 5), ("leaveout", 40), ("holdout", 1), ("none", 1)])
def test_effective_num_sets(kind, expected):
    assert effective_num_sets(kind, 40, 5) == expected
