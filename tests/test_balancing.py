import numpy as np
import pytest

from timegen.components.balancing.resampling import balance_classes, balanced_class_counts
from timegen.core.errors import ConfigurationError, DataShapeError


def _data(counts=(6, 14), n_features=3, n_times=4):
    y = np.repeat(np.arange(1, len(counts) + 1), counts)
    X = np.arange(y.shape[0] * n_features * n_times, dtype=float).reshape(y.shape[0], n_features, n_times)
    return X, y


def test_oversample_equalises_to_largest_class():
    X, y = _data()
    rng = np.random.default_rng(0)
    Xb, yb = balance_classes(X, y, "oversample", replace=True, rng=rng)
    assert np.bincount(yb)[1:].tolist() == [14, 14]
    assert Xb.shape[1:] == X.shape[1:]
    # every original sample survives oversampling
    assert {tuple(r) for r in X[:, :, 0]} <= {tuple(r) for r in Xb[:, :, 0]}


def test_undersample_equalises_to_smallest_class():
    X, y = _data()
    Xb, yb = balance_classes(X, y, "undersample", replace=False, rng=np.random.default_rng(0))
    assert np.bincount(yb)[1:].tolist() == [6, 6]
    assert Xb.shape == (12, 3, 4)


def test_undersample_never_duplicates_samples():
    # the replace flag only governs oversampling
    X, y = _data(counts=(16, 24), n_features=1, n_times=1)
    Xb, yb = balance_classes(X, y, "undersample", replace=True, rng=np.random.default_rng(0))
    assert np.bincount(yb)[1:].tolist() == [16, 16]
    assert np.unique(Xb[:, 0, 0]).size == Xb.shape[0]

    Xb, _ = balance_classes(X, y, 10, replace=True, rng=np.random.default_rng(0))
    assert np.unique(Xb[:, 0, 0]).size == 20


def test_target_below_all_classes():
    X, y = _data()
    _, yb = balance_classes(X, y, 4, replace=False, rng=np.random.default_rng(0))
    assert np.bincount(yb)[1:].tolist() == [4, 4]


def test_target_equal_to_smallest_class_is_allowed():
    X, y = _data()
    _, yb = balance_classes(X, y, 6, replace=False, rng=np.random.default_rng(0))
    assert np.bincount(yb)[1:].tolist() == [6, 6]


def test_target_between_class_sizes_is_rejected():
    X, y = _data()
    with pytest.raises(ConfigurationError):
        balance_classes(X, y, 10, rng=np.random.default_rng(0))
    with pytest.raises(ConfigurationError):
        balanced_class_counts(np.array([6, 14]), 10)


def test_oversample_without_replacement_repeats_whole_class():
    X, y = _data(counts=(3, 7))
    Xb, yb = balance_classes(X, y, "oversample", replace=False, rng=np.random.default_rng(0))
    assert np.bincount(yb)[1:].tolist() == [7, 7]
    firsts = Xb[yb == 1, 0, 0]
    _, n_copies = np.unique(firsts, return_counts=True)
    assert sorted(n_copies.tolist()) == [2, 2, 3]


def test_labels_and_samples_stay_aligned():
    X, y = _data()
    X[:, 0, 0] = y  # tag
    Xb, yb = balance_classes(X, y, "oversample", rng=np.random.default_rng(1))
    np.testing.assert_array_equal(Xb[:, 0, 0], yb)


def test_balanced_class_counts():
    counts = np.array([5, 9, 7])
    assert balanced_class_counts(counts, "oversample").tolist() == [9, 9, 9]
    assert balanced_class_counts(counts, "undersample").tolist() == [5, 5, 5]
    assert balanced_class_counts(counts, "none").tolist() == [5, 9, 7]
    assert balanced_class_counts(counts, 12).tolist() == [12, 12, 12]


def test_empty_class_is_named():
    X = np.zeros((5, 2, 3))
    y = np.array([2, 2, 3, 3, 3])
    with pytest.raises(DataShapeError, match=r"\[1\]"):
        balance_classes(X, y, "oversample", rng=np.random.default_rng(0))
