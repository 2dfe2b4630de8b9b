import numpy as np
import pytest

from timegen.core.errors import ConfigurationError
from timegen.factories.normalise_factory import make_normaliser


def test_zscore_per_feature_and_time():
    rng = np.random.default_rng(0)
    X = rng.normal(loc=3.0, scale=5.0, size=(30, 4, 6))
    Z = make_normaliser("zscore").normalise(X)
    np.testing.assert_allclose(Z.mean(axis=0), 0.0, atol=1e-12)
    np.testing.assert_allclose(Z.std(axis=0, ddof=1), 1.0)


def test_zscore_constant_column_stays_zero():
    X = np.ones((5, 2, 3))
    X[:, 1, :] = np.arange(5)[:, None]
    Z = make_normaliser("zscore").normalise(X)
    assert np.all(Z[:, 0, :] == 0.0)
    assert np.all(np.isfinite(Z))


def test_demean():
    X = np.arange(24, dtype=float).reshape(4, 2, 3)
    D = make_normaliser("demean").normalise(X)
    np.testing.assert_allclose(D.mean(axis=0), 0.0)
    np.testing.assert_allclose(D.std(axis=0), X.std(axis=0))


def test_none_returns_a_copy():
    X = np.random.default_rng(1).normal(size=(3, 2, 2))
    out = make_normaliser("none").normalise(X)
    np.testing.assert_array_equal(out, X)
    assert out is not X


def test_zscore_needs_two_samples():
    with pytest.raises(ConfigurationError):
        make_normaliser("zscore").normalise(np.ones((1, 2, 2)))
