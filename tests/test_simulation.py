import numpy as np
import pytest

from timegen.core.errors import ConfigurationError
from timegen.extras.simulation import simulate_gaussian_data, simulate_time_resolved_data


def test_equal_classes():
    data = simulate_gaussian_data(60, 5, nclasses=3, rng=0)
    assert data.X.shape == (60, 5)
    assert np.bincount(data.clabel)[1:].tolist() == [20, 20, 20]
    assert data.Y.shape == (60, 3)
    assert np.all(data.Y.sum(axis=1) == 1)
    np.testing.assert_array_equal(np.argmax(data.Y, axis=1) + 1, data.clabel)
    np.testing.assert_allclose(np.linalg.norm(data.M, axis=0), 1.0)


def test_class_proportions():
    data = simulate_gaussian_data(40, 3, nclasses=2, prop=[0.25, 0.75], rng=1)
    assert np.bincount(data.clabel)[1:].tolist() == [10, 30]


def test_reproducible_with_seed():
    a = simulate_gaussian_data(20, 4, rng=7)
    b = simulate_gaussian_data(20, 4, rng=7)
    np.testing.assert_array_equal(a.X, b.X)


def test_given_centroids_are_kept():
    M = np.array([[1.0, -1.0], [0.0, 0.0]])
    data = simulate_gaussian_data(10, 2, centroids=M, rng=0)
    np.testing.assert_array_equal(data.M, M)


@pytest.mark.parametrize(
    "args,kwargs",
    [
        ((20, 2), {"nclasses": 3}),
        ((21, 4), {"nclasses": 2}),
        ((20, 4), {"prop": [0.5, 0.4]}),
        ((20, 4), {"prop": [0.5, 0.25, 0.25]}),
        ((10, 4), {"prop": [0.33, 0.67]}),
        ((10, 4), {"prop": "random"}),
        ((10, 4), {"centroids": np.zeros((3, 2))}),
    ],
)
def test_invalid_arguments(args, kwargs):
    with pytest.raises(ConfigurationError):
        simulate_gaussian_data(*args, **kwargs)


def test_time_resolved_data_shape():
    data = simulate_time_resolved_data(30 * 2, 6, 12, peak=5, rng=0)
    assert data.X.shape == (60, 6, 12)
    assert np.bincount(data.clabel)[1:].tolist() == [30, 30]
    # the class difference is largest at the peak
    diff = data.X[data.clabel == 1].mean(axis=0) - data.X[data.clabel == 2].mean(axis=0)
    assert np.argmax(np.linalg.norm(diff, axis=0)) in (4, 5, 6)
