import numpy as np
import pytest


def make_time_varying_data(
    n_per_class=(20, 20),
    n_features=4,
    n_times=5,
    peak=2,
    separation=4.0,
    seed=0,
):
    """Two classes whose separation peaks at ``peak``.

    Every time point separates the classes along a different axis, so a
    classifier trained at one time point transfers poorly to the others.
    """
    rng = np.random.default_rng(seed)
    times = np.arange(n_times)
    axes = np.eye(n_features)[times % n_features] * ((-1.0) ** (times // n_features))[:, None]
    profile = separation * np.exp(-((times - peak) ** 2) / 2.0)

    clabel = np.repeat([1, 2], n_per_class)
    sign = np.where(clabel == 1, 0.5, -0.5)
    X = rng.standard_normal((clabel.shape[0], n_features, n_times))
    X += sign[:, None, None] * axes.T[None, :, :] * profile[None, None, :]
    return X, clabel


def make_multiclass_data(n_per_class=15, n_classes=3, n_features=4, n_times=3, seed=1):
    rng = np.random.default_rng(seed)
    clabel = np.repeat(np.arange(1, n_classes + 1), n_per_class)
    means = 3.0 * np.eye(n_features)[:n_classes]
    X = rng.standard_normal((clabel.shape[0], n_features, n_times))
    X += means[clabel - 1][:, :, None]
    return X, clabel


@pytest.fixture
def timevarying():
    return make_time_varying_data()


@pytest.fixture
def unbalanced():
    return make_time_varying_data(n_per_class=(16, 24), seed=3)


@pytest.fixture
def multiclass():
    return make_multiclass_data()


class RecordingProgress:
    def __init__(self):
        self.total = None
        self.updates = []
        self.finalized = 0

    def init(self, *, total, label=None):
        self.total = total

    def update(self, *, current, label=None):
        self.updates.append(current)

    def finalize(self, *, label=None):
        self.finalized += 1


@pytest.fixture
def recording_progress():
    return RecordingProgress()
