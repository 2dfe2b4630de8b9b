from __future__ import annotations

"""Synthetic multivariate Gaussian data for examples and tests.

Class centroids are placed randomly on the unit hypersphere in feature space;
the shared covariance matrix is drawn from a Wishart distribution and its
diagonal rescaled to ``scale``. Larger ``scale`` means more overlap between
the classes.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np
from scipy import stats

from timegen.core.errors import ConfigurationError


@dataclass(frozen=True)
class SimulatedData:
    X: np.ndarray       # (nsamples, nfeatures)
    clabel: np.ndarray  # (nsamples,) labels 1..nclasses
    Y: np.ndarray       # (nsamples, nclasses) indicator matrix
    M: np.ndarray       # (nfeatures, nclasses) true centroids


def _class_sizes(nsamples: int, nclasses: int, prop: Union[str, Sequence[float]]) -> np.ndarray:
    if isinstance(prop, str):
        if prop != "equal":
            raise ConfigurationError(f"prop must be 'equal' or a sequence of proportions; got {prop!r}")
        if nsamples % nclasses != 0:
            raise ConfigurationError(
                "Class proportion is set to 'equal' but the number of samples "
                f"({nsamples}) cannot be divided by the number of classes ({nclasses})."
            )
        return np.full(nclasses, nsamples // nclasses, dtype=int)

    prop_arr = np.asarray(prop, dtype=float).ravel()
    if prop_arr.shape[0] != nclasses:
        raise ConfigurationError(
            f"prop has {prop_arr.shape[0]} entries but nclasses is {nclasses}."
        )
    if not np.isclose(prop_arr.sum(), 1.0):
        raise ConfigurationError(f"prop must sum to 1; got {prop_arr.sum():g}.")

    sizes = nsamples * prop_arr
    rounded = np.round(sizes)
    if not np.allclose(sizes, rounded):
        raise ConfigurationError("prop * nsamples must yield integer class sizes.")
    return rounded.astype(int)


def simulate_gaussian_data(
    nsamples: int,
    nfeatures: int,
    nclasses: int = 2,
    prop: Union[str, Sequence[float]] = "equal",
    scale: Union[float, Sequence[float]] = 2.0,
    centroids: Optional[np.ndarray] = None,
    rng: Union[int, np.random.Generator, None] = None,
) -> SimulatedData:
    """Draw ``nsamples`` samples of ``nclasses`` Gaussian classes.

    ``scale`` may be a scalar or one variance per feature. ``centroids``
    (nfeatures, nclasses) fixes the class means instead of drawing them.
    Samples are ordered by class.
    """

    if nclasses > nfeatures:
        raise ConfigurationError(
            f"nclasses ({nclasses}) must not exceed nfeatures ({nfeatures})."
        )
    sizes = _class_sizes(int(nsamples), int(nclasses), prop)
    gen = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)

    if centroids is None:
        M = gen.random((nfeatures, nclasses))
        M = M / np.linalg.norm(M, axis=0, keepdims=True)
    else:
        M = np.asarray(centroids, dtype=float)
        if M.shape != (nfeatures, nclasses):
            raise ConfigurationError(
                f"centroids must have shape ({nfeatures}, {nclasses}); got {M.shape}."
            )

    sigma = stats.wishart(df=2 * nfeatures, scale=np.eye(nfeatures)).rvs(random_state=gen)
    sigma = np.atleast_2d(sigma)
    d = np.sqrt(np.broadcast_to(np.asarray(scale, dtype=float), (nfeatures,))) / np.sqrt(np.diag(sigma))
    sigma = d[:, None] * sigma * d[None, :]

    X = np.empty((int(sizes.sum()), nfeatures), dtype=float)
    clabel = np.empty(int(sizes.sum()), dtype=int)
    Y = np.zeros((int(sizes.sum()), nclasses), dtype=int)

    start = 0
    for cc, size in enumerate(sizes):
        stop = start + int(size)
        X[start:stop] = gen.multivariate_normal(M[:, cc], sigma, size=int(size))
        clabel[start:stop] = cc + 1
        Y[start:stop, cc] = 1
        start = stop

    return SimulatedData(X=X, clabel=clabel, Y=Y, M=M)


def simulate_time_resolved_data(
    nsamples: int,
    nfeatures: int,
    ntimes: int,
    *,
    peak: int,
    width: float = 1.0,
    separation: float = 2.0,
    rng: Union[int, np.random.Generator, None] = None,
) -> SimulatedData:
    """Two equally sized classes whose separation peaks at time point ``peak``.

    Class means differ by ``separation * exp(-(t - peak)^2 / (2 width^2))``
    along a random unit direction; noise is independent standard normal.
    X has shape (nsamples, nfeatures, ntimes).
    """

    sizes = _class_sizes(int(nsamples), 2, "equal")
    gen = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)

    direction = gen.standard_normal(nfeatures)
    direction /= np.linalg.norm(direction)
    profile = separation * np.exp(-((np.arange(ntimes) - peak) ** 2) / (2.0 * width**2))

    clabel = np.repeat([1, 2], sizes)
    sign = np.where(clabel == 1, 0.5, -0.5)
    X = gen.standard_normal((clabel.shape[0], nfeatures, ntimes))
    X += sign[:, None, None] * direction[None, :, None] * profile[None, None, :]

    Y = np.zeros((clabel.shape[0], 2), dtype=int)
    Y[np.arange(clabel.shape[0]), clabel - 1] = 1
    M = np.stack([0.5 * direction, -0.5 * direction], axis=1) * separation
    return SimulatedData(X=X, clabel=clabel, Y=Y, M=M)
