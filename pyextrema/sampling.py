import logging

import numpy as np

from .errors import DimensionMismatchError


log = logging.getLogger(__name__)



def sample_posterior(mean, cov, n_sims, rng=None):
    """Draws n_sims coefficient vectors from N(mean, cov).

    ``rng`` is a seed, a numpy Generator, or None; pass a fixed seed or generator
    for reproducible draws. Returns an (n_sims, k) array.
    """

    mean = np.asarray(mean, dtype=float)
    cov = np.asarray(cov, dtype=float)
    if mean.ndim != 1:
        raise DimensionMismatchError(f"Posterior mean must be 1D, got shape {mean.shape}.")
    if cov.ndim != 2 or cov.shape[0] != cov.shape[1]:
        raise DimensionMismatchError(f"Posterior covariance must be square, got shape {cov.shape}.")
    if cov.shape[0] != mean.size:
        raise DimensionMismatchError(f"Covariance of shape {cov.shape} is incompatible with mean of length {mean.size}.")
    if int(n_sims) != n_sims or n_sims < 1:
        raise ValueError("`n_sims` must be a positive integer.")

    rng = np.random.default_rng(rng)
    draws = rng.multivariate_normal(mean, cov, size=int(n_sims))
    log.debug("drew %d posterior samples of dimension %d", draws.shape[0], draws.shape[1])

    return draws



def evaluate_draws(design, samples):
    """Evaluates sampled curves on a grid: (n, k) design times (k, S) samples.
    """

    design = np.asarray(design, dtype=float)
    samples = np.asarray(samples, dtype=float)
    if design.ndim != 2 or samples.ndim != 2 or design.shape[1] != samples.shape[0]:
        raise DimensionMismatchError(f"Design matrix of shape {design.shape} cannot multiply samples of shape {samples.shape}.")

    return design @ samples
