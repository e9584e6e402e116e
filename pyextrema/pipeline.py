import logging

import numpy as np

from .derivatives import finite_difference
from .peaks import detect_candidates, extremum_regions
from .quantiles import DEFAULT_PROBS, pointwise_quantiles
from .sampling import evaluate_draws, sample_posterior
from .util import check_grid


log = logging.getLogger(__name__)

DEFAULT_N_SIMS = 1000



def find_extrema(model, grid, n_sims=DEFAULT_N_SIMS, probs=DEFAULT_PROBS, test="crossing", rng=None):
    """
    Flags candidate interior extrema of a fitted curve on an evenly spaced grid.

    Posterior draws of the curve are pushed through centered finite differences, each
    of the function, first and second derivative is reduced to pointwise quantile
    bands, and the outer bands of the derivatives feed the chosen detection test.

    Parameters
    ----------
    model : object
        Fitted curve exposing ``coef`` (posterior mean, length k), ``cov`` (k x k
        posterior covariance) and ``basis(grid)`` (n x k design matrix), e.g. a
        PSplineCurve.
    grid : array_like
        Strictly increasing, evenly spaced evaluation points. The finite-difference
        step is taken from the grid.
    n_sims : int
        Number of posterior draws.
    probs : sequence of float
        Increasing probabilities of the bands; the first and last give the bounds
        used by the detector.
    test : {"crossing", "two-deriv"}
    rng : seed, numpy Generator or None

    Returns
    -------
    data : dict
    """

    grid, step = check_grid(grid)
    probs = np.asarray(probs, dtype=float)
    if probs.ndim != 1 or probs.size < 2 or np.any(np.diff(probs) <= 0):
        raise ValueError("`probs` must be a strictly increasing sequence of at least two probabilities.")

    draws = sample_posterior(model.coef, model.cov, n_sims, rng=rng)
    sims = evaluate_draws(model.basis(grid), draws.T)
    d1_sims = finite_difference(sims, step, order=1)
    d2_sims = finite_difference(sims, step, order=2)
    log.debug("simulated %d curves on %d grid points (step=%.3e)", sims.shape[1], sims.shape[0], step)

    f_band = pointwise_quantiles(sims, probs)
    d1_band = pointwise_quantiles(d1_sims, probs)
    d2_band = pointwise_quantiles(d2_sims, probs)

    candidates = detect_candidates(d1_band[:, [0, -1]], d2_band[:, [0, -1]], test=test)
    regions = extremum_regions(candidates, grid, d2_band=d2_band)
    log.info("%s test: %d candidate points in %d regions", test, int(candidates.sum()), len(regions))

    data = {
        "grid": grid,
        "step": step,
        "sims": sims,
        "d1_sims": d1_sims,
        "d2_sims": d2_sims,
        "f_band": f_band,
        "d1_band": d1_band,
        "d2_band": d2_band,
        "candidates": candidates,
        "regions": regions,
        "test": test,
        "n_sims": int(n_sims),
    }

    return data
