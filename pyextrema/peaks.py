import logging
from collections import namedtuple

import numpy as np

from .errors import DimensionMismatchError, UndefinedRowError, UnsupportedTestError


log = logging.getLogger(__name__)

TESTS = ("two-deriv", "crossing")

Run = namedtuple("Run", ["start", "stop", "code"])
Run.__doc__ = "Maximal stretch [start, stop) of grid points sharing one sign code."



def sign_code(bounds):
    """Tri-state summary of each interval in an (n, 2) array of (lower, upper) bounds.

    +1 if both bounds are positive, -1 if both are negative, 0 if the interval
    touches or straddles zero, NaN if either bound is undefined.
    """
    bounds = np.asarray(bounds, dtype=float)
    lower, upper = bounds[:, 0], bounds[:, 1]

    codes = np.zeros(bounds.shape[0])
    codes[(lower > 0) & (upper > 0)] = 1.0
    codes[(lower < 0) & (upper < 0)] = -1.0
    codes[np.isnan(lower) | np.isnan(upper)] = np.nan

    return codes



def fill_edge_codes(codes):
    """Replaces the first and last sign codes with those of their interior neighbours.

    Finite differences leave the two end rows of every derivative undefined, so
    their codes are copied from positions 1 and n-2. Returns a new array.
    """
    codes = np.array(codes, dtype=float)
    if codes.size < 3:
        raise UndefinedRowError(f"Need at least 3 grid points to fill edge codes, got {codes.size}.")

    codes[0] = codes[1]
    codes[-1] = codes[-2]

    return codes



def _check_defined(codes, what):
    bad = np.flatnonzero(np.isnan(codes))
    if bad.size > 0:
        raise UndefinedRowError(f"{what} undefined at indices {bad.tolist()}.")



def run_lengths(codes):
    """Segments a sign-code sequence into maximal runs of equal value, left to right.
    """
    codes = np.asarray(codes, dtype=float)
    _check_defined(codes, "Sign codes")
    if codes.size == 0:
        return []

    breaks = np.flatnonzero(np.diff(codes) != 0) + 1
    starts = np.r_[0, breaks]
    stops = np.r_[breaks, codes.size]

    return [ Run(int(s), int(e), int(codes[s])) for s, e in zip(starts, stops) ]



def two_derivative_test(d1_bounds, d2_bounds):
    """Pointwise test: the first-derivative interval contains zero while the
    second-derivative interval does not.
    """
    s1 = fill_edge_codes(sign_code(d1_bounds))
    s2 = fill_edge_codes(sign_code(d2_bounds))
    _check_defined(s1, "First-derivative sign codes")
    _check_defined(s2, "Second-derivative sign codes")

    return (s1 == 0) & (s2 != 0)



def crossing_step(state, runs, index):
    """
    One transition of the state machine that judges the zero-run ``runs[index]``.

        "boundary"  -> "skip" if the run touches either end of the grid, else "neighbors"
        "neighbors" -> "mark" if the runs on either side have opposite signs, else "skip"

    "mark" and "skip" are terminal and map to themselves.
    """
    if state == "boundary":
        if index == 0 or index == len(runs) - 1:
            return "skip"
        return "neighbors"
    elif state == "neighbors":
        if runs[index - 1].code * runs[index + 1].code == -1:
            return "mark"
        return "skip"
    elif state in ("mark", "skip"):
        return state
    else:
        raise ValueError(f"Unknown crossing state '{state}'.")



def crossing_test(d1_bounds):
    """
    Run-based test: a stretch where the first-derivative interval contains zero is
    a candidate only if the derivative is significantly positive on one side and
    significantly negative on the other. Zero-runs at either end of the grid are
    never candidates.
    """
    s1 = fill_edge_codes(sign_code(d1_bounds))
    runs = run_lengths(s1)

    mask = np.zeros(s1.size, dtype=bool)
    for index, run in enumerate(runs):
        if run.code != 0:
            continue

        state = "boundary"
        while state not in ("mark", "skip"):
            state = crossing_step(state, runs, index)

        if state == "mark":
            mask[run.start:run.stop] = True

    return mask



def _check_bounds(bounds, name):
    bounds = np.asarray(bounds, dtype=float)
    if bounds.ndim != 2 or bounds.shape[1] != 2:
        raise DimensionMismatchError(f"{name} must be an (n, 2) array of lower/upper bounds, got shape {bounds.shape}.")
    return bounds



def detect_candidates(d1_bounds, d2_bounds, test="crossing"):
    """
    Classifies each grid point as part of a candidate extremum region.

    Parameters
    ----------
    d1_bounds, d2_bounds : array_like, shape (n, 2)
        Lower and upper confidence bounds of the first and second derivative.
    test : {"two-deriv", "crossing"}
        "two-deriv" flags points whose first-derivative interval contains zero while
        the second-derivative interval excludes it. "crossing" flags zero-runs of the
        first derivative that are bracketed by a sign reversal.

    Returns
    -------
    mask : ndarray of bool, shape (n,)
    """
    if test not in TESTS:
        raise UnsupportedTestError(f"'{test}' is not an implemented test; choose one of {TESTS}.")

    d1_bounds = _check_bounds(d1_bounds, "d1_bounds")
    d2_bounds = _check_bounds(d2_bounds, "d2_bounds")
    if d1_bounds.shape[0] != d2_bounds.shape[0]:
        raise DimensionMismatchError(f"Bands disagree on the number of points: {d1_bounds.shape} vs {d2_bounds.shape}.")

    if test == "two-deriv":
        mask = two_derivative_test(d1_bounds, d2_bounds)
    else:
        mask = crossing_test(d1_bounds)

    log.debug("%s test flagged %d of %d points", test, int(mask.sum()), mask.size)

    return mask



def extremum_regions(mask, grid, d2_band=None):
    """Collects contiguous candidate stretches into region dicts.

    If the second-derivative band is given, each region is labelled "max" when the
    centre of its outer bounds is negative on average and "min" when positive.
    """
    mask = np.asarray(mask, dtype=bool)
    grid = np.asarray(grid, dtype=float)
    if mask.shape != grid.shape:
        raise DimensionMismatchError(f"Mask shape {mask.shape} does not match grid shape {grid.shape}.")
    if d2_band is not None:
        d2_band = np.asarray(d2_band, dtype=float)
        if d2_band.ndim != 2 or d2_band.shape[0] != grid.size:
            raise DimensionMismatchError(f"Second-derivative band of shape {d2_band.shape} does not match grid shape {grid.shape}.")

    regions = []
    for run in run_lengths(mask.astype(float)):
        if run.code != 1:
            continue

        kind = "unknown"
        if d2_band is not None:
            centre = 0.5 * (d2_band[run.start:run.stop, 0] + d2_band[run.start:run.stop, -1])
            if not np.all(np.isnan(centre)):
                curvature = np.nanmean(centre)
                if curvature < 0:
                    kind = "max"
                elif curvature > 0:
                    kind = "min"

        regions.append({
            "start": float(grid[run.start]),
            "stop": float(grid[run.stop - 1]),
            "indices": (run.start, run.stop),
            "kind": kind,
        })

    return regions
