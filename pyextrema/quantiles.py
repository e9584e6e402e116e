import numpy as np

from .errors import DimensionMismatchError


DEFAULT_PROBS = (0.025, 0.5, 0.975)



def pointwise_quantiles(values, probs=DEFAULT_PROBS):
    """Row-wise empirical quantiles of a matrix of simulated draws.

    NaN entries are ignored; a row with no finite entry gives a NaN band row.
    Quantiles use linear interpolation between order statistics. Rows are
    summarized independently, so the band is pointwise, not simultaneous.

    Returns an (n, len(probs)) array.
    """
    probs = np.atleast_1d(np.asarray(probs, dtype=float))
    if probs.ndim != 1 or probs.size == 0:
        raise ValueError("`probs` must be a non-empty 1D sequence.")
    if np.any((probs < 0.0) | (probs > 1.0)):
        raise ValueError("`probs` must lie in [0, 1].")

    values = np.asarray(values, dtype=float)
    if values.ndim == 1:
        values = values[:, None]
    if values.ndim != 2:
        raise DimensionMismatchError(f"Expected an (n, S) matrix of draws, got shape {values.shape}.")

    band = np.full((values.shape[0], probs.size), np.nan)
    defined = ~np.all(np.isnan(values), axis=1)
    if np.any(defined):
        band[defined] = np.nanquantile(values[defined], probs, axis=1, method="linear").T

    return band
