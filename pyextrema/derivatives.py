import numpy as np



def finite_difference(values, step, order=1):
    """
    Centered finite-difference derivative of every column of ``values``.

    Interior rows i = 1, ..., n-2 are

        order 1:  (v[i+1] - v[i-1]) / (2 step)
        order 2:  (v[i+1] + v[i-1] - 2 v[i]) / step^2

    The first and last rows have no symmetric neighbours and are returned as NaN.

    Parameters
    ----------
    values : array_like, shape (n,) or (n, S)
        Function values on an evenly spaced grid, one column per draw.
    step : float
        Grid spacing. Must equal the spacing of the grid the values live on;
        this is not checked here, a wrong step silently rescales the result.
    order : {1, 2}
        Derivative order.

    Returns
    -------
    deriv : ndarray, same shape as ``values``
    """
    if order not in (1, 2):
        raise ValueError("`order` must be 1 or 2.")
    if not step > 0:
        raise ValueError("`step` must be positive.")

    values = np.asarray(values, dtype=float)
    deriv = np.full(values.shape, np.nan)
    if values.shape[0] < 3:
        return deriv

    upper = values[2:]
    lower = values[:-2]
    if order == 1:
        deriv[1:-1] = (upper - lower) / (2.0 * step)
    else:
        deriv[1:-1] = (upper + lower - 2.0 * values[1:-1]) / (step**2)

    return deriv
