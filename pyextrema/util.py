import numpy as np





def make_grid(lower, upper, n):
    """Evenly spaced evaluation grid of n points on [lower, upper]. Returns (grid, step).
    """
    if n < 3:
        raise ValueError("An evaluation grid needs at least 3 points.")
    if not upper > lower:
        raise ValueError("upper must be greater than lower.")
    grid, step = np.linspace(lower, upper, num=int(n), retstep=True)
    return grid, float(step)



def check_grid(grid):
    """
    Validates an evaluation grid and returns (grid, step).

    The grid must be 1D with at least 3 points, strictly increasing, and evenly spaced
    (up to floating point tolerance); finite differences on it assume all three.
    """
    grid = np.asarray(grid, dtype=float)
    if grid.ndim != 1 or grid.size < 3:
        raise ValueError("grid must be a 1D array with at least 3 points.")
    spacing = np.diff(grid)
    if np.any(spacing <= 0):
        raise ValueError("grid must be strictly increasing.")
    step = float(np.mean(spacing))
    # positions far from the origin carry rounding proportional to their magnitude
    atol = 16.0 * np.finfo(float).eps * float(np.amax(np.abs(grid)))
    if not np.allclose(spacing, step, rtol=1e-6, atol=atol):
        raise ValueError("grid must be evenly spaced.")
    return grid, step





def bump_test_problem(n=200, noise_std=0.05, rseed=0):
    """Noisy samples of a Gaussian bump on [0, 1] with a single interior maximum at 0.5.
    Returns (x, y, ytrue).
    """
    rng = np.random.default_rng(rseed)
    x = np.linspace(0.0, 1.0, n)
    ytrue = np.exp(-((x - 0.5) / 0.15)**2)
    y = ytrue + noise_std * rng.standard_normal(n)
    return x, y, ytrue



def monotone_test_problem(n=200, noise_std=0.05, rseed=0):
    """Noisy samples of a strictly increasing curve on [0, 1] (no interior extremum).
    Returns (x, y, ytrue).
    """
    rng = np.random.default_rng(rseed)
    x = np.linspace(0.0, 1.0, n)
    ytrue = 2.0 * x + 0.1 * np.sin(2.0 * np.pi * x)
    y = ytrue + noise_std * rng.standard_normal(n)
    return x, y, ytrue
