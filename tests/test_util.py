import numpy as np
import pytest

from pyextrema.util import bump_test_problem, check_grid, make_grid, monotone_test_problem



def test_make_grid_and_check_grid_agree():
    grid, step = make_grid(-2.0, 3.0, 51)

    assert grid.shape == (51,)
    assert np.isclose(step, 0.1)
    checked, checked_step = check_grid(grid)
    assert np.array_equal(checked, grid)
    assert np.isclose(checked_step, step)



def test_check_grid_rejects_bad_grids():
    with pytest.raises(ValueError):
        check_grid([0.0, 1.0])
    with pytest.raises(ValueError):
        check_grid([0.0, 0.2, 0.1, 0.3])
    with pytest.raises(ValueError):
        check_grid([0.0, 0.1, 0.3, 0.4])
    with pytest.raises(ValueError):
        check_grid(np.zeros((3, 3)))
    with pytest.raises(ValueError):
        make_grid(1.0, 0.0, 10)



def test_test_problems():
    x, y, ytrue = bump_test_problem(n=101, noise_std=0.0)
    assert np.allclose(y, ytrue)
    assert np.argmax(ytrue) == 50

    x, y, ytrue = monotone_test_problem(n=101, noise_std=0.1, rseed=3)
    assert np.all(np.diff(ytrue) > 0)
    assert not np.allclose(y, ytrue)



def test_check_grid_accepts_offset_grids():
    for lower in [1e6, 1e9, -1e9 - 1.0]:
        grid = np.linspace(lower, lower + 1.0, 101)
        checked, step = check_grid(grid)

        assert np.array_equal(checked, grid)
        assert np.isclose(step, 0.01, rtol=1e-6)

    # uneven spacing far from the origin is still rejected
    grid = np.linspace(1e9, 1e9 + 1.0, 101)
    grid[50] += 0.004
    with pytest.raises(ValueError):
        check_grid(grid)
