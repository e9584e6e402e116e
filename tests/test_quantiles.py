import numpy as np
import pytest

from pyextrema import DimensionMismatchError, pointwise_quantiles



def test_identical_draws_collapse_the_band():
    values = np.repeat(np.linspace(-2.0, 3.0, 9)[:, None], 50, axis=1)
    band = pointwise_quantiles(values)

    assert band.shape == (9, 3)
    assert np.allclose(band[:, 0], band[:, 1])
    assert np.allclose(band[:, 1], band[:, 2])
    assert np.allclose(band[:, 1], values[:, 0])



def test_matches_linear_percentile_and_is_ordered():
    rng = np.random.default_rng(11)
    values = rng.standard_normal((20, 200))
    probs = (0.025, 0.5, 0.975)
    band = pointwise_quantiles(values, probs)

    assert np.allclose(band, np.quantile(values, probs, axis=1).T)
    assert np.all(band[:, 0] <= band[:, 1])
    assert np.all(band[:, 1] <= band[:, 2])



def test_undefined_entries_are_ignored():
    values = np.array([
        [np.nan, np.nan, np.nan, np.nan],
        [1.0, 2.0, np.nan, 3.0],
        [0.0, 4.0, 8.0, 12.0],
    ])
    band = pointwise_quantiles(values, probs=[0.0, 0.5, 1.0])

    assert np.all(np.isnan(band[0]))
    assert np.allclose(band[1], [1.0, 2.0, 3.0])
    assert np.allclose(band[2], [0.0, 6.0, 12.0])



def test_draw_order_does_not_matter():
    rng = np.random.default_rng(3)
    values = rng.standard_normal((6, 40))
    shuffled = values[:, rng.permutation(40)]

    assert np.allclose(pointwise_quantiles(values), pointwise_quantiles(shuffled))



def test_invalid_arguments():
    with pytest.raises(ValueError):
        pointwise_quantiles(np.ones((3, 4)), probs=[0.5, 1.5])
    with pytest.raises(DimensionMismatchError):
        pointwise_quantiles(np.ones((3, 4, 2)))
