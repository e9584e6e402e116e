import matplotlib
matplotlib.use("Agg")
import numpy as np

from pyextrema import find_extrema
from pyextrema.plotting import plot_extrema
from pyextrema.util import make_grid



class QuadraticCurve:

    def __init__(self):
        self.coef = np.array([0.0, 1.0, -1.0])
        self.cov = 1e-6 * np.eye(3)

    def basis(self, grid):
        return np.column_stack([np.ones_like(grid), grid, grid**2])



def test_plot_extrema_writes_file(tmp_path):
    grid, _ = make_grid(0.0, 1.0, 51)
    data = find_extrema(QuadraticCurve(), grid, n_sims=50, rng=0)

    plot_path = tmp_path / "extrema.png"
    plot_extrema(data, x=grid, y=0.25 - (grid - 0.5)**2, plot_path=plot_path)

    assert plot_path.exists()
    assert plot_path.stat().st_size > 0
