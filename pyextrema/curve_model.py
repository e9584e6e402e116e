import logging

import numpy as np
from scipy.interpolate import BSpline
from scipy.linalg import cho_factor, cho_solve
from scipy.optimize import fminbound

from easygsvd import gsvd as gsvd_func

from .errors import DimensionMismatchError
from .matrices import difference_operator


log = logging.getLogger(__name__)



class PSplineCurve:
    r"""Penalized B-spline (P-spline) fit of noisy samples y_i = f(x_i) + e_i.

    The coefficients solve

        c_\lambda = \arg\min_c \| B c - y \|_2^2 + \lambda \| L c \|_2^2,

    where B is the B-spline design matrix at the data and L the order-``penalty_order``
    difference operator on the coefficients. Everything λ-dependent is evaluated through
    the GSVD of (B, L). If ``regparam`` is None, λ minimizes the GCV functional.

    The Gaussian posterior of the coefficients has mean ``coef`` = c_λ and covariance
    ``cov`` = σ² (BᵀB + λ LᵀL)⁻¹, with σ² estimated from the residual at λ.
    """

    def __init__(self, x, y, n_basis=20, degree=3, penalty_order=2, regparam=None):

        x = np.asarray(x, dtype=float)
        y = np.asarray(y, dtype=float)
        if x.ndim != 1 or y.ndim != 1 or x.size != y.size:
            raise DimensionMismatchError(f"x and y must be 1D arrays of equal length, got shapes {x.shape} and {y.shape}.")
        if n_basis <= degree:
            raise ValueError("`n_basis` must exceed `degree`.")
        if penalty_order not in (1, 2, 3):
            raise ValueError("`penalty_order` must be 1, 2 or 3.")
        if (regparam is not None) and not regparam > 0:
            raise ValueError("`regparam` must be positive.")

        # Bind
        self.x = x
        self.y = y
        self.n_basis = n_basis
        self.degree = degree
        self.penalty_order = penalty_order

        # Clamped knot vector with equally spaced interior knots
        self.lower = float(np.amin(x))
        self.upper = float(np.amax(x))
        if not self.upper > self.lower:
            raise ValueError("x must span a non-degenerate interval.")
        inner = np.linspace(self.lower, self.upper, n_basis - degree + 1)
        self.knots = np.r_[ np.full(degree, self.lower), inner, np.full(degree, self.upper) ]

        self.A = self.basis(x)
        L = difference_operator(n_basis, order=penalty_order)
        self.L = L.toarray()
        self.M, self.N = self.A.shape

        # GSVD quantities
        self.gsvd = gsvd_func(self.A, self.L)
        self.Uhat = self.gsvd.Uhat
        self.U1 = self.gsvd.U1
        self.U2 = self.gsvd.U2
        self.X1 = self.gsvd.X1
        self.X2 = self.gsvd.X2
        self.s_check = self.gsvd.s_check
        self.gamma_check = self.gsvd.gamma_check
        self.n_L = self.gsvd.n_L
        self.n_A = self.gsvd.n_A
        self.r_A = self.gsvd.r_A
        self.r_cap = self.N - self.n_A - self.n_L

        # Other things we can compute once and save for later
        self.X1U1tb = self.X1 @ (self.U1.T @ self.y)
        self.U2tb = self.U2.T @ self.y
        self.b_hat_perp_norm_squared = np.linalg.norm(self.y - (self.Uhat @ (self.Uhat.T @ self.y)))**2

        # Smoothing parameter
        if regparam is None:
            regparam = self.gcvmin()
        self.regparam = float(regparam)

        # Posterior
        self.coef = self.solve(self.regparam)
        self.noise_var = float(self.V(self.regparam))
        self.edf = float(self.M - self.T(self.regparam))
        self.cov = self.posterior_cov(self.regparam)

        log.debug("fitted P-spline: lambda=%.3e, edf=%.2f, noise_var=%.3e", self.regparam, self.edf, self.noise_var)



    def basis(self, grid):
        """Dense B-spline design matrix at the points of ``grid``, one row per point.
        """
        grid = np.atleast_1d(np.asarray(grid, dtype=float))
        if grid.ndim != 1:
            raise DimensionMismatchError(f"Evaluation grid must be 1D, got shape {grid.shape}.")
        return BSpline.design_matrix(grid, self.knots, self.degree, extrapolate=True).toarray()



    def predict(self, grid):
        """Posterior mean curve on ``grid``.
        """
        return self.basis(grid) @ self.coef



    def solve(self, regparam):
        """
        Evaluate the coefficients c_λ via the GSVD expression.
        """
        lam = float(regparam)
        denom = self.gamma_check**2 + lam
        return self.X1U1tb + self.X2 @ ((self.gamma_check / (self.s_check * denom)) * self.U2tb)



    def data_fidelity(self, regparam):
        """
        Evaluate ||B c_λ - y||_2^2 via the GSVD expression.
        """
        lam = float(regparam)
        denom = self.gamma_check**2 + lam
        return self.b_hat_perp_norm_squared + np.sum(((lam / denom)**2) * (self.U2tb**2))



    def T(self, regparam):
        """
        Residual degrees of freedom:
            T(λ) = tr(I_M - B (B^T B + λ L^T L)^(-1) B^T)
        """
        lam = float(regparam)
        gamma2 = self.gamma_check**2
        return float(self.M - self.r_A + self.r_cap - np.sum(gamma2 / (gamma2 + lam)))



    def V(self, regparam):
        """
        Residual variance estimate ν(λ) = ||B c_λ − y||_2^2 / T(λ).
        """
        return self.data_fidelity(regparam) / self.T(regparam)



    def gcv(self, regparam):
        """
        Computes the GCV functional.
        """
        return self.V(regparam) / self.T(regparam)



    def gcvmin(self):
        """Minimizes the GCV functional over log10(λ).
        """
        gamma_pos = self.gamma_check[self.gamma_check > 0]
        gamma_sq_min = np.amin(gamma_pos)**2
        gamma_sq_max = np.amax(gamma_pos)**2
        gcv_obj_func = lambda x: np.log10(self.gcv( np.power(10.0, x) ))
        fmin_res = fminbound(gcv_obj_func, np.log10(gamma_sq_min)-2, np.log10(gamma_sq_max)+2, xtol=1e-10, maxfun=int(1e5))
        return float(np.power(10.0, fmin_res))



    def posterior_cov(self, regparam):
        """σ² (BᵀB + λ LᵀL)⁻¹ with σ² the residual variance estimate at λ.
        """
        lam = float(regparam)
        precision = (self.A.T @ self.A) + lam * (self.L.T @ self.L)
        factor = cho_factor(precision)
        cov = self.V(lam) * cho_solve(factor, np.eye(self.N))
        return 0.5 * (cov + cov.T)
