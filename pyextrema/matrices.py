import numpy as np

import scipy.sparse as sps



def difference_operator(N, order=2, nullspace=False):
    """Constructs a sparse matrix that takes the order-th forward difference of a length-N
    coefficient vector (no boundary rows). If nullspace is True, also returns a dense matrix W
    whose orthonormal columns span the nullspace of the operator.
    """

    assert order in [1, 2, 3], "Invalid difference order."
    if N <= order:
        raise ValueError(f"Need more than {order} coefficients for an order-{order} difference, got {N}.")

    # Binomial stencil with alternating signs, e.g. [1, -2, 1] for order 2
    stencil = np.array([1.0])
    for _ in range(order):
        stencil = np.convolve(stencil, [1.0, -1.0])

    d_mat = sps.diags(list(stencil), offsets=list(range(order + 1)), shape=(N - order, N), format="csr")
    if not nullspace:
        return d_mat

    # Polynomials of degree < order are annihilated
    t = np.arange(N, dtype=float)
    W = np.vstack([ t**j for j in range(order) ]).T
    W, _ = np.linalg.qr(W)

    return d_mat, W
