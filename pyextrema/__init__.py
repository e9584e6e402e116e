import logging

from .errors import DimensionMismatchError, UndefinedRowError, UnsupportedTestError
from .curve_model import PSplineCurve
from .sampling import sample_posterior, evaluate_draws
from .derivatives import finite_difference
from .quantiles import pointwise_quantiles, DEFAULT_PROBS
from .peaks import detect_candidates, extremum_regions, TESTS
from .pipeline import find_extrema, DEFAULT_N_SIMS

logging.getLogger(__name__).addHandler(logging.NullHandler())
