"""Exceptions raised by the extremum detection pipeline."""


class DimensionMismatchError(ValueError):
    """Raised when arrays handed to a stage have incompatible shapes."""


class UnsupportedTestError(NotImplementedError):
    """Raised when the peak detector is asked for a test it does not implement."""


class UndefinedRowError(ValueError):
    """Raised when an undefined (NaN) row reaches a stage that needs a defined value."""
