"""Error and warning types raised by the estimation core."""


class InvalidInput(ValueError):
    """Malformed table, counts or prior hyperparameters."""


class InsufficientSamples(ValueError):
    """Too few posterior draws to compute an interval."""


class NumericDegenerateWarning(RuntimeWarning):
    """Derived-quantity draws were non-finite and excluded from the summary."""
