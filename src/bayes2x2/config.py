"""
Analysis Defaults
=================

Documented defaults shared by the samplers, interval estimators and the
presentation layer. Functions take their keyword defaults from
``DEFAULT_CONFIG``; pass an ``AnalysisConfig`` to the reporting helpers to
override several at once.

Example Usage:
--------------
>>> from bayes2x2.config import AnalysisConfig
>>> config = AnalysisConfig(n_samples=50000, interval_type='quantile', random_state=7)
"""

from dataclasses import dataclass
from typing import Optional

from bayes2x2.exceptions import InvalidInput

INTERVAL_TYPES = ('quantile', 'hpd')


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Container for analysis defaults.

    Attributes
    ----------
    n_samples : int, default=10000
        Posterior draws per group for derived quantities
    level : float, default=0.95
        Credible level of reported intervals
    interval_type : str, default='hpd'
        'hpd' (shortest interval) or 'quantile' (equal-tailed)
    random_state : int, optional
        Seed for posterior sampling
    prior_mass : float, default=1.0
        Total Dirichlet mass of the default marginal-product prior
    """
    n_samples: int = 10000
    level: float = 0.95
    interval_type: str = 'hpd'
    random_state: Optional[int] = None
    prior_mass: float = 1.0

    def __post_init__(self):
        if self.n_samples < 2:
            raise InvalidInput("n_samples must be at least 2")
        if not 0 < self.level < 1:
            raise InvalidInput("level must be between 0 and 1")
        if self.interval_type not in INTERVAL_TYPES:
            raise InvalidInput(
                f"interval_type must be one of {list(INTERVAL_TYPES)}, got '{self.interval_type}'"
            )
        if self.prior_mass <= 0:
            raise InvalidInput("prior_mass must be positive")


DEFAULT_CONFIG = AnalysisConfig()
