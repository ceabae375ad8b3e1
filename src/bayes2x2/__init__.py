"""
bayes2x2 - Bayesian Analysis of 2x2 Contingency Tables
======================================================

Posterior estimation for two-group binary-outcome comparisons (A/B tests,
clinical trials): Dirichlet-multinomial cell probabilities, independent
Beta-Binomial group proportions, and credible intervals for the proportion
difference, relative risk and odds ratio.

Modules:
--------
- core: Priors, estimators, derived quantities, intervals, classical tests
- reporting: Tidy records and tabular summaries
- data: Bundled example tables

Example Usage:
--------------
>>> from bayes2x2 import beta_binomial, summary
>>>
>>> fit = beta_binomial.fit([[5, 94], [18, 188]])
>>> print(summary.present(fit, interval_type='hpd', level=0.95, random_state=42))
>>>
>>> # Sequential updating
>>> new_fit = beta_binomial.update(fit, successes=[3, 7], trials=[60, 58])

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
__license__ = "MIT"

# Expose key modules at package level for convenience
from bayes2x2.core import (
    tables,
    intervals,
    multinomial,
    derived,
    beta_binomial,
    frequentist,
)
from bayes2x2.core.priors import PriorSpec
from bayes2x2.core.beta_binomial import BetaBinomialFit
from bayes2x2.config import AnalysisConfig, DEFAULT_CONFIG
from bayes2x2.exceptions import InvalidInput, InsufficientSamples, NumericDegenerateWarning
from bayes2x2.reporting import summary
from bayes2x2.data import datasets

__all__ = [
    "tables",
    "intervals",
    "multinomial",
    "derived",
    "beta_binomial",
    "frequentist",
    "summary",
    "datasets",
    "PriorSpec",
    "BetaBinomialFit",
    "AnalysisConfig",
    "DEFAULT_CONFIG",
    "InvalidInput",
    "InsufficientSamples",
    "NumericDegenerateWarning",
]
