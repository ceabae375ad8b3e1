"""Bayesian estimation core for 2x2 tables."""

from bayes2x2.core import (
    tables,
    priors,
    intervals,
    multinomial,
    derived,
    beta_binomial,
    frequentist,
)

__all__ = [
    "tables",
    "priors",
    "intervals",
    "multinomial",
    "derived",
    "beta_binomial",
    "frequentist",
]
