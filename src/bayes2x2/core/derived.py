"""
Derived Effect Measures
=======================

Monte Carlo posteriors of the proportion difference, relative risk and odds
ratio from two independent Beta posteriors.

Draws p1 ~ Beta(a1, b1) and p2 ~ Beta(a2, b2) and transforms each pair:

- difference:     p1 - p2
- relative_risk:  p1 / p2
- odds_ratio:     (p1 / (1 - p1)) / (p2 / (1 - p2))

A Beta draw can land exactly on 0 or 1 at floating-point resolution (small
shape parameters make this common). Ratios of such draws are infinite or NaN.
Those draws are dropped from the affected quantity only, counted in
``n_excluded`` and reported with a ``NumericDegenerateWarning``.

Example Usage:
--------------
>>> from bayes2x2.core import beta_binomial, derived
>>>
>>> fit = beta_binomial.fit([[5, 94], [18, 188]])
>>> dq = derived.derive(fit, n_samples=10000, random_state=42)
>>> dq.means['relative_risk']
>>> dq.interval('odds_ratio', level=0.95, method='hpd')
>>> print(f"P(p1 > p2) = {dq.prob_greater():.2%}")
"""

import warnings
from dataclasses import dataclass, field
from typing import Dict, Union

import numpy as np
from scipy import stats

from bayes2x2.config import DEFAULT_CONFIG
from bayes2x2.exceptions import InvalidInput, NumericDegenerateWarning
from bayes2x2.core import intervals
from bayes2x2.core.intervals import IntervalResult

QUANTITIES = ('difference', 'relative_risk', 'odds_ratio')


@dataclass(frozen=True, eq=False)
class DerivedQuantities:
    """
    Posterior draws of both group proportions and the derived measures.

    ``p1``, ``p2`` and ``difference`` always hold ``n_samples`` paired
    draws. ``relative_risk`` and ``odds_ratio`` hold only their finite draws.
    """
    p1: np.ndarray
    p2: np.ndarray
    difference: np.ndarray
    relative_risk: np.ndarray
    odds_ratio: np.ndarray
    n_samples: int
    n_excluded: Dict[str, int] = field(default_factory=dict)

    def draws(self, name: str) -> np.ndarray:
        if name not in ('p1', 'p2') + QUANTITIES:
            raise InvalidInput(f"Unknown quantity '{name}'")
        return getattr(self, name)

    @property
    def means(self) -> Dict[str, float]:
        """Posterior mean of each quantity (NaN when no finite draws remain)."""
        out = {}
        for name in ('p1', 'p2') + QUANTITIES:
            values = self.draws(name)
            out[name] = float(values.mean()) if values.size else float('nan')
        return out

    def prob_greater(self) -> float:
        """P(p1 > p2) estimated from the paired draws."""
        return float((self.p1 > self.p2).mean())

    def interval(self, name: str, level: float = DEFAULT_CONFIG.level, method: str = DEFAULT_CONFIG.interval_type) -> IntervalResult:
        """Credible interval of one quantity from its finite draws."""
        return intervals.credible_interval(self.draws(name), level=level, method=method)


def posterior_parameters(source) -> np.ndarray:
    """
    Posterior Beta parameters as a (2, 2) array, row i = (alpha_i, beta_i).

    Parameters
    ----------
    source : BetaBinomialFit or array-like
        A fitted model (anything with a ``posterior`` attribute) or two
        (alpha, beta) pairs
    """
    params = getattr(source, 'posterior', source)
    try:
        arr = np.asarray(params, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"Beta parameters must be numeric: {exc}") from exc
    if arr.shape != (2, 2):
        raise InvalidInput(f"Expected two (alpha, beta) pairs, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)) or np.any(arr <= 0):
        raise InvalidInput("Beta parameters must be positive and finite")
    return arr


def derive(
    source,
    n_samples: int = DEFAULT_CONFIG.n_samples,
    random_state: Union[int, np.random.Generator, None] = DEFAULT_CONFIG.random_state,
) -> DerivedQuantities:
    """
    Sample both group posteriors and compute the derived measures.

    Parameters
    ----------
    source : BetaBinomialFit or array-like
        Fitted model or two (alpha, beta) pairs
    n_samples : int, default=10000
        Number of draws per group
    random_state : int or np.random.Generator, optional
        Seed for reproducibility. The same seed, parameters and
        ``n_samples`` reproduce identical draws

    Returns
    -------
    DerivedQuantities
        Draws, posterior means and excluded-draw counts

    Warns
    -----
    NumericDegenerateWarning
        If any ratio draw was non-finite and dropped

    Example
    -------
    >>> dq = derive([[6, 95], [19, 189]], n_samples=20000, random_state=1)
    >>> dq.interval('difference').contains(0.0)
    """
    if int(n_samples) != n_samples or n_samples < 1:
        raise InvalidInput("n_samples must be a positive integer")
    params = posterior_parameters(source)

    rng = np.random.default_rng(random_state)
    p1 = rng.beta(params[0, 0], params[0, 1], int(n_samples))
    p2 = rng.beta(params[1, 0], params[1, 1], int(n_samples))

    difference = p1 - p2
    # Boundary draws give inf/nan here; they are filtered below
    with np.errstate(divide='ignore', invalid='ignore'):
        relative_risk = p1 / p2
        odds_ratio = (p1 / (1 - p1)) / (p2 / (1 - p2))

    n_excluded = {'difference': 0}
    kept = {}
    for name, values in (('relative_risk', relative_risk), ('odds_ratio', odds_ratio)):
        finite = np.isfinite(values)
        n_excluded[name] = int((~finite).sum())
        kept[name] = values[finite]

    dropped = {name: count for name, count in n_excluded.items() if count}
    if dropped:
        warnings.warn(
            f"Excluded non-finite draws at the 0/1 boundary from {dropped} "
            f"(out of {int(n_samples)} draws)",
            NumericDegenerateWarning,
            stacklevel=2,
        )

    return DerivedQuantities(
        p1=p1,
        p2=p2,
        difference=difference,
        relative_risk=kept['relative_risk'],
        odds_ratio=kept['odds_ratio'],
        n_samples=int(n_samples),
        n_excluded=n_excluded,
    )


def analytic_difference(source, level: float = DEFAULT_CONFIG.level) -> IntervalResult:
    """
    Closed-form posterior of p1 - p2 with a normal-approximation interval.

    The mean and variance are exact (sums of the Beta moments); only the
    interval assumes normality, which is accurate once both groups have a
    few dozen observations.

    Returns
    -------
    IntervalResult
        method='normal'
    """
    intervals.validate_level(level)
    params = posterior_parameters(source)
    a, b = params[:, 0], params[:, 1]
    means = a / (a + b)
    variances = a * b / ((a + b) ** 2 * (a + b + 1))

    mean = means[0] - means[1]
    sd = np.sqrt(variances.sum())
    z = stats.norm.ppf(1 - (1 - level) / 2)
    return IntervalResult(float(mean), float(mean - z * sd), float(mean + z * sd), 'normal', level)
