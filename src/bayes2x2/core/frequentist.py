"""
Classical Tests for 2x2 Tables
==============================

Frequentist counterparts of the Bayesian summaries, for side-by-side
comparison: the two-proportion z-test, Pearson's chi-square, Fisher's exact
test and the odds-ratio / risk-ratio confidence intervals of a 2x2 table.

Example Usage:
--------------
>>> from bayes2x2.core import frequentist
>>>
>>> result = frequentist.z_test_proportions(x_1=5, n_1=99, x_2=18, n_2=206)
>>> print(f"P-value: {result['p_value']:.4f}")
>>>
>>> summary = frequentist.table_summary([[5, 94], [18, 188]])
>>> print(f"OR = {summary['odds_ratio']:.3f} {summary['odds_ratio_ci']}")
"""

import numpy as np
from typing import Dict
from scipy import stats
from statsmodels.stats.contingency_tables import Table2x2

from bayes2x2.exceptions import InvalidInput
from bayes2x2.core import tables


def z_test_proportions(
    x_1: int,
    n_1: int,
    x_2: int,
    n_2: int,
    alpha: float = 0.05,
    two_sided: bool = True,
) -> Dict[str, float]:
    """
    Two-sample Z-test for proportions.

    Uses pooled standard error for the test statistic and non-pooled
    standard error for the confidence interval.

    Parameters
    ----------
    x_1, n_1 : int
        Events and trials in group 1
    x_2, n_2 : int
        Events and trials in group 2
    alpha : float, default=0.05
        Significance level
    two_sided : bool, default=True
        Whether to use two-sided test

    Returns
    -------
    dict
        Dictionary with keys:
        - p_1, p_2: Observed proportions
        - difference: p_1 - p_2
        - z_statistic: Z-test statistic
        - p_value: P-value
        - ci_lower, ci_upper: Confidence interval of the difference
        - significant: Whether result is significant at alpha

    Notes
    -----
    - Pooled SE for the test: SE = √[p̄(1-p̄)(1/n₁ + 1/n₂)]
    - Non-pooled SE for the CI: SE = √[p₁(1-p₁)/n₁ + p₂(1-p₂)/n₂]
    """
    if x_1 < 0 or x_2 < 0:
        raise InvalidInput("x_1 and x_2 must be non-negative")
    if n_1 <= 0 or n_2 <= 0:
        raise InvalidInput("n_1 and n_2 must be positive")
    if x_1 > n_1 or x_2 > n_2:
        raise InvalidInput("Number of successes cannot exceed sample size")
    if not 0 < alpha < 1:
        raise InvalidInput("alpha must be between 0 and 1")

    p_1 = x_1 / n_1
    p_2 = x_2 / n_2

    # Pooled proportion (for test statistic)
    p_pooled = (x_1 + x_2) / (n_1 + n_2)
    se_pooled = np.sqrt(p_pooled * (1 - p_pooled) * (1/n_1 + 1/n_2))

    if se_pooled > 0:
        z_stat = (p_1 - p_2) / se_pooled
    else:
        # All events or no events in both groups
        z_stat = 0.0

    if two_sided:
        p_value = 2 * (1 - stats.norm.cdf(abs(z_stat)))
    else:
        p_value = 1 - stats.norm.cdf(z_stat)

    se_diff = np.sqrt(p_1*(1-p_1)/n_1 + p_2*(1-p_2)/n_2)
    z_critical = stats.norm.ppf(1 - alpha/2) if two_sided else stats.norm.ppf(1 - alpha)

    return {
        'p_1': p_1,
        'p_2': p_2,
        'difference': p_1 - p_2,
        'z_statistic': float(z_stat),
        'p_value': float(p_value),
        'ci_lower': float((p_1 - p_2) - z_critical * se_diff),
        'ci_upper': float((p_1 - p_2) + z_critical * se_diff),
        'significant': bool(p_value < alpha),
    }


def chi_square_test(table, correction: bool = True, alpha: float = 0.05) -> Dict[str, float]:
    """
    Pearson's chi-square test of independence.

    Parameters
    ----------
    table : array-like
        2x2 counts
    correction : bool, default=True
        Apply Yates' continuity correction

    Returns
    -------
    dict
        chi2, p_value, dof, expected (2x2 array), significant

    Notes
    -----
    - Expected counts below 5 make the approximation unreliable;
      prefer ``fisher_exact_test`` for small tables
    """
    arr = tables.as_table(table)
    if np.any(arr.sum(axis=0) == 0) or np.any(arr.sum(axis=1) == 0):
        raise InvalidInput("Chi-square test needs every row and column to have observations")
    chi2, p_value, dof, expected = stats.chi2_contingency(arr, correction=correction)
    return {
        'chi2': float(chi2),
        'p_value': float(p_value),
        'dof': int(dof),
        'expected': expected,
        'significant': bool(p_value < alpha),
    }


def fisher_exact_test(table, alternative: str = 'two-sided', alpha: float = 0.05) -> Dict[str, float]:
    """
    Fisher's exact test.

    Returns
    -------
    dict
        odds_ratio (sample odds ratio), p_value, significant
    """
    arr = tables.as_table(table)
    odds_ratio, p_value = stats.fisher_exact(arr, alternative=alternative)
    return {
        'odds_ratio': float(odds_ratio),
        'p_value': float(p_value),
        'significant': bool(p_value < alpha),
    }


def table_summary(table, alpha: float = 0.05) -> Dict[str, object]:
    """
    Sample odds ratio and risk ratio with Wald confidence intervals.

    Uses statsmodels ``Table2x2``. Zero cells get the 0.5 continuity
    correction statsmodels applies by default.

    Returns
    -------
    dict
        odds_ratio, odds_ratio_ci, odds_ratio_pvalue,
        risk_ratio, risk_ratio_ci, risk_ratio_pvalue
    """
    arr = tables.as_table(table)
    t = Table2x2(arr.astype(float), shift_zeros=True)
    return {
        'odds_ratio': float(t.oddsratio),
        'odds_ratio_ci': tuple(float(v) for v in t.oddsratio_confint(alpha=alpha)),
        'odds_ratio_pvalue': float(t.oddsratio_pvalue()),
        'risk_ratio': float(t.riskratio),
        'risk_ratio_ci': tuple(float(v) for v in t.riskratio_confint(alpha=alpha)),
        'risk_ratio_pvalue': float(t.riskratio_pvalue()),
    }
