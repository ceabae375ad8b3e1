"""
Dirichlet-Multinomial Cell Probabilities
========================================

Posterior estimation of the four cell probabilities of a 2x2 table treated as
a single multinomial sample. With a Dirichlet(gamma) prior the posterior is
Dirichlet(n + gamma), so everything here is closed form.

Example Usage:
--------------
>>> from bayes2x2.core import multinomial
>>>
>>> est = multinomial.estimate([[5, 94], [18, 188]])
>>> print(est.probabilities)          # posterior mean of each cell
>>> est.cell_intervals(level=0.95)    # exact marginal intervals
"""

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
from scipy import stats

from bayes2x2.config import DEFAULT_CONFIG
from bayes2x2.core import tables
from bayes2x2.core.priors import PriorSpec
from bayes2x2.core.intervals import IntervalResult, validate_level


@dataclass(frozen=True, eq=False)
class MultinomialEstimate:
    """Posterior of a 2x2 table under a Dirichlet prior."""
    counts: np.ndarray
    prior: PriorSpec
    posterior: np.ndarray
    probabilities: np.ndarray

    @property
    def total(self) -> int:
        return int(self.counts.sum())

    def cell_intervals(self, level: float = 0.95) -> np.ndarray:
        """
        Exact equal-tailed interval for each cell probability.

        Each Dirichlet marginal is Beta(a_ij, A - a_ij) with A = sum(a).

        Returns
        -------
        np.ndarray
            2x2 object array of IntervalResult
        """
        validate_level(level)
        total = self.posterior.sum()
        tail = (1 - level) / 2
        out = np.empty((2, 2), dtype=object)
        for i in range(2):
            for j in range(2):
                a = self.posterior[i, j]
                lower, upper = stats.beta.ppf([tail, 1 - tail], a, total - a)
                out[i, j] = IntervalResult(
                    float(self.probabilities[i, j]), float(lower), float(upper), 'quantile', level
                )
        return out

    def sample(
        self,
        n_samples: int = DEFAULT_CONFIG.n_samples,
        random_state: Union[int, np.random.Generator, None] = None,
    ) -> np.ndarray:
        """Dirichlet posterior draws with shape (n_samples, 2, 2)."""
        rng = np.random.default_rng(random_state)
        draws = rng.dirichlet(self.posterior.ravel(), size=n_samples)
        return draws.reshape(n_samples, 2, 2)


def estimate(
    table,
    prior: Optional[PriorSpec] = None,
    prior_mass: float = DEFAULT_CONFIG.prior_mass,
) -> MultinomialEstimate:
    """
    Posterior mean cell probabilities of a 2x2 table.

    Parameters
    ----------
    table : array-like or pd.DataFrame
        2x2 non-negative integer counts
    prior : PriorSpec, optional
        Dirichlet weights gamma_ij. Defaults to the marginal-product prior
        gamma_ij = p_i+ * p_+j * prior_mass, or prior_mass / 4 per cell when
        the table has an empty row or column
    prior_mass : float, default=1.0
        Total weight of the default prior (ignored when ``prior`` is given)

    Returns
    -------
    MultinomialEstimate
        With ``probabilities`` pi_ij = (n_ij + gamma_ij) / (N + sum(gamma))

    Raises
    ------
    InvalidInput
        Negative or malformed counts, or an invalid explicit prior

    Notes
    -----
    - Default prior mass of 1 is a weak prior, comparable to a single
      pseudo-observation spread in proportion to the margins
    - Cells with zero counts still receive positive probability
    """
    counts = tables.as_table(table)
    if prior is None:
        prior = PriorSpec.from_marginals(counts, mass=prior_mass)
    elif not isinstance(prior, PriorSpec):
        prior = PriorSpec.dirichlet(prior)

    posterior = counts + prior.as_array()
    probabilities = posterior / posterior.sum()
    return MultinomialEstimate(
        counts=counts,
        prior=prior,
        posterior=posterior,
        probabilities=probabilities,
    )


def posterior_mean(table, prior: Optional[PriorSpec] = None) -> np.ndarray:
    """Shortcut for ``estimate(table, prior).probabilities``."""
    return estimate(table, prior).probabilities
