"""
Beta-Binomial Two-Group Model
=============================

Independent Beta-Binomial models for the event proportion of each group of a
2x2 table, with sequential updating and posterior summaries of the
proportion difference, relative risk and odds ratio.

Fits are immutable values: ``update`` returns a new fit whose prior is the
previous posterior, so earlier fits can be kept and shared freely.

Example Usage:
--------------
>>> from bayes2x2.core import beta_binomial
>>>
>>> # Rows = groups, first column = events
>>> fit = beta_binomial.fit([[5, 94], [18, 188]])
>>> fit.posterior
array([[  6.,  95.],
       [ 19., 189.]])
>>>
>>> # Fold in another batch of observations
>>> fit2 = fit.update(successes=[3, 9], trials=[50, 48])
>>>
>>> for term, est, low, high in fit2.tidy_records(random_state=42):
...     print(f"{term}: {est:.4f} [{low:.4f}, {high:.4f}]")
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from bayes2x2.config import DEFAULT_CONFIG
from bayes2x2.exceptions import InvalidInput
from bayes2x2.core import tables, derived, intervals
from bayes2x2.core.priors import PriorSpec
from bayes2x2.core.intervals import IntervalResult

# Reported terms, in presentation order
TERMS = ('prop_1', 'prop_2', 'prop_diff', 'relative_risk', 'odds_ratio')

# Term name -> DerivedQuantities attribute
DERIVED_TERMS = {
    'prop_diff': 'difference',
    'relative_risk': 'relative_risk',
    'odds_ratio': 'odds_ratio',
}

RandomState = Union[int, np.random.Generator, None]


@dataclass(frozen=True)
class BetaBinomialFit:
    """
    Posterior state of two independent Beta-Binomial models.

    Attributes
    ----------
    successes : tuple of int
        Events (x1, x2) observed in this step
    trials : tuple of int
        Trials (n1, n2) observed in this step
    prior : PriorSpec
        Row i holds the (alpha_i, beta_i) prior of group i
    group_labels : tuple of str
        Display names of the two groups
    n_updates : int
        Number of ``update`` steps since the initial fit
    """
    successes: Tuple[int, int]
    trials: Tuple[int, int]
    prior: PriorSpec = field(default_factory=PriorSpec.uniform)
    group_labels: Tuple[str, str] = ('Group 1', 'Group 2')
    n_updates: int = 0

    def __post_init__(self):
        x, n = tables.as_counts(self.successes, self.trials)
        if not isinstance(self.prior, PriorSpec):
            raise InvalidInput("prior must be a PriorSpec")
        if len(self.group_labels) != 2:
            raise InvalidInput("group_labels must have 2 entries")
        object.__setattr__(self, 'successes', tuple(int(v) for v in x))
        object.__setattr__(self, 'trials', tuple(int(v) for v in n))
        object.__setattr__(self, 'group_labels', tuple(str(v) for v in self.group_labels))

    @property
    def failures(self) -> Tuple[int, int]:
        """Non-events (n1 - x1, n2 - x2) of the latest step."""
        return (
            int(self.trials[0] - self.successes[0]),
            int(self.trials[1] - self.successes[1]),
        )

    @property
    def posterior(self) -> np.ndarray:
        """(2, 2) array, row i = (alpha_i + x_i, beta_i + n_i - x_i)."""
        return self.prior.as_array() + np.column_stack([self.successes, self.failures])

    def posterior_mean(self) -> np.ndarray:
        """Posterior mean proportion of each group."""
        post = self.posterior
        return post[:, 0] / post.sum(axis=1)

    def sample(self, n_samples: int = DEFAULT_CONFIG.n_samples, random_state: RandomState = None) -> np.ndarray:
        """
        Draw group proportions from the posterior.

        Returns
        -------
        np.ndarray
            Shape (2, n_samples); row i holds draws of p_i. Uses the same
            stream as ``derive`` so both agree for a given seed
        """
        dq = derived.derive(self, n_samples=n_samples, random_state=random_state)
        return np.vstack([dq.p1, dq.p2])

    def update(self, table=None, successes=None, trials=None) -> 'BetaBinomialFit':
        """Return a new fit with this posterior as prior; see ``update``."""
        return update(self, table=table, successes=successes, trials=trials)

    def derive(self, n_samples: int = DEFAULT_CONFIG.n_samples, random_state: RandomState = None) -> derived.DerivedQuantities:
        return derived.derive(self, n_samples=n_samples, random_state=random_state)

    def intervals(
        self,
        level: float = DEFAULT_CONFIG.level,
        method: str = DEFAULT_CONFIG.interval_type,
        n_samples: int = DEFAULT_CONFIG.n_samples,
        random_state: RandomState = None,
    ) -> Dict[str, IntervalResult]:
        """
        Credible intervals for every reported term.

        Group proportions use the exact Beta posterior; the derived terms
        use ``n_samples`` Monte Carlo draws.

        Returns
        -------
        dict
            Term name -> IntervalResult, keyed in ``TERMS`` order
        """
        dq = self.derive(n_samples=n_samples, random_state=random_state)
        return self._intervals_from(dq, level, method)

    def _intervals_from(self, dq, level, method) -> Dict[str, IntervalResult]:
        post = self.posterior
        out = {
            'prop_1': intervals.beta_interval(post[0, 0], post[0, 1], level=level, method=method),
            'prop_2': intervals.beta_interval(post[1, 0], post[1, 1], level=level, method=method),
        }
        for term, name in DERIVED_TERMS.items():
            out[term] = dq.interval(name, level=level, method=method)
        return out

    def summary(
        self,
        level: float = DEFAULT_CONFIG.level,
        method: str = DEFAULT_CONFIG.interval_type,
        n_samples: int = DEFAULT_CONFIG.n_samples,
        random_state: RandomState = None,
    ) -> Dict[str, object]:
        """
        Posterior summary of the fit.

        Returns
        -------
        dict
            Dictionary with keys:
            - group_labels: Names of the two groups
            - successes, trials: Counts of the latest step
            - prior, posterior: (2, 2) hyperparameter arrays
            - intervals: Term name -> IntervalResult
            - prob_greater: P(p1 > p2)
            - n_excluded: Non-finite draws dropped per derived quantity
            - n_samples, level, method
        """
        dq = self.derive(n_samples=n_samples, random_state=random_state)
        return {
            'group_labels': self.group_labels,
            'successes': self.successes,
            'trials': self.trials,
            'prior': self.prior.as_array(),
            'posterior': self.posterior,
            'intervals': self._intervals_from(dq, level, method),
            'prob_greater': dq.prob_greater(),
            'n_excluded': dict(dq.n_excluded),
            'n_samples': dq.n_samples,
            'level': level,
            'method': method,
        }

    def tidy_records(
        self,
        level: float = DEFAULT_CONFIG.level,
        method: str = DEFAULT_CONFIG.interval_type,
        n_samples: int = DEFAULT_CONFIG.n_samples,
        random_state: RandomState = None,
    ) -> List[Tuple[str, float, float, float]]:
        """(term, estimate, lower, upper) for each term in ``TERMS`` order."""
        result = self.intervals(level=level, method=method, n_samples=n_samples, random_state=random_state)
        return [(term, r.estimate, r.lower, r.upper) for term, r in result.items()]


def _parse_counts(table, successes, trials) -> Tuple[np.ndarray, np.ndarray]:
    if table is not None:
        if successes is not None or trials is not None:
            raise InvalidInput("Pass either a table or successes/trials, not both")
        return tables.successes_and_trials(table)
    if successes is None or trials is None:
        raise InvalidInput("Pass a 2x2 table or both successes and trials")
    return tables.as_counts(successes, trials)


def fit(
    table=None,
    prior: Optional[PriorSpec] = None,
    successes: Optional[Sequence[int]] = None,
    trials: Optional[Sequence[int]] = None,
    group_labels: Optional[Sequence[str]] = None,
) -> BetaBinomialFit:
    """
    Fit independent Beta-Binomial models to two groups.

    Parameters
    ----------
    table : array-like or pd.DataFrame, optional
        2x2 counts; rows are groups and the first column counts events.
        DataFrame row labels become the group labels
    prior : PriorSpec, optional
        (alpha_i, beta_i) per group. Default Beta(1, 1) (uniform)
    successes, trials : sequence of int, optional
        Per-group events and trials, instead of ``table``
    group_labels : sequence of str, optional
        Display names of the groups

    Returns
    -------
    BetaBinomialFit
        Posterior Beta(alpha_i + x_i, beta_i + n_i - x_i) per group

    Raises
    ------
    InvalidInput
        Negative counts, successes above trials, a malformed table or a
        non-positive prior

    Notes
    -----
    - Closed-form conjugate update, no sampling involved
    - A group with zero events (or zero trials) keeps a proper posterior
      since the prior parameters are positive

    Example
    -------
    >>> result = fit(successes=[5, 18], trials=[99, 206])
    >>> result.posterior_mean()
    """
    x, n = _parse_counts(table, successes, trials)
    if prior is None:
        prior = PriorSpec.uniform()
    elif not isinstance(prior, PriorSpec):
        prior = PriorSpec(prior)

    if group_labels is None:
        group_labels = tables.group_labels(table) if table is not None else None
    if group_labels is None:
        group_labels = ('Group 1', 'Group 2')

    return BetaBinomialFit(
        successes=tuple(x),
        trials=tuple(n),
        prior=prior,
        group_labels=tuple(group_labels),
    )


def update(
    previous: BetaBinomialFit,
    table=None,
    successes: Optional[Sequence[int]] = None,
    trials: Optional[Sequence[int]] = None,
) -> BetaBinomialFit:
    """
    Sequential Bayesian update with a new batch of observations.

    The previous posterior becomes the prior of the returned fit; the
    previous fit is not modified. Updating with batch B1 then B2 gives the
    same posterior parameters as a single fit on B1 + B2.

    Parameters
    ----------
    previous : BetaBinomialFit
        Fit to update
    table : array-like, optional
        2x2 counts of the new batch
    successes, trials : sequence of int, optional
        Per-group counts of the new batch, instead of ``table``

    Returns
    -------
    BetaBinomialFit
        New fit with ``n_updates`` incremented

    Example
    -------
    >>> day1 = fit(successes=[12, 9], trials=[100, 100])
    >>> day2 = update(day1, successes=[15, 8], trials=[110, 95])
    """
    if not isinstance(previous, BetaBinomialFit):
        raise InvalidInput("previous must be a BetaBinomialFit")
    x, n = _parse_counts(table, successes, trials)
    return BetaBinomialFit(
        successes=tuple(x),
        trials=tuple(n),
        prior=PriorSpec(previous.posterior),
        group_labels=previous.group_labels,
        n_updates=previous.n_updates + 1,
    )


if __name__ == "__main__":
    # Demo
    print("=" * 80)
    print("Beta-Binomial 2x2 Demo")
    print("=" * 80)

    demo = fit([[5, 94], [18, 188]], group_labels=['Aspirin', 'Placebo'])
    print(f"\nPosterior {demo.group_labels[0]}: Beta({demo.posterior[0, 0]:g}, {demo.posterior[0, 1]:g})")
    print(f"Posterior {demo.group_labels[1]}: Beta({demo.posterior[1, 0]:g}, {demo.posterior[1, 1]:g})")

    for term, est, low, high in demo.tidy_records(random_state=42):
        print(f"{term:>14}: {est:8.4f}  95% HPD [{low:8.4f}, {high:8.4f}]")

    print("\nSequential update")
    print("-" * 80)
    later = demo.update(successes=[4, 11], trials=[120, 118])
    print(f"After {later.n_updates} update(s): posterior means {later.posterior_mean().round(4)}")
