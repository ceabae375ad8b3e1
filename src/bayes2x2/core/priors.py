"""
Prior Specifications
====================

A ``PriorSpec`` is an immutable 2x2 block of positive hyperparameters shared
by both models:

- Dirichlet-multinomial: cell (i, j) is the Dirichlet weight gamma_ij
- Beta-Binomial: row i is the (alpha_i, beta_i) pair of group i

Example Usage:
--------------
>>> from bayes2x2.core.priors import PriorSpec
>>>
>>> PriorSpec.uniform()                     # Beta(1, 1) per group
>>> PriorSpec.beta(0.5, 0.5)                # Jeffreys prior per group
>>> PriorSpec.beta([2, 1], [20, 10])        # Beta(2, 20) and Beta(1, 10)
>>> PriorSpec.from_marginals([[5, 94], [18, 188]])  # default Dirichlet prior
>>> PriorSpec.from_marginals([[0, 10], [0, 12]])    # empty column: mass / 4 per cell
"""

from dataclasses import dataclass
from typing import Tuple, Union, Sequence

import numpy as np

from bayes2x2.exceptions import InvalidInput
from bayes2x2.core import tables


@dataclass(frozen=True)
class PriorSpec:
    """
    Four positive prior hyperparameters laid out as a 2x2 block.

    Attributes
    ----------
    values : tuple of tuple of float
        ((a11, a12), (a21, a22)); use ``as_array()`` for numeric work
    """
    values: Tuple[Tuple[float, float], Tuple[float, float]]

    def __post_init__(self):
        try:
            arr = np.asarray(self.values, dtype=float)
        except (TypeError, ValueError) as exc:
            raise InvalidInput(f"Prior hyperparameters must be numeric: {exc}") from exc
        if arr.shape != (2, 2):
            raise InvalidInput(f"Prior must hold 4 hyperparameters as a 2x2 block, got shape {arr.shape}")
        if not np.all(np.isfinite(arr)):
            raise InvalidInput("Prior hyperparameters must be finite")
        if np.any(arr <= 0):
            raise InvalidInput("Prior hyperparameters must be positive")
        # Normalise to nested float tuples so specs compare and hash by value
        object.__setattr__(self, 'values', tuple(tuple(float(v) for v in row) for row in arr))

    def as_array(self) -> np.ndarray:
        """Return a fresh (2, 2) float array."""
        return np.array(self.values, dtype=float)

    @property
    def total(self) -> float:
        return float(self.as_array().sum())

    def group(self, i: int) -> Tuple[float, float]:
        """(alpha, beta) of group ``i`` under the Beta-Binomial reading."""
        return self.values[i]

    @classmethod
    def uniform(cls) -> 'PriorSpec':
        """Beta(1, 1) per group (flat prior on each proportion)."""
        return cls(((1.0, 1.0), (1.0, 1.0)))

    @classmethod
    def jeffreys(cls) -> 'PriorSpec':
        """Beta(0.5, 0.5) per group."""
        return cls(((0.5, 0.5), (0.5, 0.5)))

    @classmethod
    def beta(
        cls,
        alpha: Union[float, Sequence[float]],
        beta: Union[float, Sequence[float]],
    ) -> 'PriorSpec':
        """
        Beta prior per group.

        Parameters
        ----------
        alpha, beta : float or length-2 sequence
            A scalar applies the same value to both groups
        """
        try:
            a = np.broadcast_to(np.asarray(alpha, dtype=float), (2,))
            b = np.broadcast_to(np.asarray(beta, dtype=float), (2,))
        except ValueError as exc:
            raise InvalidInput(f"alpha and beta must be scalars or one value per group: {exc}") from exc
        return cls(tuple(zip(a.tolist(), b.tolist())))

    @classmethod
    def dirichlet(cls, gammas) -> 'PriorSpec':
        """Dirichlet prior from a 2x2 block of cell weights."""
        return cls(gammas)

    @classmethod
    def from_marginals(cls, table, mass: float = 1.0) -> 'PriorSpec':
        """
        Default Dirichlet prior gamma_ij = p_i+ * p_+j * mass.

        Products of the observed row and column proportions, so the prior
        shrinks toward independence with a total weight of ``mass``
        pseudo-observations.

        When the table is empty or has an empty row or column the product
        would contain a zero, so every cell gets ``mass / 4`` instead.

        Raises
        ------
        InvalidInput
            If ``mass`` is not positive or the table is invalid
        """
        if mass <= 0:
            raise InvalidInput("prior_mass must be positive")
        arr = tables.as_table(table).astype(float)
        rows, cols = arr.sum(axis=1), arr.sum(axis=0)
        if np.any(rows == 0) or np.any(cols == 0):
            return cls(np.full((2, 2), mass / 4))
        total = arr.sum()
        return cls.dirichlet(np.outer(rows / total, cols / total) * mass)
