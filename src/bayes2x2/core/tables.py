"""
2x2 Contingency Tables
======================

Validation and construction helpers for the 2x2 count tables consumed by the
estimators. Rows are groups (e.g. treatment, control) and columns are outcome
categories, with the first column counted as the "success" (event) outcome.

Example Usage:
--------------
>>> from bayes2x2.core import tables
>>>
>>> counts = tables.as_table([[5, 94], [18, 188]])
>>> successes, trials = tables.successes_and_trials(counts)
>>>
>>> # Labelled table for presentation
>>> df = tables.contingency_table(
...     [[5, 94], [18, 188]],
...     row_labels=['Aspirin', 'Placebo'],
...     col_labels=['MI', 'No MI'],
... )
"""

import numpy as np
import pandas as pd
from typing import Sequence, Tuple, Optional

from bayes2x2.exceptions import InvalidInput


def as_table(data) -> np.ndarray:
    """
    Validate a 2x2 table and return it as an integer array.

    Parameters
    ----------
    data : array-like or pd.DataFrame
        2x2 counts. DataFrame labels are dropped.

    Returns
    -------
    np.ndarray
        Array of shape (2, 2) and dtype int64

    Raises
    ------
    InvalidInput
        If the table is not 2x2, or holds negative, non-finite or
        non-integer counts
    """
    if isinstance(data, pd.DataFrame):
        data = data.to_numpy()

    try:
        arr = np.asarray(data, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"Table must be numeric: {exc}") from exc

    if arr.shape != (2, 2):
        raise InvalidInput(f"Table must have shape (2, 2), got {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise InvalidInput("Table counts must be finite")
    if np.any(arr < 0):
        raise InvalidInput("Table counts must be non-negative")
    if np.any(arr != np.round(arr)):
        raise InvalidInput("Table counts must be integers")

    return arr.astype(np.int64)


def as_counts(successes: Sequence, trials: Sequence) -> Tuple[np.ndarray, np.ndarray]:
    """
    Validate per-group (successes, trials) vectors.

    Returns
    -------
    tuple
        (successes, trials) as int64 arrays of length 2
    """
    x = _as_count_vector(successes, "successes")
    n = _as_count_vector(trials, "trials")
    if np.any(x > n):
        raise InvalidInput("Number of successes cannot exceed number of trials")
    return x, n


def _as_count_vector(values: Sequence, name: str) -> np.ndarray:
    try:
        arr = np.asarray(values, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"{name} must be numeric: {exc}") from exc

    if arr.shape != (2,):
        raise InvalidInput(f"{name} must hold one count per group (length 2), got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise InvalidInput(f"{name} must be finite")
    if np.any(arr < 0):
        raise InvalidInput(f"{name} must be non-negative")
    if np.any(arr != np.round(arr)):
        raise InvalidInput(f"{name} must be integers")
    return arr.astype(np.int64)


def successes_and_trials(table) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split a table into per-group successes (first column) and trials (row sums).
    """
    arr = as_table(table)
    return arr[:, 0].copy(), arr.sum(axis=1)


def from_counts(successes: Sequence, trials: Sequence) -> np.ndarray:
    """Build the 2x2 table [[x1, n1 - x1], [x2, n2 - x2]]."""
    x, n = as_counts(successes, trials)
    return np.column_stack([x, n - x])


def contingency_table(
    counts,
    row_labels: Optional[Sequence[str]] = None,
    col_labels: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """
    Build a labelled 2x2 table.

    Parameters
    ----------
    counts : array-like
        2x2 counts, rows = groups, columns = outcomes
    row_labels : sequence of str, optional
        Group names (default 'Group 1', 'Group 2')
    col_labels : sequence of str, optional
        Outcome names (default 'Success', 'Failure')

    Returns
    -------
    pd.DataFrame
        Labelled table; labels carry no meaning for the estimators
    """
    arr = as_table(counts)
    row_labels = list(row_labels) if row_labels is not None else ['Group 1', 'Group 2']
    col_labels = list(col_labels) if col_labels is not None else ['Success', 'Failure']
    if len(row_labels) != 2 or len(col_labels) != 2:
        raise InvalidInput("row_labels and col_labels must each have 2 entries")
    return pd.DataFrame(arr, index=row_labels, columns=col_labels)


def group_labels(table) -> Optional[Tuple[str, str]]:
    """Row labels of a DataFrame table, or None for unlabelled input."""
    if isinstance(table, pd.DataFrame):
        return tuple(str(label) for label in table.index)
    return None
