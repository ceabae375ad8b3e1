"""Unit tests for 2x2 table validation and construction."""

import pytest
import numpy as np
import pandas as pd
from bayes2x2.core import tables
from bayes2x2.exceptions import InvalidInput


class TestAsTable:
    """Tests for table validation."""

    def test_nested_list(self):
        """Test that nested lists become an int array."""
        arr = tables.as_table([[5, 94], [18, 188]])

        assert arr.shape == (2, 2)
        assert arr.dtype == np.int64
        assert arr[1, 1] == 188

    def test_dataframe_labels_dropped(self):
        """Test that DataFrame input is reduced to its counts."""
        df = pd.DataFrame([[1, 2], [3, 4]], index=['A', 'B'], columns=['yes', 'no'])
        arr = tables.as_table(df)

        assert np.array_equal(arr, [[1, 2], [3, 4]])

    def test_integral_floats_accepted(self):
        """Test that whole-number floats are accepted."""
        arr = tables.as_table(np.array([[5.0, 1.0], [0.0, 2.0]]))
        assert arr[0, 0] == 5

    def test_invalid_tables(self):
        """Test error handling for malformed tables."""
        with pytest.raises(InvalidInput, match="shape"):
            tables.as_table([[1, 2, 3], [4, 5, 6]])

        with pytest.raises(InvalidInput, match="non-negative"):
            tables.as_table([[-1, 2], [3, 4]])

        with pytest.raises(InvalidInput, match="integers"):
            tables.as_table([[1.5, 2], [3, 4]])

        with pytest.raises(InvalidInput, match="finite"):
            tables.as_table([[np.nan, 2], [3, 4]])

        with pytest.raises(InvalidInput, match="numeric"):
            tables.as_table([['a', 'b'], ['c', 'd']])

    def test_invalid_input_is_value_error(self):
        """Test that InvalidInput can be caught as ValueError."""
        with pytest.raises(ValueError):
            tables.as_table([[-1, 0], [0, 0]])


class TestCounts:
    """Tests for per-group successes and trials."""

    def test_successes_and_trials(self):
        """Test splitting a table into first column and row sums."""
        x, n = tables.successes_and_trials([[5, 94], [18, 188]])

        assert list(x) == [5, 18]
        assert list(n) == [99, 206]

    def test_from_counts(self):
        """Test building a table from successes and trials."""
        arr = tables.from_counts([5, 18], [99, 206])
        assert np.array_equal(arr, [[5, 94], [18, 188]])

    def test_invalid_counts(self):
        """Test error handling for invalid count vectors."""
        with pytest.raises(InvalidInput, match="cannot exceed"):
            tables.as_counts([10, 1], [5, 5])

        with pytest.raises(InvalidInput, match="non-negative"):
            tables.as_counts([-1, 1], [5, 5])

        with pytest.raises(InvalidInput, match="length 2"):
            tables.as_counts([1, 1, 1], [5, 5, 5])


class TestContingencyTable:
    """Tests for labelled table construction."""

    def test_default_labels(self):
        """Test default group and outcome labels."""
        df = tables.contingency_table([[1, 2], [3, 4]])

        assert list(df.index) == ['Group 1', 'Group 2']
        assert list(df.columns) == ['Success', 'Failure']

    def test_custom_labels(self):
        """Test custom labels and label extraction."""
        df = tables.contingency_table(
            [[5, 94], [18, 188]],
            row_labels=['Aspirin', 'Placebo'],
            col_labels=['MI', 'No MI'],
        )

        assert df.loc['Placebo', 'MI'] == 18
        assert tables.group_labels(df) == ('Aspirin', 'Placebo')
        assert tables.group_labels([[5, 94], [18, 188]]) is None

    def test_wrong_label_count(self):
        """Test that label lists must have two entries."""
        with pytest.raises(InvalidInput, match="2 entries"):
            tables.contingency_table([[1, 2], [3, 4]], row_labels=['A', 'B', 'C'])
