"""Unit tests for the classical 2x2 tests."""

import pytest
import numpy as np
from bayes2x2.core import frequentist
from bayes2x2.exceptions import InvalidInput

PHYSICIANS = [[139, 10898], [239, 10795]]


class TestZTestProportions:
    """Tests for z-test for proportions."""

    def test_z_test_no_effect(self):
        """Test z-test when proportions are equal."""
        result = frequentist.z_test_proportions(
            x_1=50, n_1=500,
            x_2=50, n_2=500
        )

        assert abs(result['difference']) < 1e-10
        assert abs(result['z_statistic']) < 0.1
        assert result['p_value'] > 0.90
        assert not result['significant']

    def test_z_test_positive_effect(self):
        """Test z-test with a higher rate in group 1."""
        result = frequentist.z_test_proportions(
            x_1=71, n_1=500,
            x_2=50, n_2=500
        )

        assert result['difference'] > 0
        assert result['z_statistic'] > 0
        assert result['p_value'] < 0.05
        assert result['significant']

    def test_z_test_confidence_interval(self):
        """Test that CI contains the observed difference."""
        result = frequentist.z_test_proportions(
            x_1=5, n_1=99,
            x_2=18, n_2=206
        )

        assert result['ci_lower'] < result['difference'] < result['ci_upper']
        assert not result['significant']

    def test_z_test_no_variance(self):
        """Test that identical all-or-nothing groups do not divide by zero."""
        result = frequentist.z_test_proportions(0, 100, 0, 100)

        assert result['z_statistic'] == 0.0
        assert result['p_value'] == pytest.approx(1.0)

    def test_z_test_invalid_inputs(self):
        """Test error handling for invalid inputs."""
        with pytest.raises(ValueError, match="must be non-negative"):
            frequentist.z_test_proportions(-1, 500, 50, 500)

        with pytest.raises(ValueError, match="must be positive"):
            frequentist.z_test_proportions(50, 0, 50, 500)

        with pytest.raises(ValueError, match="cannot exceed sample size"):
            frequentist.z_test_proportions(600, 500, 50, 500)


class TestTableTests:
    """Tests for chi-square, Fisher and Table2x2 summaries."""

    def test_chi_square_significant(self):
        """Test chi-square on a large trial with a clear effect."""
        result = frequentist.chi_square_test(PHYSICIANS)

        assert result['dof'] == 1
        assert result['p_value'] < 0.001
        assert result['significant']
        assert result['expected'].shape == (2, 2)

    def test_chi_square_empty_margin(self):
        """Test that an empty column is rejected."""
        with pytest.raises(InvalidInput, match="every row and column"):
            frequentist.chi_square_test([[0, 5], [0, 7]])

    def test_fisher_exact(self):
        """Test Fisher's exact test sample odds ratio."""
        result = frequentist.fisher_exact_test(PHYSICIANS)

        expected_or = (139 * 10795) / (10898 * 239)
        assert result['odds_ratio'] == pytest.approx(expected_or)
        assert result['significant']

    def test_fisher_small_table(self):
        """Test Fisher's exact test on the small aspirin table."""
        result = frequentist.fisher_exact_test([[5, 94], [18, 188]])
        assert result['p_value'] > 0.05

    def test_table_summary(self):
        """Test odds ratio and risk ratio confidence intervals."""
        result = frequentist.table_summary(PHYSICIANS)

        rr = (139 / 11037) / (239 / 11034)
        assert result['risk_ratio'] == pytest.approx(rr)
        low, high = result['risk_ratio_ci']
        assert low < rr < high
        assert high < 1

        low, high = result['odds_ratio_ci']
        assert low < result['odds_ratio'] < high

    def test_table_summary_zero_cell(self):
        """Test that zero cells give finite estimates."""
        result = frequentist.table_summary([[0, 10], [5, 5]])

        assert np.isfinite(result['odds_ratio'])
        assert np.isfinite(result['risk_ratio'])
