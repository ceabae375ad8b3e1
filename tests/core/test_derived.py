"""Unit tests for derived effect measures."""

import warnings

import pytest
import numpy as np
from bayes2x2.core import beta_binomial, derived
from bayes2x2.core.derived import DerivedQuantities
from bayes2x2.exceptions import InvalidInput, InsufficientSamples, NumericDegenerateWarning


@pytest.fixture
def aspirin_fit():
    return beta_binomial.fit([[5, 94], [18, 188]])


class TestDerive:
    """Tests for sampled difference, relative risk and odds ratio."""

    def test_elementwise_definitions(self, aspirin_fit):
        """Test the derived measures against the paired draws."""
        dq = derived.derive(aspirin_fit, n_samples=2000, random_state=42)

        p1, p2 = dq.p1, dq.p2
        assert np.array_equal(dq.difference, p1 - p2)
        assert np.allclose(dq.relative_risk, p1 / p2)
        assert np.allclose(dq.odds_ratio, (p1 / (1 - p1)) / (p2 / (1 - p2)))
        assert dq.n_samples == 2000

    def test_means_near_analytic(self, aspirin_fit):
        """Test posterior means against the exact Beta means."""
        dq = derived.derive(aspirin_fit, n_samples=50000, random_state=42)

        assert dq.means['p1'] == pytest.approx(6 / 101, abs=0.001)
        assert dq.means['p2'] == pytest.approx(19 / 208, abs=0.001)
        assert dq.means['difference'] == pytest.approx(6 / 101 - 19 / 208, abs=0.001)
        # Ratio of independent Betas: E[p1] * E[1/p2] with E[1/p2] = (a+b-1)/(a-1)
        assert dq.means['relative_risk'] == pytest.approx((6 / 101) * (207 / 18), rel=0.02)

    def test_from_parameter_pairs(self, aspirin_fit):
        """Test that raw (alpha, beta) pairs give the same draws as a fit."""
        a = derived.derive(aspirin_fit, n_samples=1000, random_state=5)
        b = derived.derive([[6, 95], [19, 189]], n_samples=1000, random_state=5)

        assert np.array_equal(a.p1, b.p1)
        assert np.array_equal(a.odds_ratio, b.odds_ratio)

    def test_reproducibility(self, aspirin_fit):
        """Test bit-identical sequences for the same seed."""
        a = derived.derive(aspirin_fit, n_samples=1000, random_state=42)
        b = derived.derive(aspirin_fit, n_samples=1000, random_state=42)

        for name in ('p1', 'p2', 'difference', 'relative_risk', 'odds_ratio'):
            assert np.array_equal(a.draws(name), b.draws(name))

    def test_accepts_generator(self, aspirin_fit):
        """Test that a Generator can be passed as random_state."""
        dq = derived.derive(aspirin_fit, n_samples=100, random_state=np.random.default_rng(0))
        assert dq.p1.shape == (100,)

    def test_prob_greater(self):
        """Test P(p1 > p2) for clearly separated groups."""
        dq = derived.derive([[90, 10], [10, 90]], n_samples=5000, random_state=1)
        assert dq.prob_greater() > 0.999

    def test_interval(self, aspirin_fit):
        """Test credible intervals of derived quantities."""
        dq = derived.derive(aspirin_fit, n_samples=10000, random_state=42)

        rr = dq.interval('relative_risk', level=0.95, method='hpd')
        assert 0 < rr.lower < rr.upper
        assert rr.contains(1.0)

        odds = dq.interval('odds_ratio', level=0.9, method='quantile')
        assert odds.method == 'quantile'
        assert odds.level == 0.9

    def test_no_warning_for_regular_draws(self, aspirin_fit):
        """Test that ordinary posteriors exclude nothing and stay silent."""
        with warnings.catch_warnings():
            warnings.simplefilter('error', NumericDegenerateWarning)
            dq = derived.derive(aspirin_fit, n_samples=5000, random_state=42)

        assert dq.n_excluded == {'difference': 0, 'relative_risk': 0, 'odds_ratio': 0}

    def test_invalid_inputs(self, aspirin_fit):
        """Test error handling for invalid inputs."""
        with pytest.raises(InvalidInput, match="positive integer"):
            derived.derive(aspirin_fit, n_samples=0)

        with pytest.raises(InvalidInput, match="positive and finite"):
            derived.derive([[0, 1], [1, 1]])

        with pytest.raises(InvalidInput, match="two \\(alpha, beta\\) pairs"):
            derived.derive([1, 2, 3])

        with pytest.raises(InvalidInput, match="Unknown quantity"):
            derived.derive(aspirin_fit, n_samples=10).draws('lift')


class TestDegenerateDraws:
    """Tests for draws at the 0/1 boundary."""

    def test_boundary_draws_excluded_and_counted(self):
        """Test that non-finite ratio draws are dropped and reported."""
        # Beta(0.001, 5) underflows to exactly 0 for a large share of draws
        with pytest.warns(NumericDegenerateWarning, match="Excluded non-finite draws"):
            dq = derived.derive([[2, 2], [0.001, 5]], n_samples=2000, random_state=42)

        assert dq.n_excluded['relative_risk'] > 0
        assert dq.n_excluded['odds_ratio'] > 0
        assert dq.n_excluded['difference'] == 0

        assert np.all(np.isfinite(dq.relative_risk))
        assert np.all(np.isfinite(dq.odds_ratio))
        assert dq.relative_risk.size + dq.n_excluded['relative_risk'] == 2000
        assert dq.difference.size == 2000
        assert np.isfinite(dq.means['difference'])

    def test_all_draws_degenerate(self):
        """Test that a quantity with no finite draws cannot be summarised."""
        p = np.array([0.2, 0.4])
        dq = DerivedQuantities(
            p1=p,
            p2=np.zeros(2),
            difference=p,
            relative_risk=np.array([]),
            odds_ratio=np.array([]),
            n_samples=2,
            n_excluded={'difference': 0, 'relative_risk': 2, 'odds_ratio': 2},
        )

        assert np.isnan(dq.means['relative_risk'])
        with pytest.raises(InsufficientSamples):
            dq.interval('relative_risk')


class TestAnalyticDifference:
    """Tests for the closed-form difference summary."""

    def test_exact_mean(self, aspirin_fit):
        """Test exact posterior mean of p1 - p2."""
        result = derived.analytic_difference(aspirin_fit)

        assert result.estimate == pytest.approx(6 / 101 - 19 / 208)
        assert result.method == 'normal'
        assert result.lower < result.estimate < result.upper

    def test_agrees_with_sampling(self):
        """Test the normal approximation against Monte Carlo for large counts."""
        fit = beta_binomial.fit([[239, 10795], [139, 10898]])
        exact = derived.analytic_difference(fit, level=0.95)
        sampled = derived.derive(fit, n_samples=50000, random_state=0).interval(
            'difference', level=0.95, method='quantile'
        )

        assert exact.lower == pytest.approx(sampled.lower, abs=5e-4)
        assert exact.upper == pytest.approx(sampled.upper, abs=5e-4)
        assert exact.lower > 0
