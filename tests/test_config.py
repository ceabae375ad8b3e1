"""Unit tests for analysis defaults."""

import dataclasses

import pytest
from bayes2x2.config import AnalysisConfig, DEFAULT_CONFIG
from bayes2x2.exceptions import InvalidInput


class TestAnalysisConfig:
    """Tests for AnalysisConfig."""

    def test_defaults(self):
        """Test documented default values."""
        assert DEFAULT_CONFIG.n_samples == 10000
        assert DEFAULT_CONFIG.level == 0.95
        assert DEFAULT_CONFIG.interval_type == 'hpd'
        assert DEFAULT_CONFIG.random_state is None
        assert DEFAULT_CONFIG.prior_mass == 1.0

    def test_frozen(self):
        """Test that configs are immutable."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.level = 0.9

    def test_invalid_values(self):
        """Test error handling for invalid settings."""
        with pytest.raises(InvalidInput, match="n_samples"):
            AnalysisConfig(n_samples=1)

        with pytest.raises(InvalidInput, match="level"):
            AnalysisConfig(level=0)

        with pytest.raises(InvalidInput, match="interval_type"):
            AnalysisConfig(interval_type='central')

        with pytest.raises(InvalidInput, match="prior_mass"):
            AnalysisConfig(prior_mass=-1)
