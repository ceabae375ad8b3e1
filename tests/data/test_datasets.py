"""Unit tests for bundled example tables."""

import pytest
from bayes2x2.data import datasets
from bayes2x2.exceptions import InvalidInput


class TestDatasets:
    """Tests for the dataset registry."""

    @pytest.mark.parametrize("name", sorted(datasets.DATASETS))
    def test_load_table(self, name):
        """Test that every registered table loads with its labels."""
        info = datasets.get_dataset_info(name)
        df = datasets.load_table(name)

        assert df.shape == (2, 2)
        assert list(df.index) == info['row_labels']
        assert list(df.columns) == info['col_labels']
        assert df.to_numpy().tolist() == info['counts']

    def test_aspirin_counts(self):
        """Test the small aspirin trial counts."""
        df = datasets.load_table('aspirin_mi')
        assert df.loc['Aspirin', 'MI'] == 5
        assert df.loc['Placebo', 'No MI'] == 188

    def test_unknown_dataset(self):
        """Test error handling for unknown names."""
        with pytest.raises(InvalidInput, match="Unknown dataset"):
            datasets.get_dataset_info('nope')
