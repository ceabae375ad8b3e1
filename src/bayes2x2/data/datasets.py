"""
Example 2x2 Tables
==================

Small published two-group binary-outcome tables for examples and tests.

Datasets:
---------
1. Aspirin MI (small trial)
   - Fatal or non-fatal myocardial infarction, aspirin vs placebo
   - Use: Worked example with small event counts

2. Physicians' Health Study
   - Myocardial infarction, aspirin vs placebo, ~22K physicians
   - Use: Large-sample example with a clear effect

Example Usage:
--------------
>>> from bayes2x2.data import datasets
>>>
>>> table = datasets.load_table('aspirin_mi')
>>> info = datasets.get_dataset_info('physicians_health')
>>> print(info['citation'])
"""

from typing import Any, Dict

import pandas as pd

from bayes2x2.exceptions import InvalidInput
from bayes2x2.core import tables


# Dataset registry
DATASETS = {
    "aspirin_mi": {
        "name": "Aspirin and Myocardial Infarction",
        "description": "Fatal or non-fatal MI among patients on aspirin vs placebo",
        "counts": [[5, 94], [18, 188]],
        "row_labels": ["Aspirin", "Placebo"],
        "col_labels": ["MI", "No MI"],
        "citation": "Aspirin vs placebo trial, restructured as a 2x2 table",
    },
    "physicians_health": {
        "name": "Physicians' Health Study (aspirin component)",
        "description": "Myocardial infarction among male physicians on aspirin vs placebo",
        "counts": [[139, 10898], [239, 10795]],
        "row_labels": ["Aspirin", "Placebo"],
        "col_labels": ["MI", "No MI"],
        "citation": (
            "Steering Committee of the Physicians' Health Study Research Group (1989), "
            "NEJM 321:129-135"
        ),
    },
}


def get_dataset_info(dataset_name: str) -> Dict[str, Any]:
    """
    Get metadata about a bundled table.

    Parameters
    ----------
    dataset_name : str
        One of: 'aspirin_mi', 'physicians_health'
    """
    if dataset_name not in DATASETS:
        raise InvalidInput(
            f"Unknown dataset '{dataset_name}'. "
            f"Available: {list(DATASETS.keys())}"
        )
    return DATASETS[dataset_name]


def load_table(dataset_name: str) -> pd.DataFrame:
    """Load a bundled table as a labelled 2x2 DataFrame."""
    info = get_dataset_info(dataset_name)
    return tables.contingency_table(
        info["counts"],
        row_labels=info["row_labels"],
        col_labels=info["col_labels"],
    )
