"""Tidy records and tabular presentation of fitted models."""

from bayes2x2.reporting import summary
from bayes2x2.reporting.summary import tidy, present

__all__ = ["summary", "tidy", "present"]
