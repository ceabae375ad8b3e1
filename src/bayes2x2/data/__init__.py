"""Bundled example tables."""

from bayes2x2.data import datasets

__all__ = ["datasets"]
