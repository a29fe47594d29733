"""Error types raised by the critic-based recommender."""

from __future__ import annotations


class CriticCFError(Exception):
    """Base class for recommender errors."""


class InvalidArgument(CriticCFError, ValueError):
    """Malformed call: bad target index, bad top_n, ragged or empty matrix."""


class DegenerateInputError(CriticCFError, ArithmeticError):
    """A similarity statistic is undefined for the given vector pair.

    Raised e.g. for Pearson on a zero-variance vector or cosine on a zero vector.
    """
