"""Pairwise similarity metrics between two subjects' rating vectors.

Every metric follows the same "higher = more similar" convention so the engine
can use any of them as an aggregation weight:

- euclidean: 1 / (1 + distance), in (0, 1]
- pearson:   correlation coefficient, in [-1, 1]
- tanimoto:  Tanimoto coefficient, in [0, 1] for non-negative ratings
- cosine:    cosine of the angle, in [-1, 1]
"""

from __future__ import annotations

from typing import Callable, Dict, Union

from numpy.typing import ArrayLike

from .errors import InvalidArgument
from .vector_math import cosine_angle, euclidean_distance, pearson_correlation, tanimoto_coefficient

SimilarityMetric = Callable[[ArrayLike, ArrayLike], float]


def euclidean_score(dist: float) -> float:
    """Map a Euclidean distance onto (0, 1]; distance 0 maps to 1."""
    if dist < 0:
        raise InvalidArgument(f"distance must be non-negative, got {dist}")
    return 1.0 / (1.0 + float(dist))


def euclidean_similarity(a: ArrayLike, b: ArrayLike) -> float:
    return euclidean_score(euclidean_distance(a, b))


def pearson_similarity(a: ArrayLike, b: ArrayLike) -> float:
    return pearson_correlation(a, b)


def tanimoto_similarity(a: ArrayLike, b: ArrayLike) -> float:
    return tanimoto_coefficient(a, b)


def cosine_similarity(a: ArrayLike, b: ArrayLike) -> float:
    return cosine_angle(a, b)


METRICS: Dict[str, SimilarityMetric] = {
    "euclidean": euclidean_similarity,
    "pearson": pearson_similarity,
    "tanimoto": tanimoto_similarity,
    "cosine": cosine_similarity,
}


def get_metric(metric: Union[str, SimilarityMetric]) -> SimilarityMetric:
    """Resolve a metric by registry name, or pass a conforming callable through."""
    if callable(metric):
        return metric
    key = str(metric).strip().lower()
    if key not in METRICS:
        raise InvalidArgument(f"Unknown similarity metric {metric!r}; choose from {sorted(METRICS)}")
    return METRICS[key]
