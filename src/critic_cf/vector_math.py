"""Vector-math primitives shared by the similarity metrics and the engine.

All functions take two equal-length 1-D real sequences and return a single float.
Mismatched or empty inputs raise `InvalidArgument`; inputs for which the statistic
is mathematically undefined raise `DegenerateInputError`.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
from numpy.typing import ArrayLike
from sklearn.metrics.pairwise import cosine_similarity, paired_euclidean_distances

from .errors import DegenerateInputError, InvalidArgument

WEIGHT_SUM_RTOL = 1e-9


def _as_pair(a: ArrayLike, b: ArrayLike) -> Tuple[np.ndarray, np.ndarray]:
    a_arr = np.asarray(a, dtype=np.float64)
    b_arr = np.asarray(b, dtype=np.float64)
    if a_arr.ndim != 1 or b_arr.ndim != 1:
        raise InvalidArgument(f"expected 1-D vectors, got shapes {a_arr.shape} and {b_arr.shape}")
    if a_arr.shape[0] != b_arr.shape[0]:
        raise InvalidArgument(f"vector lengths differ: {a_arr.shape[0]} != {b_arr.shape[0]}")
    if a_arr.shape[0] == 0:
        raise InvalidArgument("vectors must not be empty")
    return a_arr, b_arr


def euclidean_distance(a: ArrayLike, b: ArrayLike) -> float:
    a_arr, b_arr = _as_pair(a, b)
    return float(paired_euclidean_distances(a_arr.reshape(1, -1), b_arr.reshape(1, -1))[0])


def pearson_correlation(a: ArrayLike, b: ArrayLike) -> float:
    """Pearson correlation coefficient, clipped to [-1, 1]."""
    a_arr, b_arr = _as_pair(a, b)
    # Constant vectors like [0.7] * n leave round-off residue after centring.
    if np.ptp(a_arr) == 0.0 or np.ptp(b_arr) == 0.0:
        raise DegenerateInputError("Pearson correlation is undefined for a zero-variance vector")
    a_c = a_arr - a_arr.mean()
    b_c = b_arr - b_arr.mean()
    denom = float(np.sqrt(np.dot(a_c, a_c) * np.dot(b_c, b_c)))
    if denom == 0.0:
        raise DegenerateInputError("Pearson correlation is undefined for a zero-variance vector")
    return float(np.clip(np.dot(a_c, b_c) / denom, -1.0, 1.0))


def tanimoto_coefficient(a: ArrayLike, b: ArrayLike) -> float:
    """Tanimoto (extended Jaccard) coefficient.

    T(A, B) = A·B / (|A|² + |B|² - A·B)
    """
    a_arr, b_arr = _as_pair(a, b)
    dot = float(np.dot(a_arr, b_arr))
    denom = float(np.dot(a_arr, a_arr) + np.dot(b_arr, b_arr)) - dot
    if denom == 0.0:
        raise DegenerateInputError("Tanimoto coefficient is undefined for two zero vectors")
    return dot / denom


def cosine_angle(a: ArrayLike, b: ArrayLike) -> float:
    """Cosine of the angle between a and b, clipped to [-1, 1]."""
    a_arr, b_arr = _as_pair(a, b)
    # sklearn maps zero-norm rows to 0.0 instead of failing.
    if not np.any(a_arr) or not np.any(b_arr):
        raise DegenerateInputError("cosine angle is undefined for a zero-magnitude vector")
    cos = cosine_similarity(a_arr.reshape(1, -1), b_arr.reshape(1, -1))[0, 0]
    return float(np.clip(cos, -1.0, 1.0))


def weighted_mean(values: ArrayLike, weights: ArrayLike) -> float:
    """Weighted average sum(v * w) / sum(w).

    Signed weights that cancel to within WEIGHT_SUM_RTOL of their total
    magnitude count as summing to zero.
    """
    v_arr, w_arr = _as_pair(values, weights)
    w_sum = float(w_arr.sum())
    if abs(w_sum) <= WEIGHT_SUM_RTOL * float(np.abs(w_arr).sum()):
        raise DegenerateInputError("weighted mean is undefined when the weights sum to zero")
    return float(np.dot(v_arr, w_arr)) / w_sum
