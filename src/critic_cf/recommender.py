"""User-user collaborative filtering over a dense critics matrix.

For one target subject:
- compute the similarity to every other subject with a pluggable metric
  (the target's own entry is fixed at 0 so it never weights its own ratings)
- for each item, take the similarity-weighted mean of the ratings given by the
  subjects who rated it (ratings <= 0 are "unrated" and drop out of both sums)
- rank items by descending score, ties by ascending item index, keep the top N

Every call allocates its own buffers; nothing is cached between calls, so calls
against the same matrix are independent.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence, Union

import numpy as np

from ..utils import setup_logging
from .config import RecommendConfig, load_recommend_config
from .errors import DegenerateInputError, InvalidArgument
from .matrix import UNRATED, RatingsMatrix
from .similarity import SimilarityMetric, get_metric
from .vector_math import weighted_mean


logger = logging.getLogger(__name__)

# Score given to an item when no subject both rated it and has nonzero similarity.
UNSCORED = 0.0

MetricLike = Union[str, SimilarityMetric]


@dataclass(frozen=True)
class RecommendedItem:
    item_index: int
    score: float
    item_id: Any = None


@dataclass(frozen=True)
class SimilarSubject:
    subject_index: int
    similarity: float
    subject_id: Any = None


def _as_matrix(matrix: Any) -> RatingsMatrix:
    if isinstance(matrix, RatingsMatrix):
        return matrix
    return RatingsMatrix.from_rows(matrix)


def _is_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _check_target(matrix: RatingsMatrix, target_index: Any) -> int:
    if not _is_int(target_index):
        raise InvalidArgument(f"target_index must be an int, got {target_index!r}")
    # Negative indices are rejected rather than wrapped.
    if not 0 <= int(target_index) < matrix.n_subjects:
        raise InvalidArgument(f"target_index {target_index} out of range [0, {matrix.n_subjects})")
    return int(target_index)


def _check_top_n(top_n: Any, limit: int, what: str = "items") -> int:
    if not _is_int(top_n):
        raise InvalidArgument(f"top_n must be an int, got {top_n!r}")
    if int(top_n) < 0:
        raise InvalidArgument(f"top_n must be >= 0, got {top_n}")
    if int(top_n) > limit:
        raise InvalidArgument(f"top_n={top_n} exceeds the number of {what} ({limit})")
    return int(top_n)


def similarity_vector(
    matrix: Any,
    target_index: int,
    metric: MetricLike,
    *,
    strict: bool = False,
) -> np.ndarray:
    """Similarity of `target_index` to every subject; the target's own entry is 0.

    In lenient mode (default) a peer whose similarity is undefined
    (DegenerateInputError) gets similarity 0. With `strict=True` the error
    propagates and aborts the call.
    """
    matrix = _as_matrix(matrix)
    target = _check_target(matrix, target_index)
    score_fn = get_metric(metric)

    mine = matrix.row(target)
    sims = np.zeros(matrix.n_subjects, dtype=np.float64)
    for idx in range(matrix.n_subjects):
        if idx == target:
            continue
        try:
            sims[idx] = float(score_fn(mine, matrix.row(idx)))
        except DegenerateInputError as exc:
            if strict:
                raise
            logger.debug("Similarity undefined for subjects %d and %d, using 0: %s", target, idx, exc)
    return sims


def weighted_scores(matrix: Any, similarities: Sequence[float]) -> np.ndarray:
    """Per-item similarity-weighted mean rating.

    score[j] = sum(r[i, j] * sim[i]) / sum(sim[i]) over subjects i that rated j.
    Items where that denominator is 0 score UNSCORED.
    """
    matrix = _as_matrix(matrix)
    sims = np.asarray(similarities, dtype=np.float64)
    if sims.shape != (matrix.n_subjects,):
        raise InvalidArgument(f"expected {matrix.n_subjects} similarities, got shape {sims.shape}")

    rated = matrix.rated_mask()
    scores = np.full(matrix.n_items, UNSCORED, dtype=np.float64)
    for item in range(matrix.n_items):
        mask = rated[:, item]
        critics = np.where(mask, matrix.values[:, item], UNRATED)
        rels = np.where(mask, sims, 0.0)
        try:
            scores[item] = weighted_mean(critics, rels)
        except DegenerateInputError:
            scores[item] = UNSCORED
    return scores


def rank_items(
    scores: Sequence[float],
    top_n: int,
    *,
    candidates: Optional[Iterable[int]] = None,
    item_ids: Optional[Sequence[Any]] = None,
) -> list[RecommendedItem]:
    """Top-N items by descending score; ties broken by ascending item index.

    `candidates` restricts the ranking to a subset of item indices; repeated
    indices are ranked once. The sort is explicit, so the result does not depend
    on the order scores were produced.
    """
    scores = np.asarray(scores, dtype=np.float64)
    n_items = int(scores.shape[0])
    top_n = _check_top_n(top_n, n_items)

    if candidates is None:
        pool = range(n_items)
    else:
        pool = []
        for j in dict.fromkeys(candidates):
            if not _is_int(j) or not 0 <= int(j) < n_items:
                raise InvalidArgument(f"candidate item {j!r} out of range [0, {n_items})")
            pool.append(int(j))
    ordered = sorted(pool, key=lambda j: (-scores[j], j))

    return [
        RecommendedItem(
            item_index=int(j),
            score=float(scores[j]),
            item_id=(None if item_ids is None else item_ids[j]),
        )
        for j in ordered[:top_n]
    ]


def get_recommendation(
    matrix: Any,
    target_index: int,
    metric: MetricLike,
    top_n: int,
    *,
    strict: bool = False,
    exclude_rated: bool = False,
) -> list[RecommendedItem]:
    """Recommend `top_n` items for one subject.

    Parameters
    ----------
    matrix:
        RatingsMatrix, or nested sequences / ndarray accepted by RatingsMatrix.from_rows.
    target_index:
        Row of the subject to recommend for, in [0, n_subjects).
    metric:
        A similarity callable or one of "euclidean", "pearson", "tanimoto", "cosine".
    top_n:
        Number of items to return, in [0, n_items].
    strict:
        Re-raise DegenerateInputError from the metric instead of zeroing that peer.
    exclude_rated:
        Rank only items the target has not rated. Off by default: all items are
        ranked, including ones the target already rated. In this mode fewer than
        `top_n` items may be returned.

    Returns
    -------
    list[RecommendedItem]
        Sorted by descending score, ties by ascending item index.
    """
    matrix = _as_matrix(matrix)
    target = _check_target(matrix, target_index)
    top_n = _check_top_n(top_n, matrix.n_items)
    score_fn = get_metric(metric)
    if top_n == 0:
        return []

    sims = similarity_vector(matrix, target, score_fn, strict=strict)
    scores = weighted_scores(matrix, sims)

    candidates = None
    if exclude_rated:
        candidates = np.flatnonzero(~matrix.rated_mask()[target]).tolist()

    recs = rank_items(scores, top_n, candidates=candidates, item_ids=matrix.item_ids)
    logger.debug(
        "Recommendation: target=%d subjects=%d items=%d top_n=%d returned=%d",
        target,
        matrix.n_subjects,
        matrix.n_items,
        top_n,
        len(recs),
    )
    return recs


def similar_subjects(
    matrix: Any,
    target_index: int,
    metric: MetricLike,
    top_n: Optional[int] = None,
    *,
    strict: bool = False,
) -> list[SimilarSubject]:
    """Peers of `target_index` by descending similarity (ties by index); self excluded."""
    matrix = _as_matrix(matrix)
    target = _check_target(matrix, target_index)
    sims = similarity_vector(matrix, target, metric, strict=strict)

    peers = sorted((i for i in range(matrix.n_subjects) if i != target), key=lambda i: (-sims[i], i))
    if top_n is not None:
        peers = peers[: _check_top_n(top_n, len(peers), what="peers")]

    return [
        SimilarSubject(
            subject_index=int(i),
            similarity=float(sims[i]),
            subject_id=(None if matrix.subject_ids is None else matrix.subject_ids[i]),
        )
        for i in peers
    ]


class CriticRecommender:
    """Recommender bound to one immutable ratings matrix and a RecommendConfig.

    Subjects may be addressed by row index or by label (when the matrix carries
    subject_ids). Nothing is cached across calls.
    """

    def __init__(
        self,
        matrix: Any,
        *,
        config: RecommendConfig | None = None,
        config_path: Path | str | None = None,
    ) -> None:
        if config is None:
            config = load_recommend_config(config_path) if config_path is not None else RecommendConfig()
        self.config = config
        setup_logging(config.log_level)

        self.matrix = _as_matrix(matrix)
        self.metric = get_metric(config.metric)

        logger.info(
            "CriticRecommender loaded: subjects=%d items=%d metric=%s strict=%s exclude_rated=%s",
            self.matrix.n_subjects,
            self.matrix.n_items,
            config.metric,
            config.strict,
            config.exclude_rated,
        )

    def has_subject(self, subject: Any) -> bool:
        try:
            idx = self.matrix.subject_index(subject)
        except InvalidArgument:
            return False
        return 0 <= idx < self.matrix.n_subjects

    def recommend(self, subject: Any, *, top_n: Optional[int] = None) -> list[RecommendedItem]:
        """Top-N items for `subject`.

        An explicit `top_n` is validated as-is; the configured default is capped
        at the number of items.
        """
        if top_n is None:
            top_n = min(int(self.config.top_n), self.matrix.n_items)
        return get_recommendation(
            self.matrix,
            self.matrix.subject_index(subject),
            self.metric,
            top_n,
            strict=self.config.strict,
            exclude_rated=self.config.exclude_rated,
        )

    def similar_subjects(self, subject: Any, *, top_n: Optional[int] = None) -> list[SimilarSubject]:
        return similar_subjects(
            self.matrix,
            self.matrix.subject_index(subject),
            self.metric,
            top_n,
            strict=self.config.strict,
        )
