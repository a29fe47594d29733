from __future__ import annotations

import math

import pytest

from src.critic_cf.errors import DegenerateInputError, InvalidArgument
from src.critic_cf.similarity import (
    METRICS,
    cosine_similarity,
    euclidean_score,
    euclidean_similarity,
    get_metric,
    pearson_similarity,
    tanimoto_similarity,
)


@pytest.mark.parametrize("name", sorted(METRICS))
def test_self_similarity_is_maximal(name: str) -> None:
    v = [5.0, 3.0, 1.0, 4.0]
    assert get_metric(name)(v, v) == pytest.approx(1.0)


def test_euclidean_score_identity_and_range() -> None:
    assert euclidean_score(0.0) == 1.0
    for d in (0.5, 1.0, 10.0, 1e6):
        assert 0.0 < euclidean_score(d) < 1.0


def test_euclidean_score_strictly_decreasing() -> None:
    distances = [0.0, 0.1, 1.0, 2.5, 10.0, 100.0]
    scores = [euclidean_score(d) for d in distances]
    assert all(a > b for a, b in zip(scores, scores[1:]))


def test_euclidean_score_rejects_negative_distance() -> None:
    with pytest.raises(InvalidArgument):
        euclidean_score(-1.0)


def test_euclidean_similarity_hand_computed() -> None:
    assert euclidean_similarity([5, 3, 0], [5, 4, 1]) == pytest.approx(1 / (1 + math.sqrt(2)))


def test_pass_through_metrics_keep_sign_and_scale() -> None:
    assert pearson_similarity([1, 2, 3], [3, 2, 1]) == pytest.approx(-1.0)
    assert cosine_similarity([1, 0], [-1, 0]) == pytest.approx(-1.0)
    assert tanimoto_similarity([1, 1, 0], [0, 1, 1]) == pytest.approx(1 / 3)


def test_degenerate_inputs_propagate() -> None:
    with pytest.raises(DegenerateInputError):
        pearson_similarity([2, 2, 2], [1, 2, 3])
    with pytest.raises(DegenerateInputError):
        cosine_similarity([0, 0], [1, 1])


def test_get_metric_by_name_is_case_insensitive() -> None:
    assert get_metric("Pearson") is pearson_similarity
    assert get_metric(" cosine ") is cosine_similarity


def test_get_metric_passes_callables_through() -> None:
    def always_one(a, b) -> float:
        return 1.0

    assert get_metric(always_one) is always_one


def test_get_metric_unknown_name() -> None:
    with pytest.raises(InvalidArgument, match="Unknown similarity metric"):
        get_metric("manhattan")
