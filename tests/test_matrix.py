from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from src.critic_cf.errors import InvalidArgument
from src.critic_cf.matrix import UNRATED, RatingsMatrix


def test_from_rows_shape_and_mask(small_matrix: RatingsMatrix) -> None:
    assert small_matrix.n_subjects == 3
    assert small_matrix.n_items == 3
    assert small_matrix.values.dtype == np.float64
    np.testing.assert_array_equal(
        small_matrix.rated_mask(),
        [[True, True, False], [True, False, True], [True, True, True]],
    )


def test_none_and_nan_become_unrated() -> None:
    m = RatingsMatrix.from_rows([[None, 2.0], [float("nan"), 1.0]])
    np.testing.assert_array_equal(m.values[:, 0], [UNRATED, UNRATED])
    assert not m.rated_mask()[:, 0].any()


def test_negative_ratings_count_as_unrated() -> None:
    m = RatingsMatrix.from_rows([[-1.0, 2.0]])
    np.testing.assert_array_equal(m.rated_mask(), [[False, True]])


def test_values_are_read_only_copy() -> None:
    src = np.array([[1.0, 2.0], [3.0, 4.0]])
    m = RatingsMatrix.from_rows(src)
    src[0, 0] = 99.0
    assert m.values[0, 0] == 1.0
    with pytest.raises(ValueError):
        m.values[0, 0] = 5.0


@pytest.mark.parametrize(
    "rows",
    [
        [],
        [[]],
        [[1, 2, 3], [1, 2]],
        np.array([1.0, 2.0, 3.0]),
        [[1.0, float("inf")]],
    ],
)
def test_malformed_matrices_rejected(rows) -> None:
    with pytest.raises(InvalidArgument):
        RatingsMatrix.from_rows(rows)


def test_label_lengths_checked() -> None:
    with pytest.raises(InvalidArgument):
        RatingsMatrix.from_rows([[1, 2]], subject_ids=["a", "b"])
    with pytest.raises(InvalidArgument):
        RatingsMatrix.from_rows([[1, 2]], item_ids=["x"])


def test_from_frame_keeps_labels() -> None:
    df = pd.DataFrame(
        {"heat": [4.0, np.nan], "jumanji": [2.0, 5.0]},
        index=pd.Index(["ann", "bob"], name="subject"),
    )
    m = RatingsMatrix.from_frame(df)
    assert m.subject_ids == ("ann", "bob")
    assert m.item_ids == ("heat", "jumanji")
    np.testing.assert_array_equal(m.values, [[4.0, 2.0], [UNRATED, 5.0]])


def test_subject_index_by_label_or_index(critics_matrix: RatingsMatrix) -> None:
    assert critics_matrix.subject_index("gene") == 1
    assert critics_matrix.subject_index(3) == 3
    with pytest.raises(InvalidArgument):
        critics_matrix.subject_index("nobody")


def test_direct_construction_copies_and_freezes() -> None:
    src = np.array([[2.0, 3.0], [4.0, np.nan]])
    m = RatingsMatrix(values=src, subject_ids=["a", "b"])
    src[0, 0] = 1.0
    assert m.values[0, 0] == 2.0
    assert m.values[1, 1] == UNRATED
    assert not m.values.flags.writeable
    assert m.subject_ids == ("a", "b")


@pytest.mark.parametrize(
    "values",
    [
        np.array([1.0, 2.0]),
        np.empty((0, 3)),
        np.array([[1.0, np.inf]]),
        [["a", "b"]],
    ],
)
def test_direct_construction_validates(values) -> None:
    with pytest.raises(InvalidArgument):
        RatingsMatrix(values=values)


def test_direct_construction_checks_labels() -> None:
    with pytest.raises(InvalidArgument):
        RatingsMatrix(values=np.ones((2, 2)), item_ids=["x"])
