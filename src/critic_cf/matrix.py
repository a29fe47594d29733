"""Dense subjects x items ratings matrix."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

import numpy as np
import pandas as pd

from .errors import InvalidArgument

# Any value <= UNRATED means "subject has not rated item".
UNRATED = 0.0


def _coerce_values(rows: Any) -> np.ndarray:
    if isinstance(rows, np.ndarray):
        return np.array(rows, dtype=np.float64)

    rows = [list(r) for r in rows]
    if not rows:
        raise InvalidArgument("ratings matrix is empty")
    widths = sorted({len(r) for r in rows})
    if len(widths) != 1:
        raise InvalidArgument(f"ratings rows have mismatched lengths: {widths}")
    return np.array(
        [[np.nan if v is None else v for v in r] for r in rows],
        dtype=np.float64,
    )


@dataclass(frozen=True, eq=False)
class RatingsMatrix:
    """Immutable ratings table: rows = subjects, columns = items.

    `values` is a read-only float64 array. Missing ratings are stored as
    `UNRATED`; `None` and NaN on input are normalised to it.
    """

    values: np.ndarray
    subject_ids: Optional[tuple] = None
    item_ids: Optional[tuple] = None

    def __post_init__(self) -> None:
        # Always hold a private read-only copy, however the matrix was built.
        try:
            values = np.array(self.values, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(f"ratings matrix is not numeric or is ragged: {exc}") from None
        if values.ndim != 2:
            raise InvalidArgument(f"ratings matrix must be 2-D, got shape {values.shape}")
        if values.shape[0] == 0 or values.shape[1] == 0:
            raise InvalidArgument(f"ratings matrix is empty (shape {values.shape})")
        if np.isinf(values).any():
            raise InvalidArgument("ratings matrix contains infinite values")

        values[np.isnan(values)] = UNRATED
        values.setflags(write=False)
        object.__setattr__(self, "values", values)

        n_subjects, n_items = values.shape
        if self.subject_ids is not None:
            subject_ids = tuple(self.subject_ids)
            if len(subject_ids) != n_subjects:
                raise InvalidArgument(f"expected {n_subjects} subject_ids, got {len(subject_ids)}")
            object.__setattr__(self, "subject_ids", subject_ids)
        if self.item_ids is not None:
            item_ids = tuple(self.item_ids)
            if len(item_ids) != n_items:
                raise InvalidArgument(f"expected {n_items} item_ids, got {len(item_ids)}")
            object.__setattr__(self, "item_ids", item_ids)

    @classmethod
    def from_rows(
        cls,
        rows: Any,
        *,
        subject_ids: Optional[Sequence[Any]] = None,
        item_ids: Optional[Sequence[Any]] = None,
    ) -> "RatingsMatrix":
        return cls(values=_coerce_values(rows), subject_ids=subject_ids, item_ids=item_ids)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "RatingsMatrix":
        """Wrap a subjects x items DataFrame; index and columns become labels."""
        values = df.to_numpy(dtype=np.float64, na_value=np.nan)
        return cls.from_rows(values, subject_ids=list(df.index), item_ids=list(df.columns))

    @property
    def n_subjects(self) -> int:
        return int(self.values.shape[0])

    @property
    def n_items(self) -> int:
        return int(self.values.shape[1])

    def row(self, subject_index: int) -> np.ndarray:
        return self.values[subject_index]

    def rated_mask(self) -> np.ndarray:
        return self.values > UNRATED

    def subject_index(self, subject: Any) -> int:
        """Resolve a subject label or row index to a row index.

        Labels take precedence over indices when both could match. Range checks
        are left to the caller.
        """
        if self.subject_ids is not None and subject in self.subject_ids:
            return self.subject_ids.index(subject)
        if isinstance(subject, (int, np.integer)) and not isinstance(subject, bool):
            return int(subject)
        raise InvalidArgument(f"Unknown subject: {subject!r}")
