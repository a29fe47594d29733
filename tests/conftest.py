from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure `import src...` works when pytest uses importlib import mode.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from src.critic_cf.matrix import RatingsMatrix  # noqa: E402


@pytest.fixture
def small_matrix() -> RatingsMatrix:
    """3 subjects x 3 items; 0 = unrated."""
    return RatingsMatrix.from_rows([[5, 3, 0], [4, 0, 2], [5, 4, 1]])


@pytest.fixture
def critics_matrix() -> RatingsMatrix:
    """Labelled 5 x 6 matrix with a mix of rated and unrated cells."""
    return RatingsMatrix.from_rows(
        [
            [2.5, 3.5, 3.0, 3.5, 2.5, 3.0],
            [3.0, 3.5, 1.5, 5.0, 3.5, 3.0],
            [2.5, 3.0, 0.0, 3.5, 0.0, 4.0],
            [0.0, 3.5, 3.0, 4.0, 2.5, 4.5],
            [3.0, 4.0, 2.0, 3.0, 2.0, 3.0],
        ],
        subject_ids=["lisa", "gene", "michael", "claudia", "mick"],
        item_ids=["lady", "snakes", "luck", "superman", "dupree", "night"],
    )
