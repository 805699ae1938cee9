from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from postman.dataio import edges_to_matrix

DATA = Path(__file__).resolve().parents[1] / "data"

GRID_EDGES = [
    (0, 1, 2), (1, 2, 3), (3, 4, 1), (4, 5, 4), (6, 7, 2), (7, 8, 2),
    (0, 3, 1), (3, 6, 3), (1, 4, 2), (4, 7, 1), (2, 5, 2), (5, 8, 3),
]


@pytest.fixture
def data_dir() -> Path:
    return DATA


@pytest.fixture
def triangle() -> np.ndarray:
    return np.array([[0, 1, 1], [1, 0, 1], [1, 1, 0]], dtype=float)


@pytest.fixture
def square() -> np.ndarray:
    # 0-1-2-3-0 plus the 0-2 diagonal, zeros mean "no edge"
    return np.array([
        [0, 1, 5, 4],
        [1, 0, 2, 0],
        [5, 2, 0, 3],
        [4, 0, 3, 0],
    ], dtype=float)


@pytest.fixture
def grid() -> np.ndarray:
    # 3x3 grid, odd vertices 1, 3, 5, 7, basic cost 26
    return edges_to_matrix(GRID_EDGES, 9)


@pytest.fixture
def two_components() -> np.ndarray:
    return edges_to_matrix([(0, 1, 1), (2, 3, 1)], 4)
