from __future__ import annotations

import numpy as np
import pytest

from postman.errors import Disconnected
from postman.graph import edge_mask
from postman.shortest_paths import (UNREACHABLE, check_reachable, compute_shortest_paths,
                                    floyd_warshall, reconstruct_path, scipy_shortest_paths)


def test_floyd_warshall_square(square) -> None:
    paths = floyd_warshall(square)
    assert paths.distance[0, 2] == 3      # 0-1-2 beats the direct diagonal (5)
    assert paths.distance[1, 3] == 5
    assert np.all(np.diagonal(paths.distance) == 0)
    assert paths.next_hop[0, 2] == 1
    assert reconstruct_path(paths.next_hop, 0, 2) == [0, 1, 2]
    assert reconstruct_path(paths.next_hop, 2, 0) == [2, 1, 0]
    assert reconstruct_path(paths.next_hop, 3, 3) == [3]


def test_distances_symmetric_and_triangle_inequality(grid) -> None:
    d = floyd_warshall(grid).distance
    assert np.array_equal(d, d.T)
    n = len(d)
    for k in range(n):
        assert np.all(d <= d[:, k, None] + d[None, k, :])


def test_paths_follow_real_edges(grid) -> None:
    paths = floyd_warshall(grid)
    mask = edge_mask(grid)
    for u in range(len(grid)):
        for v in range(len(grid)):
            path = reconstruct_path(paths.next_hop, u, v)
            assert path[0] == u and path[-1] == v
            assert all(mask[a, b] for a, b in zip(path[:-1], path[1:]))
            assert sum(grid[a, b] for a, b in zip(path[:-1], path[1:])) == paths.distance[u, v]


def test_scipy_backend_agrees_on_distances(grid) -> None:
    numpy_paths = floyd_warshall(grid)
    scipy_paths = scipy_shortest_paths(grid)
    assert np.allclose(numpy_paths.distance, scipy_paths.distance)
    for u in range(len(grid)):
        for v in range(len(grid)):
            path = reconstruct_path(scipy_paths.next_hop, u, v)
            assert sum(grid[a, b] for a, b in zip(path[:-1], path[1:])) == pytest.approx(
                numpy_paths.distance[u, v])


def test_unknown_backend(square) -> None:
    with pytest.raises(ValueError):
        compute_shortest_paths(square, backend="dijkstra")


@pytest.mark.parametrize("backend", ["numpy", "scipy"])
def test_disconnected_graph(two_components, backend) -> None:
    paths = compute_shortest_paths(two_components, backend=backend)
    assert np.isinf(paths.distance[0, 2])
    assert paths.next_hop[0, 2] == UNREACHABLE
    with pytest.raises(Disconnected) as exc:
        check_reachable(paths)
    assert exc.value.pair == (0, 2)
    with pytest.raises(Disconnected):
        reconstruct_path(paths.next_hop, 1, 3)
