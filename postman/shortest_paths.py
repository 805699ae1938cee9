"""
All-pairs shortest paths with a next-hop routing table.
"""
import logging
from typing import List, NamedTuple

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import shortest_path

from .errors import CircuitError, Disconnected
from .graph import edge_mask

logger = logging.getLogger(__name__)

UNREACHABLE = -1


class ShortestPaths(NamedTuple):
    """
    distance[u][v]: shortest-path cost from u to v (inf if unreachable)
    next_hop[u][v]: vertex following u on a shortest u -> v path
                    (UNREACHABLE if there is none, u itself when u == v)
    """
    distance: np.ndarray
    next_hop: np.ndarray


def floyd_warshall(cost: np.ndarray) -> ShortestPaths:
    """
    Floyd-Warshall over the cost matrix.

    THE RELAXATION:
    For every intermediate vertex k (outer loop) and every pair (i, j):
        distance[i][j] = min(distance[i][j], distance[i][k] + distance[k][j])
    and whenever going through k is strictly shorter, the first hop of the
    i -> j path becomes the first hop of the i -> k path:
        next[i][j] = next[i][k]

    The i and j loops run as one numpy operation per k. Row k and column k
    never change during iteration k (distance[k][k] is 0), so this gives the
    same distances and the same tie-breaks as the scalar triple loop.

    Costs are non-negative, so there are no negative cycles to detect.
    This takes time O(n**3).

    Parameters:
    -----------
    cost: np.ndarray
        Validated cost matrix (0 or NO_EDGE off-diagonal for "no edge")

    Returns:
    --------
    ShortestPaths(distance, next_hop)
    """
    n = len(cost)
    mask = edge_mask(cost)

    distance = np.where(mask, cost, np.inf)
    np.fill_diagonal(distance, 0)

    next_hop = np.full((n, n), UNREACHABLE, dtype=int)
    rows, cols = np.nonzero(mask)
    next_hop[rows, cols] = cols
    np.fill_diagonal(next_hop, np.arange(n))

    for k in range(n):
        through_k = distance[:, k, None] + distance[None, k, :]
        improved = through_k < distance
        distance = np.where(improved, through_k, distance)
        next_hop = np.where(improved, next_hop[:, k, None], next_hop)

    return ShortestPaths(distance, next_hop)


def scipy_shortest_paths(cost: np.ndarray) -> ShortestPaths:
    """
    Same result as floyd_warshall() using scipy's compiled implementation.

    scipy returns predecessors: predecessors[s][t] is the vertex before t on
    the shortest s -> t path. In an undirected graph the s -> t path walked
    backwards is a t -> s path, so the vertex after u on the way to v is
    predecessors[v][u], i.e. the next-hop table is the transpose.

    Paths of equal cost may be broken differently than by floyd_warshall().
    """
    n = len(cost)
    graph = csr_matrix(np.where(edge_mask(cost), cost, 0))

    distance, predecessors = shortest_path(
        graph,
        method="FW",
        directed=False,
        return_predecessors=True,
    )

    next_hop = np.array(predecessors.T, dtype=int)
    next_hop[next_hop < 0] = UNREACHABLE  # scipy uses -9999
    np.fill_diagonal(next_hop, np.arange(n))

    return ShortestPaths(np.asarray(distance, dtype=float), next_hop)


def compute_shortest_paths(cost: np.ndarray, backend: str = "numpy") -> ShortestPaths:
    if backend == "numpy":
        paths = floyd_warshall(cost)
    elif backend == "scipy":
        paths = scipy_shortest_paths(cost)
    else:
        raise ValueError(f"Unknown shortest path backend {backend!r}")
    logger.debug("Shortest paths computed with %s backend for %d vertices", backend, len(cost))
    return paths


def check_reachable(paths: ShortestPaths) -> None:
    """
    Raise Disconnected if any vertex pair has no path.

    Distances of a disconnected graph are undefined for the matching step,
    so this has to run before any matching is scored.
    """
    unreachable = np.argwhere(~np.isfinite(paths.distance))
    if len(unreachable):
        u, v = (int(x) for x in unreachable[0])
        raise Disconnected(
            f"Graph is not connected: no path between {u} and {v}", pair=(u, v)
        )


def reconstruct_path(next_hop: np.ndarray, start: int, end: int) -> List[int]:
    """
    Rebuild the shortest start -> end path from the next-hop table.

    Every step start -> next_hop[start][end] follows a real edge of the
    original graph, so the returned sequence only contains real hops.

    Returns:
    --------
    path : list
        Vertex indices from start to end inclusive ([start] if start == end)
    """
    path = [start]
    current = start

    while current != end:
        current = int(next_hop[current, end])
        if current == UNREACHABLE:
            raise Disconnected(f"No path between {start} and {end}", pair=(start, end))
        path.append(current)
        if len(path) > len(next_hop):
            raise CircuitError(f"Next-hop table loops on the way from {start} to {end}")

    return path
