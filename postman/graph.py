"""
Cost matrix helpers: validation, degrees and odd-vertex detection.

A graph is a square numpy array where cost[u][v] is the edge weight between
u and v. Non-adjacent pairs hold NO_EDGE (infinity) or 0; the diagonal is 0.
"""
import logging
from typing import List, Optional, Tuple

import numpy as np

from .errors import InvalidGraph

logger = logging.getLogger(__name__)

# No-edge sentinel, larger than any accumulated path cost
NO_EDGE = np.inf


def as_cost_matrix(data, no_edge: Optional[float] = None) -> np.ndarray:
    """
    Convert nested lists, arrays or DataFrames into a float cost matrix.

    Parameters:
    -----------
    data: anything numpy can turn into a 2-D array
    no_edge: a caller-side "no edge" value (for example a large integer);
        entries equal to it are replaced by NO_EDGE

    Returns:
    --------
    cost: np.ndarray
        A fresh float copy, never a view of the input
    """
    cost = np.array(data, dtype=float)
    if no_edge is not None and np.isfinite(no_edge) and cost.ndim == 2:
        # the diagonal stays as given, even when no_edge is 0
        mask = cost == no_edge
        np.fill_diagonal(mask, False)
        cost[mask] = NO_EDGE
    return cost


def edge_mask(cost: np.ndarray) -> np.ndarray:
    """Boolean matrix, True where an edge exists (0 and NO_EDGE excluded)."""
    return (cost != 0) & np.isfinite(cost)


def validate_cost_matrix(cost: np.ndarray) -> None:
    """
    Reject anything this engine cannot solve.

    The engine only supports undirected graphs, represented as symmetric
    matrices. Connectivity is NOT checked here; it follows from the
    shortest-path distances (see shortest_paths.check_reachable).

    Raises:
    -------
    InvalidGraph: empty, non-square, NaN, negative, non-zero diagonal or
        asymmetric matrix
    """
    if cost.ndim != 2 or cost.shape[0] != cost.shape[1]:
        raise InvalidGraph(f"Cost matrix must be square, got shape {cost.shape}")
    if cost.shape[0] == 0:
        raise InvalidGraph("Graph is empty")
    if np.isnan(cost).any():
        u, v = (int(x) for x in np.argwhere(np.isnan(cost))[0])
        raise InvalidGraph(f"Cost matrix has NaN at ({u}, {v})", pair=(u, v))
    if (cost < 0).any():
        u, v = (int(x) for x in np.argwhere(cost < 0)[0])
        raise InvalidGraph(f"Negative cost {cost[u, v]} at ({u}, {v})", pair=(u, v))
    diagonal = np.diagonal(cost)
    if (diagonal != 0).any():
        v = int(np.flatnonzero(diagonal != 0)[0])
        raise InvalidGraph(f"Self loop at vertex {v} (diagonal must be 0)", pair=(v, v))

    asymmetric = np.argwhere(cost != cost.T)
    if len(asymmetric):
        u, v = (int(x) for x in asymmetric[0])
        raise InvalidGraph(
            f"Cannot solve directed graphs: cost[{u}][{v}]={cost[u, v]} "
            f"but cost[{v}][{u}]={cost[v, u]}",
            pair=(u, v),
        )


def is_symmetric(cost: np.ndarray) -> bool:
    return cost.ndim == 2 and cost.shape[0] == cost.shape[1] and bool((cost == cost.T).all())


def degrees(cost: np.ndarray) -> np.ndarray:
    """Number of adjacent (non-sentinel, non-zero) entries in each row."""
    return edge_mask(cost).sum(axis=1)


def find_odd_vertices(cost: np.ndarray) -> Tuple[int, ...]:
    """
    Find all vertices with odd degree, in ascending order.

    Every odd vertex needs exactly one extra (virtual) edge before a closed
    walk can use each edge once. By the handshake lemma there is always an
    even number of them.
    """
    return tuple(int(v) for v in np.flatnonzero(degrees(cost) % 2 == 1))


def is_eulerian(cost: np.ndarray) -> bool:
    """
    True if the graph is undirected and has no odd vertices.

    Purely informational: an empty odd-vertex set makes the matching stage a
    no-op anyway.
    """
    n = len(cost)
    if n == 0:
        return False
    if n < 2:
        return True
    if not is_symmetric(cost):
        return False
    return not find_odd_vertices(cost)


def edge_list(cost: np.ndarray) -> List[Tuple[int, int, float]]:
    """Undirected edges as (u, v, cost) with u < v."""
    rows, cols = np.nonzero(np.triu(edge_mask(cost), k=1))
    return [(int(u), int(v), float(cost[u, v])) for u, v in zip(rows, cols)]


def adjacency_matrix(cost: np.ndarray) -> np.ndarray:
    """0/1 matrix, 1 where an edge exists."""
    adjacency = edge_mask(cost).astype(int)
    np.fill_diagonal(adjacency, 0)
    return adjacency


def basic_cost(cost: np.ndarray) -> float:
    """Total cost of traversing every edge exactly once."""
    return float(sum(w for _u, _v, w in edge_list(cost)))
