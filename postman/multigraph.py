"""
The augmented multigraph: original edges plus one virtual edge per matched pair.
"""
import logging
from dataclasses import dataclass
from typing import ClassVar, Dict, Iterator, List, Sequence, Tuple, Union

import numpy as np

from .graph import edge_list
from .shortest_paths import ShortestPaths, reconstruct_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RealEdge:
    """An edge of the original cost matrix."""
    cost: float
    layer: ClassVar[int] = 0


@dataclass(frozen=True)
class VirtualEdge:
    """
    A matching edge between two odd vertices.

    It is not a direct connection: its cost is the shortest-path distance and
    `path` is the sequence of real vertices walked when it is traversed.
    """
    cost: float
    path: Tuple[int, ...]
    layer: ClassVar[int] = 1


Edge = Union[RealEdge, VirtualEdge]


class AugmentedMultigraph:
    """
    Undirected multigraph with at most one real and one virtual edge per pair.

    edges(u) yields (v, edge) for every edge incident to u, neighbours in
    ascending order and the real edge before the virtual one.
    """

    def __init__(self, num_vertices: int):
        self.num_vertices = num_vertices
        self._adjacency: List[Dict[int, List[Edge]]] = [{} for _ in range(num_vertices)]

    def _add(self, u: int, v: int, edge: Edge) -> None:
        parallel = self._adjacency[u].setdefault(v, [])
        if any(e.layer == edge.layer for e in parallel):
            raise ValueError(f"Layer {edge.layer} edge between {u} and {v} already exists")
        parallel.append(edge)
        parallel.sort(key=lambda e: e.layer)

    def add_real_edge(self, u: int, v: int, cost: float) -> None:
        self._add(u, v, RealEdge(cost))
        self._add(v, u, RealEdge(cost))

    def add_virtual_edge(self, u: int, v: int, cost: float,
                         path_uv: Sequence[int], path_vu: Sequence[int]) -> None:
        self._add(u, v, VirtualEdge(cost, tuple(path_uv)))
        self._add(v, u, VirtualEdge(cost, tuple(path_vu)))

    def edges(self, u: int) -> Iterator[Tuple[int, Edge]]:
        for v in sorted(self._adjacency[u]):
            for edge in self._adjacency[u][v]:
                yield v, edge

    def degree(self, u: int) -> int:
        return sum(len(parallel) for parallel in self._adjacency[u].values())

    def edge_count(self) -> int:
        return sum(self.degree(u) for u in range(self.num_vertices)) // 2

    def virtual_edges(self) -> List[Tuple[int, int, VirtualEdge]]:
        return [
            (u, v, edge)
            for u in range(self.num_vertices)
            for v, edge in self.edges(u)
            if u < v and isinstance(edge, VirtualEdge)
        ]


def augment(cost: np.ndarray, matching: Sequence[Tuple[int, int]],
            paths: ShortestPaths) -> AugmentedMultigraph:
    """
    Overlay the chosen matching onto the original edges.

    Every matched pair (a, b) gets one virtual edge carrying distance[a][b],
    so every odd vertex gains exactly one incident edge and all degrees
    become even.

    Parameters:
    -----------
    cost : np.ndarray
        Original cost matrix
    matching : sequence
        Pairs of matched odd-degree vertices
    paths : ShortestPaths
        Distances and next-hop table of the same graph

    Returns:
    --------
    multigraph : AugmentedMultigraph
    """
    multigraph = AugmentedMultigraph(len(cost))

    for u, v, w in edge_list(cost):
        multigraph.add_real_edge(u, v, w)

    for a, b in matching:
        path_ab = reconstruct_path(paths.next_hop, a, b)
        path_ba = reconstruct_path(paths.next_hop, b, a)
        multigraph.add_virtual_edge(a, b, float(paths.distance[a, b]), path_ab, path_ba)

    virtual = multigraph.virtual_edges()
    for a, b, edge in virtual:
        logger.info(
            "  Virtual edge %d-%d via %s (length: %g)",
            a, b, " -> ".join(map(str, edge.path)), edge.cost,
        )
    logger.debug("Augmented multigraph: %d edges (%d virtual)",
                 multigraph.edge_count(), len(virtual))
    return multigraph
