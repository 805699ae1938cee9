"""
Route inspection (Chinese Postman) solver.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from .cfg import CFG
from .circuit import hierholzer
from .errors import CircuitError, InvalidGraph, MalformedGraph
from .graph import (as_cost_matrix, basic_cost, edge_list, edge_mask,
                    find_odd_vertices, is_eulerian, validate_cost_matrix)
from .matching import Matching, find_minimum_weight_matching
from .multigraph import augment
from .shortest_paths import check_reachable, compute_shortest_paths

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Solution:
    circuit: Tuple[int, ...]
    total_cost: float
    basic_cost: float           # every edge walked once
    odd_vertices: Tuple[int, ...]
    matching: Matching
    matching_cost: float
    candidates: int             # matchings scored

    @property
    def deadhead_cost(self) -> float:
        """Cost of the edges walked more than once."""
        return self.total_cost - self.basic_cost

    @property
    def start_vertex(self) -> int:
        return self.circuit[0]


def circuit_cost(circuit: List[int], cost: np.ndarray) -> float:
    """
    Total cost of a walk against the original cost matrix.

    Every consecutive pair must be a real edge; path substitution guarantees
    this for circuits built by hierholzer(), and anything else is reported
    instead of being summed as infinity or zero.
    """
    mask = edge_mask(cost)
    total = 0.0
    for u, v in zip(circuit[:-1], circuit[1:]):
        if not mask[u, v]:
            raise CircuitError(f"Circuit steps from {u} to {v} but there is no such edge")
        total += cost[u, v]
    return float(total)


def edge_coverage(circuit: List[int], cost: np.ndarray) -> float:
    """Share of the original edges walked at least once by the circuit."""
    edges = {(u, v) for u, v, _w in edge_list(cost)}
    if not edges:
        return 1.0
    walked = {(min(u, v), max(u, v)) for u, v in zip(circuit[:-1], circuit[1:])}
    return len(edges & walked) / len(edges)


class ChinesePostmanSolver:
    """
    Minimum-cost closed walk over every edge of an undirected graph.

    THE ALGORITHM STEPS:
    1. Validate the cost matrix (square, non-negative, symmetric)
    2. Find the odd-degree vertices
    3. Compute all-pairs shortest paths; every pair must be reachable
    4. Pair up the odd vertices at minimum total shortest-path distance
    5. Add one virtual edge per pair, so every degree becomes even
    6. Walk the augmented graph with Hierholzer's algorithm, replacing each
       virtual edge by its shortest path
    7. Sum the cost of the walk against the original matrix

    The solver keeps only a private copy of the cost matrix and the
    configuration; every intermediate structure belongs to one solve() call,
    so one instance can serve several solves, also from different threads.
    """

    def __init__(self, cost_matrix, cfg: Optional[CFG] = None, no_edge: Optional[float] = None):
        """
        Parameters:
        -----------
        cost_matrix: square matrix, cost[u][v] the edge weight, 0 or NO_EDGE
            (or the given no_edge value) for non-adjacent pairs
        cfg: solver configuration (default: CFG())
        no_edge: caller-side sentinel for "no edge", mapped onto NO_EDGE

        Raises:
        -------
        InvalidGraph: the matrix is not a symmetric cost matrix
        """
        self.cfg = cfg or CFG()
        self.cfg.validate()
        self.cost_matrix = as_cost_matrix(cost_matrix, no_edge=no_edge)
        validate_cost_matrix(self.cost_matrix)
        self.cost_matrix.setflags(write=False)
        self.num_vertices = len(self.cost_matrix)

    def solve(self, start_vertex: int = 0) -> Solution:
        cost = self.cost_matrix
        if not 0 <= start_vertex < self.num_vertices:
            raise InvalidGraph(
                f"Start vertex {start_vertex} is not in the graph (0..{self.num_vertices - 1})"
            )
        logger.info("Graph order: %d, edges: %d", self.num_vertices, len(edge_list(cost)))
        logger.info("Eulerian: %s", is_eulerian(cost))

        odd_vertices = find_odd_vertices(cost)
        logger.info("Found %d odd-degree vertices: %s", len(odd_vertices), list(odd_vertices))
        if len(odd_vertices) % 2:
            raise MalformedGraph(
                f"Found an odd number of odd-degree vertices ({len(odd_vertices)})"
            )

        paths = compute_shortest_paths(cost, backend=self.cfg.SHORTEST_PATH_BACKEND)
        check_reachable(paths)

        if self.cfg.PRINT_MATRICES:
            self._print_matrix(cost, "Cost matrix")
            self._print_matrix(paths.distance, "Shortest path distances")

        result = find_minimum_weight_matching(odd_vertices, paths.distance, self.cfg)
        multigraph = augment(cost, result.matching, paths)
        circuit = hierholzer(multigraph, start_vertex)
        total = circuit_cost(circuit, cost)

        logger.info("Circuit: %s", circuit)
        logger.info("Total cost: %g", total)

        return Solution(
            circuit=tuple(circuit),
            total_cost=total,
            basic_cost=basic_cost(cost),
            odd_vertices=odd_vertices,
            matching=result.matching,
            matching_cost=result.cost,
            candidates=result.candidates,
        )

    def run(self, start_vertex: int = 0) -> Solution:
        """solve() plus a printed solution summary."""
        logger.info("=" * 60)
        logger.info("STARTING CHINESE POSTMAN PROBLEM ALGORITHM")
        logger.info("=" * 60)
        solution = self.solve(start_vertex)
        self._print_solution_summary(solution)
        return solution

    def _print_matrix(self, matrix: np.ndarray, title: str) -> None:
        """Log the top-left corner of a matrix as a table."""
        limit = self.cfg.PRINT_LIMIT
        corner = matrix[:limit, :limit]
        frame = pd.DataFrame(np.where(np.isfinite(corner), corner, np.nan))
        logger.info("%s:\n%s%s", title, frame.to_string(na_rep="∞"),
                    "\n..." if len(matrix) > limit else "")

    def _print_solution_summary(self, solution: Solution) -> None:
        coverage = edge_coverage(list(solution.circuit), self.cost_matrix)
        logger.info("=" * 60)
        logger.info("SOLUTION SUMMARY")
        logger.info("=" * 60)
        logger.info("Route: %d vertices, %d edges walked",
                    len(solution.circuit), len(solution.circuit) - 1)
        logger.info("Total cost: %g (basic %g + deadhead %g)",
                    solution.total_cost, solution.basic_cost, solution.deadhead_cost)
        logger.info("Matched pairs: %d (%d candidates scored)",
                    len(solution.matching), solution.candidates)
        logger.info("Coverage: %.1f%%", coverage * 100)
        logger.info("=" * 60)


def solve(cost_matrix, start_vertex: int = 0, cfg: Optional[CFG] = None) -> List[int]:
    """
    Minimum-cost closed walk covering every edge of the graph.

    Returns:
    --------
    circuit : list
        Vertex indices, first == last == start_vertex

    Raises:
    -------
    InvalidGraph: the matrix is not symmetric (or not a cost matrix)
    Disconnected: some vertex pair is unreachable
    """
    return list(ChinesePostmanSolver(cost_matrix, cfg).solve(start_vertex).circuit)
