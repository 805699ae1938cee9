"""
Eulerian circuit construction on the augmented multigraph (Hierholzer).
"""
import logging
from typing import List, Optional, Tuple

import numpy as np

from .errors import CircuitError, InvalidGraph
from .multigraph import AugmentedMultigraph, Edge, VirtualEdge

logger = logging.getLogger(__name__)


def find_unvisited_edge(multigraph: AugmentedMultigraph, vertex: int,
                        visited: np.ndarray) -> Optional[Tuple[int, Edge]]:
    """First (neighbour, edge) incident to vertex not consumed yet, or None."""
    for v, edge in multigraph.edges(vertex):
        if not visited[vertex, v, edge.layer]:
            return v, edge
    return None


def hierholzer(multigraph: AugmentedMultigraph, start_vertex: int) -> List[int]:
    """
    Find an Eulerian circuit of the multigraph, expanded into real vertices.

    HIERHOLZER'S ALGORITHM:
    1. The circuit starts as [start_vertex]
    2. Find the first vertex on the circuit that still has an unused edge;
       stop if there is none
    3. From that vertex follow unused edges, marking them as used, until the
       walk gets back to where it started (a closed sub-tour)
    4. Splice the sub-tour into the circuit in place of that vertex, go to 2

    A real edge adds its far endpoint to the sub-tour. A virtual edge adds
    its whole shortest path instead, so the returned circuit only ever steps
    along edges of the original graph.

    Every vertex has even degree across both layers, so step 3 can only stop
    at its own starting vertex.

    Parameters:
    -----------
    multigraph : AugmentedMultigraph
        Graph where every vertex has even degree
    start_vertex : int
        First and last vertex of the circuit

    Returns:
    --------
    circuit : list
        Vertex indices, circuit[0] == circuit[-1] == start_vertex
    """
    n = multigraph.num_vertices
    if not 0 <= start_vertex < n:
        raise InvalidGraph(f"Start vertex {start_vertex} is not in the graph (0..{n - 1})")

    # visited[u][v][layer], consumed in both directions at once
    visited = np.zeros((n, n, 2), dtype=bool)
    circuit = [start_vertex]
    edges_used = 0

    while True:
        index = None
        for i, vertex in enumerate(circuit):
            if find_unvisited_edge(multigraph, vertex, visited) is not None:
                index = i
                break

        if index is None:
            break

        current = circuit[index]
        new_circle = [current]

        while True:
            found = find_unvisited_edge(multigraph, current, visited)
            if found is None:
                raise CircuitError(
                    f"Dead end at vertex {current} while closing a tour from {new_circle[0]}"
                )
            v, edge = found

            if isinstance(edge, VirtualEdge):
                new_circle.extend(edge.path[1:])
            else:
                new_circle.append(v)

            visited[current, v, edge.layer] = True
            visited[v, current, edge.layer] = True
            edges_used += 1
            current = v

            if new_circle[0] == new_circle[-1]:
                break

        logger.debug("Splicing sub-tour of %d vertices at position %d", len(new_circle), index)
        circuit[index:index + 1] = new_circle

    logger.info("Circuit found with %d vertices (%d edges used)", len(circuit), edges_used)
    return circuit
