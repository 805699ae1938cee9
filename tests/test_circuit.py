from __future__ import annotations

import pytest

from postman.circuit import hierholzer
from postman.errors import CircuitError, InvalidGraph
from postman.multigraph import AugmentedMultigraph, RealEdge, VirtualEdge, augment
from postman.shortest_paths import floyd_warshall


def test_augment_adds_one_virtual_edge_per_pair(square) -> None:
    paths = floyd_warshall(square)
    multigraph = augment(square, [(0, 2)], paths)

    assert multigraph.edge_count() == 6
    assert [e for v, e in multigraph.edges(0) if v == 2] == [RealEdge(5.0), VirtualEdge(3.0, (0, 1, 2))]
    assert [e for v, e in multigraph.edges(2) if v == 0] == [RealEdge(5.0), VirtualEdge(3.0, (2, 1, 0))]
    assert [(u, v, e.cost) for u, v, e in multigraph.virtual_edges()] == [(0, 2, 3.0)]
    assert all(multigraph.degree(v) % 2 == 0 for v in range(4))


def test_edges_ordered_by_neighbour_then_layer(square) -> None:
    multigraph = augment(square, [(0, 2)], floyd_warshall(square))
    order = [(v, edge.layer) for v, edge in multigraph.edges(0)]
    assert order == [(1, 0), (2, 0), (2, 1), (3, 0)]


def test_duplicate_layer_rejected() -> None:
    multigraph = AugmentedMultigraph(2)
    multigraph.add_real_edge(0, 1, 1.0)
    with pytest.raises(ValueError):
        multigraph.add_real_edge(1, 0, 1.0)


def test_hierholzer_triangle() -> None:
    multigraph = AugmentedMultigraph(3)
    for u, v in [(0, 1), (1, 2), (0, 2)]:
        multigraph.add_real_edge(u, v, 1.0)
    assert hierholzer(multigraph, 0) == [0, 1, 2, 0]
    assert hierholzer(multigraph, 2) == [2, 0, 1, 2]


def test_hierholzer_splices_sub_tours_and_expands_virtual_edges(square) -> None:
    multigraph = augment(square, [(0, 2)], floyd_warshall(square))
    # first tour 0-1-2-0 over real edges, then 0 =virtual=> 2 -3-0 spliced in at 0
    assert hierholzer(multigraph, 0) == [0, 1, 2, 3, 0, 1, 2, 0]


def test_hierholzer_splice_in_the_middle() -> None:
    # bow tie: two triangles sharing vertex 2
    multigraph = AugmentedMultigraph(5)
    for u, v in [(0, 1), (1, 2), (0, 2), (2, 3), (3, 4), (2, 4)]:
        multigraph.add_real_edge(u, v, 1.0)
    assert hierholzer(multigraph, 0) == [0, 1, 2, 3, 4, 2, 0]


def test_hierholzer_single_vertex() -> None:
    assert hierholzer(AugmentedMultigraph(1), 0) == [0]


def test_hierholzer_dead_end_on_odd_degree() -> None:
    multigraph = AugmentedMultigraph(2)
    multigraph.add_real_edge(0, 1, 1.0)
    with pytest.raises(CircuitError):
        hierholzer(multigraph, 0)


def test_hierholzer_start_outside_graph() -> None:
    with pytest.raises(InvalidGraph):
        hierholzer(AugmentedMultigraph(2), 5)


def test_augment_logs_virtual_edges(square, caplog) -> None:
    with caplog.at_level("INFO", logger="postman.multigraph"):
        augment(square, [(2, 0)], floyd_warshall(square))
    assert "Virtual edge 0-2 via 0 -> 1 -> 2 (length: 3)" in caplog.text
