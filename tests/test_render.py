from __future__ import annotations

from postman.render import circuit_to_dot, matrix_to_dot, write_dot


def test_matrix_to_dot(square) -> None:
    dot = matrix_to_dot(square)
    assert dot.startswith("graph G {")
    assert '  0 -- 2 [label="5"];' in dot
    assert "1 -- 3" not in dot
    assert dot.count("--") == 5


def test_circuit_to_dot(square) -> None:
    dot = circuit_to_dot([0, 1, 2, 0], square)
    assert dot.startswith("digraph circuit {")
    assert "0 [shape=doublecircle];" in dot
    assert '  2 -> 0 [label="3: 5"];' in dot
    assert dot.count("->") == 3


def test_write_dot(tmp_path) -> None:
    path = write_dot("graph G {}\n", tmp_path / "out" / "g.dot")
    assert path.read_text(encoding="utf-8") == "graph G {}\n"


def test_matrix_to_dot_follows_adjacency(grid) -> None:
    dot = matrix_to_dot(grid)
    assert dot.count("--") == 12
    assert '  4 -- 7 [label="1"];' in dot
    assert "0 -- 4" not in dot
