from __future__ import annotations

import json

from postman.cli import main


def test_cli_json(data_dir, capsys) -> None:
    assert main([str(data_dir / "example_3.csv"), "--json", "-q"]) == 0
    result = json.loads(capsys.readouterr().out)
    assert result["total_cost"] == 33
    assert result["basic_cost"] == 26
    assert result["odd_vertices"] == [1, 3, 5, 7]
    assert result["matching"] == [[1, 5], [3, 7]]
    assert result["circuit"][0] == result["circuit"][-1] == 0


def test_cli_matrix_and_dot(data_dir, tmp_path, capsys) -> None:
    graph_dot = tmp_path / "graph.dot"
    circuit_dot = tmp_path / "circuit.dot"
    code = main([
        str(data_dir / "square_matrix.csv"), "--format", "matrix", "--start", "2",
        "--backend", "scipy", "--dot-graph", str(graph_dot), "--dot-circuit", str(circuit_dot), "-q",
    ])
    assert code == 0
    out = capsys.readouterr().out
    assert out.startswith("Circuit: 2 -> ")
    assert "Total cost: 18" in out
    assert graph_dot.read_text(encoding="utf-8").startswith("graph G {")
    assert circuit_dot.read_text(encoding="utf-8").count("->") == 7


def test_cli_rejects_directed_graph(tmp_path) -> None:
    path = tmp_path / "directed.csv"
    path.write_text("0,1\n2,0\n", encoding="utf-8")
    assert main([str(path), "--format", "matrix", "-q"]) == 2


def test_cli_too_many_odd_vertices(tmp_path) -> None:
    # fan around vertex 0: leaves 3 and 4 have odd degree
    path = tmp_path / "star.csv"
    path.write_text("0,1,1\n0,2,1\n0,3,1\n0,4,1\n1,2,1\n", encoding="utf-8")
    assert main([str(path), "--max-odd", "0", "-q"]) == 2
    assert main([str(path), "--max-odd", "0", "--fallback", "greedy", "-q"]) == 0


def test_cli_missing_file(tmp_path) -> None:
    assert main([str(tmp_path / "missing.csv"), "-q"]) == 2


def test_cli_invalid_option_value(data_dir) -> None:
    assert main([str(data_dir / "example_1.csv"), "--max-odd", "-1", "-q"]) == 2


def test_cli_unwritable_circuit_dot(data_dir, tmp_path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    code = main([str(data_dir / "example_1.csv"), "--dot-circuit", str(blocker / "c.dot"), "-q"])
    assert code == 2


def test_cli_zero_no_edge_matrix(tmp_path, capsys) -> None:
    path = tmp_path / "square.csv"
    path.write_text("0,1,5,4\n1,0,2,0\n5,2,0,3\n4,0,3,0\n", encoding="utf-8")
    assert main([str(path), "--format", "matrix", "--no-edge", "0", "-q"]) == 0
    assert "Total cost: 18" in capsys.readouterr().out
