"""Solve the route inspection problem for a graph stored in a CSV file.

Usage:
  postman data/example_3.csv
  postman data/square.csv --format matrix --start 2 --dot-circuit out/circuit.dot
  python -m postman data/example_1.csv --json
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from .cfg import CFG
from .dataio import read_cost_matrix, read_edge_list
from .errors import PostmanError
from .render import circuit_to_dot, matrix_to_dot, write_dot
from .solver import ChinesePostmanSolver

logger = logging.getLogger(__name__)


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="postman", description="Chinese Postman / route inspection solver")
    ap.add_argument("graph", help="CSV file with the graph")
    ap.add_argument("--format", choices=["edges", "matrix"], default="edges",
                    help="edges: u,v,cost lines; matrix: square cost matrix")
    ap.add_argument("--vertices", type=int, default=None, help="declared vertex count (edge lists)")
    ap.add_argument("--no-edge", type=float, default=None, help="matrix value meaning 'no edge'")
    ap.add_argument("--start", type=int, default=0, help="start (and end) vertex of the tour")

    ap.add_argument("--backend", choices=["numpy", "scipy"], default="numpy")
    ap.add_argument("--max-odd", type=int, default=CFG.MAX_EXACT_ODD_VERTICES,
                    help="largest odd-vertex set matched exactly")
    ap.add_argument("--fallback", choices=["raise", "warn", "greedy"], default=CFG.MATCHING_FALLBACK,
                    help="what to do with more odd vertices than --max-odd")
    ap.add_argument("--print-matrices", action="store_true", help="log cost and distance matrices")

    ap.add_argument("--dot-graph", default=None, help="write the input graph as DOT")
    ap.add_argument("--dot-circuit", default=None, help="write the tour as DOT")
    ap.add_argument("--json", action="store_true", help="print the result as JSON")
    ap.add_argument("-v", "--verbose", action="count", default=0)
    ap.add_argument("-q", "--quiet", action="store_true")
    return ap


def configure_logging(verbosity: int, quiet: bool = False) -> None:
    level = logging.INFO
    if quiet:
        level = logging.WARNING
    elif verbosity >= 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s | %(levelname)s | %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_argparser().parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    cfg = CFG()
    cfg.SHORTEST_PATH_BACKEND = args.backend
    cfg.MAX_EXACT_ODD_VERTICES = args.max_odd
    cfg.MATCHING_FALLBACK = args.fallback
    cfg.PRINT_MATRICES = args.print_matrices

    try:
        if args.format == "matrix":
            cost = read_cost_matrix(args.graph, no_edge=args.no_edge)
        else:
            cost = read_edge_list(args.graph, num_vertices=args.vertices)

        if args.dot_graph:
            write_dot(matrix_to_dot(cost), args.dot_graph)

        solution = ChinesePostmanSolver(cost, cfg).run(args.start)

        if args.dot_circuit:
            write_dot(circuit_to_dot(solution.circuit, cost), args.dot_circuit)
    except (PostmanError, ValueError, OSError) as exc:
        logger.error("%s", exc)
        return 2

    if args.json:
        print(json.dumps({
            "circuit": list(solution.circuit),
            "total_cost": solution.total_cost,
            "basic_cost": solution.basic_cost,
            "deadhead_cost": solution.deadhead_cost,
            "odd_vertices": list(solution.odd_vertices),
            "matching": [list(pair) for pair in solution.matching],
        }))
    else:
        print("Circuit: " + " -> ".join(str(v) for v in solution.circuit))
        print(f"Total cost: {solution.total_cost:g}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
