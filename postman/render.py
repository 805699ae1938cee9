"""
Graphviz DOT text for graphs and solved circuits.

Only the DOT source is produced; turning it into an image is left to the
Graphviz tools (``dot -Tpng graph.dot -o graph.png``).
"""
import logging
from pathlib import Path
from typing import Sequence, Union

import numpy as np

from .graph import adjacency_matrix

logger = logging.getLogger(__name__)


def _fmt(value: float) -> str:
    return f"{value:g}"


def matrix_to_dot(cost: np.ndarray, name: str = "G") -> str:
    """Undirected graph with one edge per adjacent pair, labelled with its cost."""
    lines = [f"graph {name} {{"]
    for v in range(len(cost)):
        lines.append(f"  {v};")
    adjacency = adjacency_matrix(cost)
    for u in range(len(cost)):
        for v in range(u + 1, len(cost)):
            if adjacency[u, v] == 1:
                lines.append(f'  {u} -- {v} [label="{_fmt(cost[u, v])}"];')
    lines.append("}")
    return "\n".join(lines) + "\n"


def circuit_to_dot(circuit: Sequence[int], cost: np.ndarray, name: str = "circuit") -> str:
    """
    Directed graph of the walk; every step is labelled with its position in
    the tour and its cost, so repeated edges show up as parallel arcs.
    """
    lines = [f"digraph {name} {{"]
    if circuit:
        lines.append(f"  {circuit[0]} [shape=doublecircle];")
    for step, (u, v) in enumerate(zip(circuit[:-1], circuit[1:]), start=1):
        lines.append(f'  {u} -> {v} [label="{step}: {_fmt(cost[u, v])}"];')
    lines.append("}")
    return "\n".join(lines) + "\n"


def write_dot(text: str, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    logger.info("Wrote %s", path)
    return path
