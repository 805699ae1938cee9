"""
Reading graphs from delimited text into cost matrices.

Two layouts are understood:

- edge lists, one edge per line: ``u,v,cost`` or ``label,u,v,cost``
  (an optional header line is skipped, vertices are 0-based);
- full square cost matrices, one row per line, where an empty cell, ``inf``
  or a caller-chosen value means "no edge".

Commas and semicolons both work as delimiters; ``#`` starts a comment.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from .errors import GraphFormatError
from .graph import NO_EDGE, as_cost_matrix

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
_DELIMITER = r"\s*[,;]\s*"
_EMPTY_CELLS = ("", "-", "inf", "Inf", "INF", "∞")


def _read_cells(path: PathLike) -> pd.DataFrame:
    try:
        cells = pd.read_csv(
            path,
            header=None,
            sep=_DELIMITER,
            engine="python",
            comment="#",
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
        return cells.apply(lambda column: column.str.strip())
    except pd.errors.EmptyDataError:
        raise GraphFormatError(f"No data in {str(path)!r}") from None
    except pd.errors.ParserError as exc:
        raise GraphFormatError(f"{exc} in {str(path)!r}") from None


def edges_to_matrix(edges: Iterable[Tuple[int, int, float]], num_vertices: int) -> np.ndarray:
    """
    Build a cost matrix from (u, v, cost) edges.

    Parallel edges keep the cheaper cost: a closed walk that has to cover the
    pair once never gains from the more expensive copy.

    Raises:
    -------
    GraphFormatError: self loops, costs that are not positive and finite, ids outside
        0..num_vertices-1
    """
    if num_vertices <= 0:
        raise GraphFormatError("Graph is empty")

    cost = np.full((num_vertices, num_vertices), NO_EDGE)
    np.fill_diagonal(cost, 0)
    parallel = 0

    for u, v, w in edges:
        if not (0 <= u < num_vertices and 0 <= v < num_vertices):
            raise GraphFormatError(
                f"Edge ({u}, {v}) outside the {num_vertices} declared vertices"
            )
        if u == v:
            raise GraphFormatError(f"Self loop at vertex {u}")
        if not 0 < w < NO_EDGE:
            raise GraphFormatError(f"Edge ({u}, {v}) must have a positive finite cost, got {w}")

        if cost[u, v] == NO_EDGE:
            cost[u, v] = cost[v, u] = w
        else:
            parallel += 1
            if w < cost[u, v]:
                cost[u, v] = cost[v, u] = w

    if parallel:
        logger.info("Note: merged %d parallel edges (kept the cheapest)", parallel)
    return cost


def read_edge_list(path: PathLike, num_vertices: Optional[int] = None) -> np.ndarray:
    """
    Read an edge list CSV into a cost matrix.

    Parameters:
    -----------
    path: CSV file with columns u, v, cost (or label, u, v, cost)
    num_vertices: declared vertex count; defaults to the largest id + 1

    Returns:
    --------
    cost: np.ndarray
    """
    cells = _read_cells(path)
    name = str(path)

    if cells.shape[1] not in (3, 4):
        raise GraphFormatError(
            f"{name!r} has {cells.shape[1]} columns! Accepted columns are: "
            f"u, v, cost or label, u, v, cost"
        )
    if cells.shape[1] == 4:
        cells = cells.iloc[:, 1:]
    cells.columns = ["u", "v", "cost"]

    # Header line: no numeric cell at all, otherwise a malformed first edge
    if pd.to_numeric(cells.iloc[0], errors="coerce").isna().all():
        cells = cells.iloc[1:]

    values = cells.apply(pd.to_numeric, errors="coerce")
    bad = values.isna().any(axis=1) | (values[["u", "v"]] % 1 != 0).any(axis=1)
    if bad.any():
        row = cells[bad].iloc[0]
        raise GraphFormatError(f"Invalid edge {list(row)} in {name!r}")
    if values.empty:
        raise GraphFormatError(f"No edges in {name!r}")

    edges: List[Tuple[int, int, float]] = [
        (int(u), int(v), float(w))
        for u, v, w in values.itertuples(index=False, name=None)
    ]
    if num_vertices is None:
        num_vertices = max(max(u, v) for u, v, _w in edges) + 1

    try:
        cost = edges_to_matrix(edges, num_vertices)
    except GraphFormatError as exc:
        raise GraphFormatError(f"{exc} in {name!r}") from None

    logger.info("Read %d edges over %d vertices from %s", len(edges), num_vertices, name)
    return cost


def read_cost_matrix(path: PathLike, no_edge: Optional[float] = None) -> np.ndarray:
    """
    Read a square cost matrix CSV.

    Empty cells, "-" and "inf" mean no edge, and so does any cell equal to
    no_edge when it is given.
    """
    cells = _read_cells(path)
    name = str(path)

    if cells.shape[0] != cells.shape[1]:
        raise GraphFormatError(f"{name!r} is not a square matrix: {cells.shape}")

    values = np.empty(cells.shape)
    for (i, j), cell in np.ndenumerate(cells.to_numpy()):
        cell = cell.strip()
        if cell in _EMPTY_CELLS:
            values[i, j] = NO_EDGE
            continue
        try:
            values[i, j] = float(cell)
        except ValueError:
            raise GraphFormatError(f"Invalid cost {cell!r} at row {i}, column {j} in {name!r}") from None

    logger.info("Read %dx%d cost matrix from %s", len(values), len(values), name)
    return as_cost_matrix(values, no_edge=no_edge)
