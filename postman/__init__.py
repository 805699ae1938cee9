"""
Route inspection (Chinese Postman Problem) for undirected weighted graphs.

    >>> from postman import solve
    >>> solve([[0, 1, 1], [1, 0, 1], [1, 1, 0]], 0)
    [0, 1, 2, 0]
"""
from .cfg import CFG
from .errors import (CircuitError, Disconnected, GraphFormatError, InvalidGraph,
                     MalformedGraph, PostmanError, TooManyOddVertices)
from .graph import NO_EDGE, as_cost_matrix, find_odd_vertices, is_eulerian
from .solver import ChinesePostmanSolver, Solution, circuit_cost, solve

__all__ = [
    "CFG",
    "NO_EDGE",
    "ChinesePostmanSolver",
    "CircuitError",
    "Disconnected",
    "GraphFormatError",
    "InvalidGraph",
    "MalformedGraph",
    "PostmanError",
    "Solution",
    "TooManyOddVertices",
    "as_cost_matrix",
    "circuit_cost",
    "find_odd_vertices",
    "is_eulerian",
    "solve",
]

__version__ = "1.0.0"
