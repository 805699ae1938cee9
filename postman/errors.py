"""
Exceptions raised by the route inspection solver.

Every failure is a hard precondition violation on the input graph; nothing
here is transient and nothing is retried.
"""
from typing import Optional, Tuple


class PostmanError(Exception):
    """Base class for all solver errors."""


class InvalidGraph(PostmanError, ValueError):
    """
    The cost matrix cannot be solved by this engine: it is empty, not square,
    has negative or NaN entries, or is not symmetric (i.e. not undirected).
    """

    def __init__(self, message: str, pair: Optional[Tuple[int, int]] = None):
        super().__init__(message)
        self.pair = pair


class Disconnected(PostmanError):
    """Some vertex pair is unreachable, so no closed walk covers every edge."""

    def __init__(self, message: str, pair: Optional[Tuple[int, int]] = None):
        super().__init__(message)
        self.pair = pair


class MalformedGraph(PostmanError):
    """The odd-degree vertex count is odd, which the handshake lemma forbids."""


class TooManyOddVertices(PostmanError):
    """The exact matching search was refused above the configured ceiling."""

    def __init__(self, count: int, limit: int):
        super().__init__(
            f"{count} odd vertices exceed the exact matching limit of {limit} "
            f"({count - 1}!! candidate matchings)"
        )
        self.count = count
        self.limit = limit


class CircuitError(PostmanError):
    """An internal circuit invariant was broken (dead end or non-adjacent hop)."""


class GraphFormatError(PostmanError, ValueError):
    """A graph file could not be turned into a cost matrix."""
