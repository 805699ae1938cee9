"""
Pairing up odd-degree vertices at minimum total shortest-path distance.
"""
import logging
from typing import Iterable, Iterator, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .cfg import CFG
from .errors import MalformedGraph, TooManyOddVertices

logger = logging.getLogger(__name__)

Pair = Tuple[int, int]
Matching = Tuple[Pair, ...]


class MatchingResult(NamedTuple):
    matching: Matching
    cost: float
    candidates: int     # number of matchings scored


def count_matchings(k: int) -> int:
    """Number of perfect matchings of k vertices: (k-1)!! (1 for k == 0)."""
    if k % 2:
        return 0
    count = 1
    for i in range(k - 1, 0, -2):
        count *= i
    return count


def generate_all_matchings(vertices: Sequence[int]) -> Iterator[Matching]:
    """
    Generate every way to pair up the vertices.

    Takes the first vertex, pairs it in turn with each remaining vertex and
    recurses on what is left. The order is fixed by the input order, so the
    first matching yielded is ((v0, v1), (v2, v3), ...).

    Each matching is a fresh tuple of pairs; nothing is shared between the
    yielded values.

    Raises:
    -------
    MalformedGraph: odd number of vertices
    """
    vertices = tuple(vertices)
    if len(vertices) % 2:
        raise MalformedGraph(
            f"Cannot pair up an odd number of vertices ({len(vertices)}): {list(vertices)}"
        )
    return _pairings(vertices)


def _pairings(vertices: Tuple[int, ...]) -> Iterator[Matching]:
    if not vertices:
        yield ()
        return
    first = vertices[0]
    rest = vertices[1:]
    for i, partner in enumerate(rest):
        pair = (first, partner)
        remaining = rest[:i] + rest[i + 1:]
        for sub_matching in _pairings(remaining):
            yield (pair,) + sub_matching


def matching_cost(matching: Matching, distance: np.ndarray) -> float:
    return float(sum(distance[a, b] for a, b in matching))


def select_minimum_matching(matchings: Iterable[Matching], distance: np.ndarray) -> MatchingResult:
    """
    Score every candidate and keep the cheapest.

    Ties keep the matching seen first. An empty odd-vertex set produces a
    single empty candidate, so the result is the empty matching at cost 0.
    """
    best_matching: Optional[Matching] = None
    best_cost = float('inf')
    candidates = 0

    for matching in matchings:
        candidates += 1
        cost = matching_cost(matching, distance)
        if cost < best_cost:
            best_cost = cost
            best_matching = matching

    if best_matching is None:
        return MatchingResult((), 0.0, candidates)
    return MatchingResult(best_matching, best_cost, candidates)


def greedy_matching(vertices: Sequence[int], distance: np.ndarray) -> MatchingResult:
    """
    Look-ahead greedy pairing for odd-vertex sets too big to enumerate.

    Instead of just picking the closest pair each time, every candidate pair
    is scored as its own distance plus half the mean distance from each
    vertex that would be left over to its nearest left-over neighbour.
    The pair with the lowest score is fixed and the process repeats.

    Not guaranteed to be minimal.
    """
    if len(vertices) % 2:
        raise MalformedGraph(f"Cannot pair up an odd number of vertices ({len(vertices)})")

    remaining = sorted(vertices)
    matching = []
    candidates = 0

    while remaining:
        best_score = float('inf')
        best_pair = None

        for i, v1 in enumerate(remaining):
            for v2 in remaining[i + 1:]:
                candidates += 1
                score = distance[v1, v2]

                # Penalty if this pairing leaves other vertices with poor options
                left_over = [v for v in remaining if v != v1 and v != v2]
                if len(left_over) >= 2:
                    nearest = [
                        min(distance[v, u] for u in left_over if u != v)
                        for v in left_over
                    ]
                    score += np.mean(nearest) * 0.5

                if score < best_score:
                    best_score = score
                    best_pair = (v1, v2)

        matching.append(best_pair)
        remaining.remove(best_pair[0])
        remaining.remove(best_pair[1])

    result = tuple(matching)
    return MatchingResult(result, matching_cost(result, distance), candidates)


def find_minimum_weight_matching(
    odd_vertices: Sequence[int],
    distance: np.ndarray,
    cfg: Optional[CFG] = None,
) -> MatchingResult:
    """
    Find the best way to pair up the odd-degree vertices.

    For k odd vertices the exact search scores (k-1)!! matchings, so it is
    bounded by cfg.MAX_EXACT_ODD_VERTICES. Above that bound
    cfg.MATCHING_FALLBACK decides: refuse, warn and search anyway, or fall
    back to greedy_matching().

    Parameters:
    -----------
    odd_vertices : sequence
        Vertices with odd degree (even count)
    distance : np.ndarray
        All-pairs shortest-path distances

    Returns:
    --------
    MatchingResult(matching, cost, candidates)
    """
    cfg = cfg or CFG()
    n_odd = len(odd_vertices)

    if n_odd > cfg.MAX_EXACT_ODD_VERTICES:
        if cfg.MATCHING_FALLBACK == "greedy":
            logger.info("Finding matching for %d odd vertices using look-ahead greedy...", n_odd)
            result = greedy_matching(odd_vertices, distance)
            _log_matching(result, distance)
            return result
        if cfg.MATCHING_FALLBACK != "warn":
            raise TooManyOddVertices(n_odd, cfg.MAX_EXACT_ODD_VERTICES)
        logger.warning(
            "%d odd vertices exceed the limit of %d, scoring all %d matchings anyway",
            n_odd, cfg.MAX_EXACT_ODD_VERTICES, count_matchings(n_odd),
        )

    logger.info("Finding optimal matching for %d odd vertices...", n_odd)
    result = select_minimum_matching(generate_all_matchings(odd_vertices), distance)
    _log_matching(result, distance)
    return result


def _log_matching(result: MatchingResult, distance: np.ndarray) -> None:
    for v1, v2 in result.matching:
        logger.info("  Matched %d <-> %d (distance: %g)", v1, v2, distance[v1, v2])
    logger.debug("Matching cost %g after %d candidates", result.cost, result.candidates)
