# cfg.py
from dataclasses import dataclass


@dataclass
class CFG:
    # Matching
    # The exact search scores (k-1)!! pairings for k odd vertices:
    # k=10 -> 945, k=12 -> 10395, k=16 -> 2027025.
    MAX_EXACT_ODD_VERTICES: int = 10
    # What to do above the ceiling:
    # - "raise" : refuse with TooManyOddVertices
    # - "warn"  : log a warning and run the exact search anyway
    # - "greedy": look-ahead greedy pairing (not guaranteed minimal)
    MATCHING_FALLBACK: str = "raise"

    # Shortest paths: "numpy" (Floyd-Warshall, fixed tie-break) or "scipy"
    SHORTEST_PATH_BACKEND: str = "numpy"

    # Reporting
    PRINT_MATRICES: bool = False
    PRINT_LIMIT: int = 8        # rows/cols shown when printing matrices

    def validate(self) -> None:
        if self.MAX_EXACT_ODD_VERTICES < 0:
            raise ValueError("MAX_EXACT_ODD_VERTICES must be >= 0")
        if self.MATCHING_FALLBACK not in ("raise", "warn", "greedy"):
            raise ValueError(f"Unknown MATCHING_FALLBACK {self.MATCHING_FALLBACK!r}")
        if self.SHORTEST_PATH_BACKEND not in ("numpy", "scipy"):
            raise ValueError(f"Unknown SHORTEST_PATH_BACKEND {self.SHORTEST_PATH_BACKEND!r}")
