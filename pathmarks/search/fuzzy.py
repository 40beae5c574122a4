"""Subsequence fuzzy matching for bookmark labels.

A query matches a label when every query character appears in the label,
in order, ignoring case. Among all such alignments the best one is kept,
scored so that contiguous runs, short labels and early starts rank first.
"""

from dataclasses import dataclass

MATCH_SCORE = 16
ADJACENCY_BONUS = 10
START_PENALTY = 2
LENGTH_PENALTY = 1
EXACT_BONUS = 50


@dataclass(frozen=True)
class FuzzyMatch:
    score: int
    positions: tuple[int, ...]


def _fold(text: str) -> list[str]:
    # Per-character lowering keeps indexes aligned with the original text
    return [c.lower() for c in text]


def fuzzy_match(query: str, text: str) -> FuzzyMatch | None:
    """Score *text* against *query*; None when *query* is not a subsequence.

    An empty query matches everything with score 0.
    """
    if not query:
        return FuzzyMatch(0, ())

    q = _fold(query)
    t = _fold(text)
    m, n = len(q), len(t)
    if m > n:
        return None

    # best[j]: (alignment score, positions) with the current query char at j
    best: list[tuple[int, tuple[int, ...]] | None] = [
        (-START_PENALTY * j, (j,)) if t[j] == q[0] else None for j in range(n)
    ]

    for i in range(1, m):
        current: list[tuple[int, tuple[int, ...]] | None] = [None] * n
        running = None  # best of best[0..j-2]
        for j in range(1, n):
            if j >= 2 and best[j - 2] is not None:
                if running is None or best[j - 2][0] > running[0]:
                    running = best[j - 2]
            if t[j] != q[i]:
                continue
            choice = running
            adjacent = best[j - 1]
            if adjacent is not None:
                bonus = adjacent[0] + ADJACENCY_BONUS
                if choice is None or bonus >= choice[0]:
                    choice = (bonus, adjacent[1])
            if choice is not None:
                current[j] = (choice[0], choice[1] + (j,))
        best = current

    found = [entry for entry in best if entry is not None]
    if not found:
        return None
    alignment, positions = max(found, key=lambda entry: entry[0])

    score = MATCH_SCORE * m + alignment - LENGTH_PENALTY * (n - m)
    if q == t:
        score += EXACT_BONUS
    return FuzzyMatch(score, positions)


def fuzzy_filter(query: str, items: list[str]) -> list[int]:
    """Indexes of *items* matching *query*, best first, stable on ties."""
    scored = []
    for index, item in enumerate(items):
        match = fuzzy_match(query, item)
        if match is not None:
            scored.append((match.score, index))
    scored.sort(key=lambda pair: (-pair[0], pair[1]))
    return [index for _, index in scored]
