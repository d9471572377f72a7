# cellunits/units/utils.py
from __future__ import annotations

from typing import Iterable, List


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance between two symbols."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        cur = [i]
        for j, cb in enumerate(b, start=1):
            cur.append(min(
                prev[j] + 1,              # deletion
                cur[j - 1] + 1,           # insertion
                prev[j - 1] + (ca != cb), # substitution
            ))
        prev = cur
    return prev[-1]


def closest_symbols(
    symbol: str,
    candidates: Iterable[str],
    max_distance: int = 2,
    limit: int = 5,
) -> List[str]:
    """
    Catalog symbols within ``max_distance`` edits of ``symbol``, nearest first.
    A case-insensitive exact hit counts as distance 0. May be empty.
    """
    if not symbol:
        return []
    folded = symbol.casefold()
    scored = []
    for cand in set(candidates):
        if cand == symbol:
            continue
        d = 0 if cand.casefold() == folded else edit_distance(symbol, cand)
        # short symbols: one edit turns almost anything into anything
        if d <= max_distance and d < max(len(symbol), len(cand)):
            scored.append((d, len(cand), cand))
    scored.sort()
    return [c for _, _, c in scored[:limit]]
