"""Spelling suggestions for names that failed to resolve."""

from __future__ import annotations

from typing import Iterable, List, Optional


def levenshtein(a: str, b: str) -> int:
    """Edit distance using a single rolling row."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    row = list(range(len(b) + 1))
    for i in range(1, len(a) + 1):
        prev_diagonal = row[0]
        row[0] = i
        for j in range(1, len(b) + 1):
            current = row[j]
            cost = 0 if a[i - 1] == b[j - 1] else 1
            row[j] = min(row[j] + 1, row[j - 1] + 1, prev_diagonal + cost)
            prev_diagonal = current
    return row[len(b)]


def max_distance(name: str) -> int:
    if len(name) <= 3:
        return 1
    if len(name) <= 6:
        return 2
    return 3


def suggest_name(name: str, candidates: Iterable[str]) -> Optional[str]:
    """
    Pick the closest visible name for an unresolved identifier.

    A unique case-insensitive match wins outright. Otherwise the candidate
    with the smallest edit distance within the length-dependent bound is
    chosen; candidates are scanned in sorted order so ties resolve the same
    way on every run.
    """
    ordered: List[str] = sorted(set(candidates) - {name})

    lowered = name.lower()
    case_matches = [candidate for candidate in ordered if candidate.lower() == lowered]
    if len(case_matches) == 1:
        return case_matches[0]

    bound = max_distance(name)
    best: Optional[str] = None
    best_distance = bound + 1
    for candidate in ordered:
        if abs(len(candidate) - len(name)) > bound:
            continue
        distance = levenshtein(name, candidate)
        if distance < best_distance:
            best, best_distance = candidate, distance
    return best


__all__ = ["levenshtein", "max_distance", "suggest_name"]
