"""
Edit distance helpers shared by the speller and the ranker.
"""

from __future__ import annotations


def levenshtein_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein edit distance between two strings."""
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)

    if len(s2) == 0:
        return len(s1)

    previous_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


def next_row(previous_row: list[int], char: str, word: str) -> list[int]:
    """
    Compute the next row of the Levenshtein matrix for ``word``.

    Used by trie searches, where each trie edge appends ``char`` to the
    prefix whose row is ``previous_row``.
    """
    row = [previous_row[0] + 1]
    for j, target in enumerate(word):
        row.append(
            min(
                previous_row[j + 1] + 1,  # deletion
                row[j] + 1,  # insertion
                previous_row[j] + (target != char),  # substitution
            )
        )
    return row


def bounded_distance(s1: str, s2: str, max_distance: int) -> int | None:
    """
    Levenshtein distance, or None once it is certain to exceed ``max_distance``.
    """
    if abs(len(s1) - len(s2)) > max_distance:
        return None

    row = list(range(len(s2) + 1))
    for c1 in s1:
        row = next_row(row, c1, s2)
        if min(row) > max_distance:
            return None

    return row[-1] if row[-1] <= max_distance else None
