"""
Pattern matching over token sequences.

The matcher scans a sentence one start position at a time:

    SEARCHING --> MATCHING --+--> MATCHED (emit, resume after the span)
                             |
                             +--> FAILED  (resume at start + 1)

Each element consumes as many tokens as it can (greedy, up to its
maximum) and never gives them back. Optional elements that do not match
are skipped without consuming a token. An attempt that would consume no
token at all counts as a failure, so every start position is tried at
most once and matches never overlap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from langcheck.models import AnnotatedToken
    from langcheck.patterns.elements import MatchElement
    from langcheck.patterns.rule import PatternRule

logger = logging.getLogger(__name__)

# Errors a malformed token can raise inside a constraint test
TOKEN_ERRORS = (TypeError, AttributeError, ValueError)


class MatchState(Enum):
    """States of a single rule evaluation."""

    SEARCHING = "searching"
    MATCHING = "matching"
    MATCHED = "matched"
    FAILED = "failed"


@dataclass(frozen=True)
class MatchAttempt:
    """Outcome of trying a rule at one start position."""

    start: int
    state: MatchState
    spans: tuple[tuple[int, int], ...] = ()

    @property
    def end(self) -> int:
        """Token index just past the match (``start`` if it failed)."""
        return self.spans[-1][1] if self.spans else self.start


class PatternMatcher:
    """
    Evaluates one PatternRule against token sequences.

    The matcher keeps no per-call state and can be shared between threads.

    Example:
        >>> rule = PatternRule("AA", [MatchElement("a"), MatchElement("a")], "Repeated 'a'")
        >>> matcher = PatternMatcher(rule)
        >>> [a.spans for a in matcher.find_attempts(tokens_for("a a a"))]
        [((0, 1), (1, 2))]
    """

    def __init__(self, rule: PatternRule):
        self.rule = rule

    def __repr__(self) -> str:
        return f"PatternMatcher({self.rule.id!r})"

    def _accepts(self, element: MatchElement, tokens: Sequence[AnnotatedToken], index: int) -> bool:
        try:
            return element.accepts(tokens, index, self.rule.case_sensitive)
        except TOKEN_ERRORS as e:
            logger.debug("Rule %s: token %d not matchable (%s)", self.rule.id, index, e)
            return False

    def attempt(self, tokens: Sequence[AnnotatedToken], start: int) -> MatchAttempt:
        """
        Try to match all elements starting at ``start``.

        Returns:
            A MATCHED attempt with one (start, end) span per element, or a
            FAILED attempt without spans.
        """
        position = start
        spans = []
        for element in self.rule.elements:
            begin = position
            count = 0
            while position < len(tokens) and element.allows_more(count) and self._accepts(element, tokens, position):
                count += 1
                position += 1
            if count < element.min_occurrences:
                return MatchAttempt(start, MatchState.FAILED)
            spans.append((begin, position))

        if position == start:
            return MatchAttempt(start, MatchState.FAILED)
        return MatchAttempt(start, MatchState.MATCHED, tuple(spans))

    def find_attempts(self, tokens: Sequence[AnnotatedToken]) -> list[MatchAttempt]:
        """All successful, non-overlapping attempts in document order."""
        matches = []
        start = 0
        while start < len(tokens):
            result = self.attempt(tokens, start)
            if result.state is MatchState.MATCHED:
                logger.debug("Rule %s matched tokens %d-%d", self.rule.id, result.start, result.end)
                matches.append(result)
                start = result.end
            else:
                start += 1
        return matches

    def find_all(self, tokens: Sequence[AnnotatedToken]) -> list[tuple[tuple[int, int], ...]]:
        """Per-element spans of every match."""
        return [a.spans for a in self.find_attempts(tokens)]
