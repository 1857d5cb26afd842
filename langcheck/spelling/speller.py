"""
Dictionary-backed spellers.

A Speller wraps one Dictionary with a maximum edit distance; a
MultiSpeller merges several dictionaries (e.g. a large base dictionary
plus a small project word list) and accepts a word if any of them does.

Suggestions are ordered by ascending edit distance, then by the
dictionary's natural order, and never contain the input word.
"""

from __future__ import annotations

import logging
from typing import Iterable

from langcheck.casing import DEFAULT_CASE_CONVERTER, CaseConverter
from langcheck.exceptions import ConfigurationError
from langcheck.models import SuggestionCandidate
from langcheck.spelling.dictionary import Dictionary
from langcheck.spelling.distance import levenshtein_distance

logger = logging.getLogger(__name__)


# Distance assigned to a run-on split ("wordonewordtwo" -> "wordone wordtwo")
RUN_ON_DISTANCE = 1

# Shortest fragment a run-on split may produce
MIN_RUN_ON_PART_LENGTH = 2


class Speller:
    """
    Speller over a single dictionary.

    Attributes:
        dictionary: The dictionary to check against.
        max_distance: Maximum edit distance for suggestions.
        case_converter: Used for capitalization variants.
        split_run_on_words: Suggest "a b" for "ab" when both halves are known.

    Example:
        >>> speller = Speller(WordListDictionary(["wordone", "wordtwo"]), max_distance=1)
        >>> speller.is_misspelled("notthere")
        True
        >>> speller.get_suggestions("wordonex")
        ['wordone']
    """

    def __init__(
        self,
        dictionary: Dictionary,
        max_distance: int = 1,
        case_converter: CaseConverter = DEFAULT_CASE_CONVERTER,
        split_run_on_words: bool = True,
    ):
        if max_distance <= 0:
            raise ConfigurationError(f"max_distance must be > 0: {max_distance}")
        self.dictionary = dictionary
        self.max_distance = max_distance
        self.case_converter = case_converter
        self.split_run_on_words = split_run_on_words

    def __repr__(self) -> str:
        return f"Speller({self.dictionary!r}, max_distance={self.max_distance})"

    @property
    def converts_case(self) -> bool:
        return self.dictionary.converts_case

    def _case_variants(self, word: str) -> list[str]:
        """Lowercase forms of ``word`` a case-converting dictionary may list."""
        conv = self.case_converter
        variants = []
        if conv.is_all_uppercase(word):
            lower = conv.to_lowercase(word)
            variants.extend([lower, conv.uppercase_first_char(lower)])
        elif conv.starts_with_uppercase(word):
            variants.append(conv.lowercase_first_char(word))
        return [v for v in variants if v != word]

    def is_known(self, word: str) -> bool:
        """Whether the dictionary accepts ``word``, including case variants."""
        if self.dictionary.contains(word):
            return True
        if self.converts_case:
            return any(self.dictionary.contains(v) for v in self._case_variants(word))
        return False

    def is_misspelled(self, word: str) -> bool:
        """
        Check a word against the dictionary.

        Args:
            word: The word to check.

        Returns:
            False for empty input or accepted words, True otherwise.
        """
        return bool(word) and not self.is_known(word)

    def _run_on_candidates(self, word: str) -> list[str]:
        splits = []
        for i in range(MIN_RUN_ON_PART_LENGTH, len(word) - MIN_RUN_ON_PART_LENGTH + 1):
            first, second = word[:i], word[i:]
            if self.is_known(first) and self.is_known(second):
                splits.append(f"{first} {second}")
        return splits

    def get_candidates(self, word: str) -> list[SuggestionCandidate]:
        """
        Suggestion candidates with their edit distances.

        Returns:
            Candidates ordered by ascending distance, then natural order.
            Empty for correctly spelled or empty input.
        """
        if not self.is_misspelled(word):
            return []

        queries = [word]
        capitalize = self.converts_case and self.case_converter.starts_with_uppercase(word)
        if self.converts_case:
            queries.extend(self._case_variants(word))

        scored: list[tuple[int, str]] = []
        for query in queries:
            for suggestion in self.dictionary.lookup(query, self.max_distance):
                scored.append((levenshtein_distance(query, suggestion), suggestion))
        if self.split_run_on_words:
            scored.extend((RUN_ON_DISTANCE, s) for s in self._run_on_candidates(word))

        # Stable: equal distances keep the dictionary's order
        scored.sort(key=lambda pair: pair[0])

        candidates: list[SuggestionCandidate] = []
        seen = {word}
        for distance, suggestion in scored:
            if capitalize and not self.case_converter.is_mixed_case(suggestion):
                suggestion = self.case_converter.uppercase_first_char(suggestion)
            if suggestion in seen:
                continue
            seen.add(suggestion)
            candidates.append(SuggestionCandidate(suggestion, distance))
        return candidates

    def get_suggestions(self, word: str) -> list[str]:
        """
        Suggest corrections for ``word``.

        Returns:
            Suggestions ordered by ascending edit distance; empty when the
            word is spelled correctly.
        """
        return [c.correction for c in self.get_candidates(word)]


class MultiSpeller:
    """
    Speller over several dictionaries.

    A word is correct if ANY dictionary accepts it. Suggestions from all
    dictionaries are merged, deduplicated and ordered by ascending edit
    distance (ties keep dictionary order, then each dictionary's own order).
    Dictionaries are deduplicated by identity, not by content.

    Example:
        >>> base = WordListDictionary(["wordone", "wordtwo"])
        >>> extra = WordListDictionary(["Abc", "wordthree"])
        >>> speller = MultiSpeller([base, extra], max_distance=1)
        >>> speller.is_misspelled("wordthree")
        False
        >>> speller.get_suggestions("Abd")
        ['Abc']
    """

    def __init__(
        self,
        dictionaries: Iterable[Dictionary],
        max_distance: int = 1,
        case_converter: CaseConverter = DEFAULT_CASE_CONVERTER,
        split_run_on_words: bool = True,
    ):
        if max_distance <= 0:
            raise ConfigurationError(f"max_distance must be > 0: {max_distance}")

        unique: list[Dictionary] = []
        seen_ids: set[int] = set()
        for d in dictionaries:
            if id(d) in seen_ids:
                continue
            seen_ids.add(id(d))
            unique.append(d)

        self.max_distance = max_distance
        self.spellers = tuple(
            Speller(d, max_distance, case_converter, split_run_on_words) for d in unique
        )
        if not self.spellers:
            logger.warning("MultiSpeller created without dictionaries; every word is misspelled")

    def __repr__(self) -> str:
        return f"MultiSpeller({len(self.spellers)} dictionaries, max_distance={self.max_distance})"

    @property
    def converts_case(self) -> bool:
        return any(s.converts_case for s in self.spellers)

    def is_misspelled(self, word: str) -> bool:
        """Accept the word if at least one dictionary accepts it."""
        if not word:
            return False
        return all(s.is_misspelled(word) for s in self.spellers)

    def get_candidates(self, word: str) -> list[SuggestionCandidate]:
        """The candidates from all dictionaries, without duplicates."""
        if not self.is_misspelled(word):
            return []

        merged: list[SuggestionCandidate] = []
        seen: set[str] = set()
        for speller in self.spellers:
            for candidate in speller.get_candidates(word):
                if candidate.correction in seen:
                    continue
                seen.add(candidate.correction)
                merged.append(candidate)

        merged.sort(key=lambda c: c.edit_distance)
        return merged

    def get_suggestions(self, word: str) -> list[str]:
        """The suggestions from all dictionaries, without duplicates."""
        return [c.correction for c in self.get_candidates(word)]
