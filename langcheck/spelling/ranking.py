"""
Context-aware ordering of spelling suggestions.

The SuggestionRanker substitutes each candidate into a window of the
surrounding tokens and asks a LanguageModel how likely the result is.
Without a model the ranker is a pass-through and keeps the speller's
distance order.

The bundled NGramLanguageModel uses "stupid backoff" over raw n-gram
counts: cheap to build from a handful of sentences or from the word
frequencies pyspellchecker already ships.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import replace
from typing import TYPE_CHECKING, Iterable, Sequence

from langcheck.exceptions import ConfigurationError
from langcheck.models import SuggestionCandidate

if TYPE_CHECKING:
    from spellchecker import SpellChecker

logger = logging.getLogger(__name__)


# Weight applied each time the model backs off to a shorter n-gram
BACKOFF_FACTOR = 0.4


# =============================================================================
# LANGUAGE MODELS
# =============================================================================


class LanguageModel(ABC):
    """Abstract base for language models used to rank suggestions."""

    name: str = "base"

    @abstractmethod
    def score(self, tokens: Sequence[str]) -> float:
        """
        Likelihood of a token sequence.

        Returns:
            A score where higher means more likely. Only the relative order
            of scores for sequences of equal length is meaningful.
        """
        pass


class NGramLanguageModel(LanguageModel):
    """
    N-gram model with stupid backoff.

    Counts are keyed by token tuples of length 1 to ``order``. Tokens are
    lowercased. Unseen unigrams get add-one smoothing so every sequence has
    a finite log score.

    Example:
        >>> lm = NGramLanguageModel.from_sentences([["the", "cat", "sat"]], order=2)
        >>> lm.score(["the", "cat"]) > lm.score(["the", "cot"])
        True
    """

    name = "ngram"

    def __init__(self, counts: Counter[tuple[str, ...]], order: int = 3):
        if order < 1:
            raise ConfigurationError(f"order must be >= 1: {order}")
        self.order = order
        self._counts = Counter(counts)
        self._unigram_total = sum(c for gram, c in self._counts.items() if len(gram) == 1)
        self._vocabulary_size = sum(1 for gram in self._counts if len(gram) == 1)

    def __repr__(self) -> str:
        return f"NGramLanguageModel(order={self.order}, vocabulary={self._vocabulary_size})"

    @classmethod
    def from_sentences(cls, sentences: Iterable[Sequence[str]], order: int = 3) -> NGramLanguageModel:
        """Count all n-grams up to ``order`` in tokenized sentences."""
        counts: Counter[tuple[str, ...]] = Counter()
        n_sentences = 0
        for sentence in sentences:
            words = [w.lower() for w in sentence]
            n_sentences += 1
            for n in range(1, order + 1):
                for i in range(len(words) - n + 1):
                    counts[tuple(words[i : i + n])] += 1
        logger.info("Built %d-gram model from %d sentences (%d n-grams)", order, n_sentences, len(counts))
        return cls(counts, order)

    @classmethod
    def from_spellchecker(cls, spell: SpellChecker) -> NGramLanguageModel:
        """Unigram model from the word frequencies of a pyspellchecker instance."""
        counts: Counter[tuple[str, ...]] = Counter()
        for word, count in spell.word_frequency.dictionary.items():
            counts[(word.lower(),)] += count
        logger.info("Built unigram model from pyspellchecker (%d words)", len(counts))
        return cls(counts, order=1)

    def count(self, *gram: str) -> int:
        """Raw count of an n-gram."""
        return self._counts[tuple(g.lower() for g in gram)]

    def _unigram_probability(self, word: str) -> float:
        return (self._counts[(word,)] + 1) / (self._unigram_total + self._vocabulary_size + 1)

    def _backoff_score(self, gram: tuple[str, ...]) -> float:
        penalty = 1.0
        while len(gram) > 1:
            count = self._counts[gram]
            context_count = self._counts[gram[:-1]]
            if count > 0 and context_count > 0:
                return penalty * count / context_count
            penalty *= BACKOFF_FACTOR
            gram = gram[1:]
        return penalty * self._unigram_probability(gram[0])

    def score(self, tokens: Sequence[str]) -> float:
        """Sum of log backoff scores of each token given its predecessors."""
        words = [t.lower() for t in tokens]
        total = 0.0
        for i in range(len(words)):
            gram = tuple(words[max(0, i - self.order + 1) : i + 1])
            total += math.log(self._backoff_score(gram))
        return total


# =============================================================================
# RANKER
# =============================================================================


def order_candidates(candidates: Iterable[SuggestionCandidate]) -> list[SuggestionCandidate]:
    """Sort candidates by score (descending), edit distance, then text."""
    return sorted(candidates, key=lambda c: c.sort_key)


class SuggestionRanker:
    """
    Reorder suggestions by how well they fit their context.

    Args:
        language_model: Model used for scoring; None makes the ranker a
            pass-through.
        context_length: Tokens taken on each side of the misspelled word.

    Example:
        >>> SuggestionRanker().rank(["b", "a"], ["x", "?", "y"], 1)
        ['b', 'a']
    """

    def __init__(self, language_model: LanguageModel | None = None, context_length: int = 2):
        if context_length < 0:
            raise ConfigurationError(f"context_length must be >= 0: {context_length}")
        self.language_model = language_model
        self.context_length = context_length

    def __repr__(self) -> str:
        return f"SuggestionRanker({self.language_model!r}, context_length={self.context_length})"

    @property
    def is_pass_through(self) -> bool:
        """True when no model is configured and ranking keeps input order."""
        return self.language_model is None

    def _window(self, candidate: str, context: Sequence[str], position: int) -> list[str]:
        left = list(context[max(0, position - self.context_length) : max(0, position)])
        right = list(context[position + 1 : position + 1 + self.context_length])
        # Run-on splits contribute one token per part
        return left + candidate.split() + right

    def score(self, candidate: str, context: Sequence[str], position: int) -> float:
        """Model score of ``candidate`` placed at ``position`` in ``context``."""
        if self.language_model is None:
            raise ConfigurationError("Cannot score suggestions without a language model")
        return self.language_model.score(self._window(candidate, context, position))

    def rank(self, suggestions: Sequence[str], context: Sequence[str], position: int) -> list[str]:
        """
        Order suggestions by contextual likelihood.

        Args:
            suggestions: Candidate corrections, usually in distance order.
            context: Surface tokens of the sentence.
            position: Index of the misspelled token in ``context``.

        Returns:
            A new list. Without a language model this is the input order;
            otherwise candidates sorted by descending score, ties keeping
            their input order.
        """
        if self.is_pass_through:
            return list(suggestions)

        scores = {s: self.score(s, context, position) for s in suggestions}
        logger.debug("Scored %d suggestions at position %d", len(scores), position)
        return sorted(suggestions, key=lambda s: -scores[s])

    def rank_candidates(
        self,
        candidates: Sequence[SuggestionCandidate],
        context: Sequence[str],
        position: int,
    ) -> list[SuggestionCandidate]:
        """
        Attach model scores to candidates and order them.

        Without a language model the candidates are returned in input order
        with no score attached.
        """
        if self.is_pass_through:
            return list(candidates)

        scored = [
            replace(c, lm_score=self.score(c.correction, context, position)) for c in candidates
        ]
        return order_candidates(scored)
