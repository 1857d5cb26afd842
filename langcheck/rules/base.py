"""
Base class for checking rules.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from langcheck.models import AnalyzedSentence, RuleMatch


class Rule(ABC):
    """Abstract base for rules.

    A rule inspects one analyzed sentence at a time and reports the errors
    it finds. Rules are built once and shared between threads, so
    ``match()`` must not mutate the rule.
    """

    # Set by each subclass (class attribute or dataclass field)
    id: str
    description: str

    @abstractmethod
    def match(self, sentence: AnalyzedSentence) -> list[RuleMatch]:
        """Find errors in a sentence.

        Returns an empty list when nothing is wrong; never raises for
        "no match".
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


class TextLevelRule(Rule):
    """Abstract base for rules that need more than one sentence.

    The checker calls ``match_text()`` once per text with every sentence,
    after the sentence-level rules. Matches may span sentences, so their
    ``start_token``/``end_token`` are not meaningful and stay 0.
    """

    @abstractmethod
    def match_text(self, sentences: Sequence[AnalyzedSentence], text: str | None = None) -> list[RuleMatch]:
        """Find errors across sentences.

        Args:
            sentences: Sentences in document order.
            text: The text the sentences were split from, or None when
                unavailable (then all sentences form one block).
        """
        pass

    def match(self, sentence: AnalyzedSentence) -> list[RuleMatch]:
        return self.match_text([sentence])
