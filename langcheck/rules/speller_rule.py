"""
Spell checking as a rule.

SpellerRule flags word tokens the dictionaries do not know and attaches
ranked suggestions. It skips what a dictionary cannot judge:
- Tokens without letters (numbers, punctuation)
- URLs and e-mail addresses
- Words on the ignore list
- Optionally, tokens the tagger recognised

When nothing is found within the first edit distance, longer words are
retried with larger distances (1 -> 2 -> 3 by default).
"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import TYPE_CHECKING, Iterable, Sequence

from langcheck.casing import DEFAULT_CASE_CONVERTER, CaseConverter
from langcheck.exceptions import ConfigurationError
from langcheck.models import RuleMatch
from langcheck.rules.base import Rule
from langcheck.spelling.ranking import SuggestionRanker
from langcheck.spelling.speller import MultiSpeller

if TYPE_CHECKING:
    from langcheck.config import CheckerConfig
    from langcheck.models import AnalyzedSentence, AnnotatedToken, SuggestionCandidate
    from langcheck.spelling.dictionary import Dictionary
    from langcheck.spelling.ranking import LanguageModel

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

URL_PATTERN = re.compile(r"^(?:[a-z][a-z0-9+.-]*://|www\.)\S+$", re.IGNORECASE)
EMAIL_PATTERN = re.compile(r"^[\w.+-]+@[\w-]+(?:\.[\w-]+)+$")

DEFAULT_DISTANCES = (1, 2, 3)
DEFAULT_MIN_LENGTH_FOR_ESCALATION = 5
DEFAULT_MAX_SUGGESTIONS = 10


class SpellerRule(Rule):
    """
    Flags misspelled words and suggests corrections.

    Attributes:
        spellers: One MultiSpeller per edit distance, tried in order.
        ranker: Reorders suggestions using the sentence context.
        max_suggestions: Cap on reported suggestions (0 = unlimited).

    Example:
        >>> rule = SpellerRule([WordListDictionary(["the", "cat", "sat"])])
        >>> [m.suggested_replacements for m in rule.match(analyze("teh cat"))]
        [['the']]
    """

    def __init__(
        self,
        dictionaries: Iterable[Dictionary],
        ranker: SuggestionRanker | None = None,
        rule_id: str = "SPELLER_RULE",
        distances: Sequence[int] = DEFAULT_DISTANCES,
        min_length_for_escalation: int = DEFAULT_MIN_LENGTH_FOR_ESCALATION,
        max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
        ignore_words: Iterable[str] = (),
        prohibited_words: Iterable[str] = (),
        ignore_tagged_words: bool = False,
        split_compounds: bool = True,
        case_converter: CaseConverter = DEFAULT_CASE_CONVERTER,
    ):
        """
        Initialize the rule.

        Args:
            dictionaries: Dictionaries a word may appear in.
            ranker: Suggestion ranker; None keeps distance order.
            rule_id: Identifier reported in matches.
            distances: Ascending edit distances to try.
            min_length_for_escalation: Words shorter than this are only
                searched at the first distance.
            max_suggestions: Cap on reported suggestions (0 = unlimited).
            ignore_words: Words never flagged.
            prohibited_words: Words always flagged, even if a dictionary
                accepts them, and never suggested.
            ignore_tagged_words: Skip tokens with a POS reading.
            split_compounds: Accept "a-b" when every part is known.
            case_converter: Locale converter for case variants.
        """
        distances = tuple(distances)
        if not distances or any(d <= 0 for d in distances) or list(distances) != sorted(set(distances)):
            raise ConfigurationError(f"distances must be positive and strictly ascending: {distances}")
        if max_suggestions < 0:
            raise ConfigurationError(f"max_suggestions must be >= 0: {max_suggestions}")

        dictionaries = list(dictionaries)
        self.id = rule_id
        self.description = "Possible spelling mistakes"
        self.spellers = tuple(MultiSpeller(dictionaries, d, case_converter) for d in distances)
        self.ranker = ranker or SuggestionRanker()
        self.min_length_for_escalation = min_length_for_escalation
        self.max_suggestions = max_suggestions
        self.ignore_words = frozenset(ignore_words)
        self.prohibited_words = frozenset(prohibited_words)
        self.ignore_tagged_words = ignore_tagged_words
        self.split_compounds = split_compounds

    @classmethod
    def from_config(
        cls,
        dictionaries: Iterable[Dictionary],
        config: CheckerConfig,
        language_model: LanguageModel | None = None,
        **kwargs,
    ) -> SpellerRule:
        """Build the rule from checker settings."""
        return cls(
            dictionaries,
            ranker=SuggestionRanker(language_model, config.context_length),
            distances=config.speller_distances,
            min_length_for_escalation=config.min_length_for_escalation,
            max_suggestions=config.max_spelling_suggestions,
            **kwargs,
        )

    # -------------------------------------------------------------------------
    # Word checks
    # -------------------------------------------------------------------------

    def _normalize(self, word: str) -> str:
        # NFC so that "ü" is one code point like in the dictionaries
        return unicodedata.normalize("NFC", word)

    def should_skip(self, token: AnnotatedToken) -> bool:
        """Whether the token is outside what a dictionary can judge."""
        word = token.text
        if not any(c.isalpha() for c in word):
            return True
        if URL_PATTERN.match(word) or EMAIL_PATTERN.match(word):
            return True
        if word in self.ignore_words or word.lower() in self.ignore_words:
            return True
        return self.ignore_tagged_words and token.is_tagged

    def is_prohibited(self, word: str) -> bool:
        return word in self.prohibited_words or word.lower() in self.prohibited_words

    def is_misspelled(self, word: str) -> bool:
        """
        Check one word.

        Prohibited words are always misspelled. A hyphenated compound is
        correct when the whole word or every part is known.
        """
        word = self._normalize(word)
        if self.is_prohibited(word):
            return True
        speller = self.spellers[0]
        if not speller.is_misspelled(word):
            return False
        if self.split_compounds and "-" in word:
            parts = word.split("-")
            if all(parts) and not any(speller.is_misspelled(p) for p in parts):
                return False
        return True

    # -------------------------------------------------------------------------
    # Suggestions
    # -------------------------------------------------------------------------

    def get_candidates(self, word: str) -> list[SuggestionCandidate]:
        """Candidates from the smallest distance that yields any."""
        word = self._normalize(word)
        candidates: list[SuggestionCandidate] = []
        for speller in self.spellers:
            if speller is not self.spellers[0] and len(word) < self.min_length_for_escalation:
                break
            candidates = speller.get_candidates(word)
            if candidates:
                break
            logger.debug("No suggestions for %r at distance %d", word, speller.max_distance)
        return [c for c in candidates if not self.is_prohibited(c.correction)]

    def get_suggestions(self, word: str, context: Sequence[str] = (), position: int = 0) -> list[str]:
        """
        Ranked suggestions for ``word``.

        Args:
            word: The misspelled word.
            context: Surface tokens of the sentence, for ranking.
            position: Index of ``word`` in ``context``.
        """
        candidates = self.get_candidates(word)
        if context:
            candidates = self.ranker.rank_candidates(candidates, context, position)
        suggestions = [c.correction for c in candidates]
        if self.max_suggestions:
            suggestions = suggestions[: self.max_suggestions]
        return suggestions

    # -------------------------------------------------------------------------
    # Rule interface
    # -------------------------------------------------------------------------

    def match(self, sentence: AnalyzedSentence) -> list[RuleMatch]:
        context = sentence.words
        matches = []
        for index, token in enumerate(sentence.tokens):
            if self.should_skip(token) or not self.is_misspelled(token.text):
                continue

            if self.is_prohibited(token.text):
                message = f"'{token.text}' should not be used."
            else:
                message = "Possible spelling mistake found."
            matches.append(
                RuleMatch(
                    rule_id=self.id,
                    message=message,
                    short_message="Spelling mistake",
                    from_pos=token.start_pos,
                    to_pos=token.end_pos,
                    suggested_replacements=self.get_suggestions(token.text, context, index),
                    start_token=index,
                    end_token=index + 1,
                )
            )

        if matches:
            logger.debug("%s: %d misspellings in sentence at %d", self.id, len(matches), sentence.start_pos)
        return matches
