"""
Language-independent rules shared by most profiles.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Iterable, Sequence

from langcheck.exceptions import ConfigurationError
from langcheck.models import RuleMatch
from langcheck.rules.base import Rule, TextLevelRule

if TYPE_CHECKING:
    from langcheck.models import AnalyzedSentence, AnnotatedToken

logger = logging.getLogger(__name__)


# Two or more spaces (regular or non-breaking) between visible characters
WHITESPACE_RUN_PATTERN = re.compile(r"(?<=\S)[ \u00a0]{2,}(?=\S)")

# A blank line between two sentences ends a paragraph
PARAGRAPH_BREAK_PATTERN = re.compile(r"\n[ \t]*\n")

DEFAULT_MAX_WORDS = 50
DEFAULT_MAX_PARAGRAPH_WORDS = 80


def _is_word(token: AnnotatedToken) -> bool:
    return any(c.isalpha() for c in token.text)


class WordRepeatRule(Rule):
    """
    Flags a word repeated directly after itself ("the the").

    Comparison ignores case. Numbers and punctuation are never flagged,
    and ``allowed`` lists legitimate doublings ("had had").
    """

    id = "WORD_REPEAT_RULE"
    description = "Word repetition (e.g. 'will will')"

    def __init__(self, allowed: Iterable[str] = ()):
        self.allowed = frozenset(w.lower() for w in allowed)

    def match(self, sentence: AnalyzedSentence) -> list[RuleMatch]:
        tokens = sentence.tokens
        matches = []
        index = 1
        while index < len(tokens):
            previous, token = tokens[index - 1], tokens[index]
            word = token.text.lower()
            if (
                _is_word(token)
                and word == previous.text.lower()
                and word not in self.allowed
                and token.whitespace_before
            ):
                matches.append(
                    RuleMatch(
                        rule_id=self.id,
                        message="Possible typo: you repeated a word.",
                        short_message="Word repetition",
                        from_pos=previous.start_pos,
                        to_pos=token.end_pos,
                        suggested_replacements=[previous.text],
                        start_token=index - 1,
                        end_token=index + 1,
                    )
                )
                # "a a a" reports the first pair only
                index += 2
                continue
            index += 1
        return matches


class MultipleWhitespaceRule(Rule):
    """Flags runs of two or more spaces inside a sentence. Tabs are tolerated."""

    id = "WHITESPACE_RULE"
    description = "Whitespace repetition (bad formatting)"

    def match(self, sentence: AnalyzedSentence) -> list[RuleMatch]:
        matches = []
        for m in WHITESPACE_RUN_PATTERN.finditer(sentence.text):
            from_pos = sentence.start_pos + m.start()
            to_pos = sentence.start_pos + m.end()
            # Token boundary the run sits on
            before = sum(1 for t in sentence.tokens if t.end_pos <= from_pos)
            matches.append(
                RuleMatch(
                    rule_id=self.id,
                    message="Possible typo: you repeated a whitespace.",
                    short_message="Whitespace repetition",
                    from_pos=from_pos,
                    to_pos=to_pos,
                    suggested_replacements=[" "],
                    start_token=before,
                    end_token=before,
                )
            )
        return matches


class LongSentenceRule(Rule):
    """Flags sentences with more than ``max_words`` words."""

    id = "TOO_LONG_SENTENCE"
    description = "Readability: sentence over a word limit"

    def __init__(self, max_words: int = DEFAULT_MAX_WORDS):
        if max_words < 1:
            raise ConfigurationError(f"max_words must be >= 1: {max_words}")
        self.max_words = max_words

    def match(self, sentence: AnalyzedSentence) -> list[RuleMatch]:
        word_count = sum(1 for t in sentence.tokens if _is_word(t) or t.text.isdigit())
        if word_count <= self.max_words:
            return []

        logger.debug("Sentence at %d has %d words", sentence.start_pos, word_count)
        return [
            RuleMatch(
                rule_id=self.id,
                message=f"This sentence has {word_count} words, more than {self.max_words}. "
                "Consider splitting it.",
                short_message="Long sentence",
                from_pos=sentence.tokens[0].start_pos,
                to_pos=sentence.tokens[-1].end_pos,
                start_token=0,
                end_token=len(sentence.tokens),
            )
        ]


class LongParagraphRule(TextLevelRule):
    """
    Flags paragraphs with more than ``max_words`` words.

    Paragraphs are separated by a blank line in the checked text. The
    match runs from the first word of the paragraph to the last word
    within the limit.
    """

    id = "TOO_LONG_PARAGRAPH"
    description = "Readability: paragraph over a word limit"

    def __init__(self, max_words: int = DEFAULT_MAX_PARAGRAPH_WORDS):
        if max_words < 1:
            raise ConfigurationError(f"max_words must be >= 1: {max_words}")
        self.max_words = max_words

    def paragraphs(
        self, sentences: Sequence[AnalyzedSentence], text: str | None = None
    ) -> list[list[AnalyzedSentence]]:
        """Group sentences into paragraphs using the gaps between them in ``text``."""
        paragraphs: list[list[AnalyzedSentence]] = [[]]
        for sentence in sentences:
            current = paragraphs[-1]
            if current and text is not None:
                previous = current[-1]
                gap = text[previous.start_pos + len(previous.text) : sentence.start_pos]
                if PARAGRAPH_BREAK_PATTERN.search(gap):
                    current = []
                    paragraphs.append(current)
            current.append(sentence)
        return [p for p in paragraphs if p]

    def match_text(self, sentences: Sequence[AnalyzedSentence], text: str | None = None) -> list[RuleMatch]:
        matches = []
        for paragraph in self.paragraphs(sentences, text):
            words = [t for s in paragraph for t in s.tokens if any(c.isalnum() for c in t.text)]
            if len(words) <= self.max_words:
                continue
            logger.debug("Paragraph at %d has %d words", words[0].start_pos, len(words))
            matches.append(
                RuleMatch(
                    rule_id=self.id,
                    message=f"This paragraph has {len(words)} words, more than {self.max_words}. "
                    "Consider splitting it.",
                    short_message="Long paragraph",
                    from_pos=words[0].start_pos,
                    to_pos=words[self.max_words - 1].end_pos,
                )
            )
        return matches
