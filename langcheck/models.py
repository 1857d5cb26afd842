"""
Data models for langcheck.

These models carry text through the checking pipeline: tokens with their
(lemma, POS tag) readings, analyzed sentences, and the rule matches and
suggestion candidates produced for them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any, Iterable


@dataclass(frozen=True)
class AnalyzedToken:
    """One (lemma, POS tag) reading of a token."""

    token: str
    lemma: str | None = None
    pos_tag: str | None = None


@dataclass
class AnnotatedToken:
    """
    A word or punctuation unit with its readings.

    An empty ``readings`` list means the tagger knew nothing about the
    token. Readings are appended while tagging; after that the token is
    treated as read-only and disambiguation produces a new token through
    ``with_readings()``.

    Example:
        >>> tok = AnnotatedToken.from_reading("runs", lemma="run", pos_tag="VBZ")
        >>> tok.add_reading("run", "NNS")
        >>> tok.has_pos_tag("VB.*")
        True
        >>> tok.with_readings([tok.readings[1]]).pos_tags
        ['NNS']
    """

    text: str
    start_pos: int = 0
    readings: list[AnalyzedToken] = field(default_factory=list)
    whitespace_before: bool = False
    sentence_start: bool = False

    @classmethod
    def from_reading(
        cls,
        text: str,
        lemma: str | None = None,
        pos_tag: str | None = None,
        start_pos: int = 0,
        whitespace_before: bool = False,
        sentence_start: bool = False,
    ) -> AnnotatedToken:
        """Create a token with a single reading, or none if lemma and tag are both unknown."""
        readings = []
        if lemma is not None or pos_tag is not None:
            readings.append(AnalyzedToken(text, lemma, pos_tag))
        return cls(
            text=text,
            start_pos=start_pos,
            readings=readings,
            whitespace_before=whitespace_before,
            sentence_start=sentence_start,
        )

    @property
    def end_pos(self) -> int:
        """Character offset just past the token in the original text."""
        return self.start_pos + len(self.text)

    @property
    def is_tagged(self) -> bool:
        """Whether any reading carries a POS tag."""
        return any(r.pos_tag is not None for r in self.readings)

    @property
    def lemmas(self) -> list[str]:
        """Known lemmas, in reading order."""
        return [r.lemma for r in self.readings if r.lemma is not None]

    @property
    def pos_tags(self) -> list[str]:
        """Known POS tags, in reading order."""
        return [r.pos_tag for r in self.readings if r.pos_tag is not None]

    def add_reading(self, lemma: str | None, pos_tag: str | None) -> None:
        """Append a reading during tagging."""
        self.readings.append(AnalyzedToken(self.text, lemma, pos_tag))

    def with_readings(self, readings: Iterable[AnalyzedToken]) -> AnnotatedToken:
        """Return a copy of this token carrying only ``readings``."""
        return replace(self, readings=list(readings))

    def has_pos_tag(self, pattern: str | re.Pattern[str]) -> bool:
        """
        Check whether any reading's POS tag fully matches ``pattern``.

        Args:
            pattern: Regular expression (string or compiled).

        Returns:
            True if at least one tagged reading matches.
        """
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        return any(regex.fullmatch(tag) for tag in self.pos_tags)

    def has_lemma(self, lemma: str) -> bool:
        """Check whether any reading has exactly this lemma."""
        return lemma in self.lemmas


@dataclass(frozen=True)
class AnalyzedSentence:
    """A sentence as a sequence of annotated tokens (whitespace not included)."""

    text: str
    tokens: tuple[AnnotatedToken, ...]
    start_pos: int = 0  # Offset of the sentence in the document

    def __len__(self) -> int:
        return len(self.tokens)

    @property
    def words(self) -> list[str]:
        """Surface forms of all tokens."""
        return [t.text for t in self.tokens]


@dataclass
class RuleMatch:
    """
    A flagged error.

    ``from_pos``/``to_pos`` are character offsets into the original text
    (end exclusive); ``start_token``/``end_token`` are token indices in the
    sentence (end exclusive).
    """

    rule_id: str
    message: str
    from_pos: int
    to_pos: int
    suggested_replacements: list[str] = field(default_factory=list)
    short_message: str = ""
    start_token: int = 0
    end_token: int = 0

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the match
        """
        return {
            "rule_id": self.rule_id,
            "message": self.message,
            "short_message": self.short_message,
            "offset": self.from_pos,
            "length": self.to_pos - self.from_pos,
            "replacements": list(self.suggested_replacements),
        }


@dataclass(frozen=True)
class SuggestionCandidate:
    """A possible correction for a misspelled word."""

    correction: str
    edit_distance: int
    lm_score: float | None = None

    @property
    def sort_key(self) -> tuple[int, float, int, str]:
        """
        Deterministic ordering key.

        Language model score first (descending; scored candidates before
        unscored ones), then edit distance (ascending), then the correction
        itself.
        """
        if self.lm_score is None:
            return (1, 0.0, self.edit_distance, self.correction)
        return (0, -self.lm_score, self.edit_distance, self.correction)
