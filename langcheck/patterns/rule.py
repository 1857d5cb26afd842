"""
Declarative pattern rules.

A PatternRule is an ordered list of MatchElements plus what to report
when they match: a message, and suggestions built from the matched text.

Messages and suggestion templates may reference matched elements with
``\\N`` (1-based). In suggestion templates, the reference to the
suggestion source element receives the rule's case conversion:

    PatternRule(
        id="A_VOWEL",
        elements=[MatchElement("a"), MatchElement("[aeiou].*", regexp=True)],
        message="Use 'an' before a vowel: '\\1' -> 'an'",
        suggestion_source=1,
        suggestions=["\\1n \\2"],
        case_conversion=CaseConversion.PRESERVE,
    )

turns "A apple" into the suggestion "An apple".
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from langcheck.casing import DEFAULT_CASE_CONVERTER, CaseConversion, CaseConverter
from langcheck.exceptions import ConfigurationError
from langcheck.models import RuleMatch
from langcheck.patterns.elements import MatchElement
from langcheck.patterns.matcher import PatternMatcher
from langcheck.rules.base import Rule

if TYPE_CHECKING:
    from langcheck.models import AnalyzedSentence, AnnotatedToken

logger = logging.getLogger(__name__)

BACKREF_RE = re.compile(r"\\(\d+)")

# Token span matched by each element, end exclusive (start == end when skipped)
ElementSpans = Sequence[tuple[int, int]]


def surface_text(tokens: Sequence[AnnotatedToken]) -> str:
    """Join tokens back into text, keeping a space where one preceded a token."""
    if not tokens:
        return ""
    parts = [tokens[0].text]
    for token in tokens[1:]:
        if token.whitespace_before:
            parts.append(" ")
        parts.append(token.text)
    return "".join(parts)


@dataclass
class PatternRule(Rule):
    """
    A rule defined by a sequence of match elements.

    Attributes:
        id: Rule identifier reported in matches.
        elements: What consecutive tokens must look like.
        message: Message reported for a match; may contain ``\\N``.
        suggestion_source: 1-based element whose matched text seeds the
            suggestions. None means the rule suggests nothing.
        case_conversion: Policy applied to the suggestion source text.
        sample: Declared sample for PRESERVE conversion.
        sample_source: 1-based element whose matched text is the sample;
            takes precedence over ``sample``.
        suggestions: Templates; without any, the converted source text is
            the only suggestion.
        case_sensitive: Default case sensitivity for the elements.
        case_converter: Locale-specific converter.
    """

    id: str
    elements: Sequence[MatchElement]
    message: str
    suggestion_source: int | None = None
    case_conversion: CaseConversion = CaseConversion.NONE
    sample: str | None = None
    sample_source: int | None = None
    suggestions: Sequence[str] = ()
    case_sensitive: bool = False
    short_message: str = ""
    description: str = ""
    case_converter: CaseConverter = field(default=DEFAULT_CASE_CONVERTER, repr=False, compare=False)

    _matcher: PatternMatcher = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.id:
            raise ConfigurationError("Pattern rule needs an id")
        self.elements = tuple(self.elements)
        self.suggestions = tuple(self.suggestions)
        if not self.elements:
            raise ConfigurationError(f"Pattern rule {self.id} has no elements")
        if all(e.is_optional for e in self.elements):
            raise ConfigurationError(f"Pattern rule {self.id} can only match zero tokens")

        for what, index in (("suggestion_source", self.suggestion_source), ("sample_source", self.sample_source)):
            if index is not None and not 1 <= index <= len(self.elements):
                raise ConfigurationError(
                    f"Rule {self.id}: {what} {index} is not an element (1..{len(self.elements)})"
                )
        if self.sample is not None and not isinstance(self.sample, str):
            raise ConfigurationError(f"Rule {self.id}: sample must be a string, got {self.sample!r}")
        if self.suggestion_source is None and self.case_conversion is not CaseConversion.NONE:
            raise ConfigurationError(f"Rule {self.id}: case conversion requires a suggestion_source")

        for text in (self.message, *self.suggestions):
            for ref in BACKREF_RE.findall(text):
                if not 1 <= int(ref) <= len(self.elements):
                    raise ConfigurationError(f"Rule {self.id}: reference \\{ref} in {text!r} is out of range")

        self._matcher = PatternMatcher(self)

    # -------------------------------------------------------------------------
    # Rule interface
    # -------------------------------------------------------------------------

    def match(self, sentence: AnalyzedSentence) -> list[RuleMatch]:
        """Find all non-overlapping matches in ``sentence``."""
        return self.match_tokens(sentence.tokens)

    def match_tokens(self, tokens: Sequence[AnnotatedToken]) -> list[RuleMatch]:
        return [self.build_match(tokens, spans) for spans in self._matcher.find_all(tokens)]

    # -------------------------------------------------------------------------
    # Match building
    # -------------------------------------------------------------------------

    def build_match(self, tokens: Sequence[AnnotatedToken], spans: ElementSpans) -> RuleMatch:
        """Turn per-element spans into a RuleMatch with its suggestions."""
        texts = [surface_text(tokens[start:end]) for start, end in spans]
        first = spans[0][0]
        last = spans[-1][1]

        return RuleMatch(
            rule_id=self.id,
            message=self._expand(self.message, texts),
            short_message=self.short_message,
            from_pos=tokens[first].start_pos,
            to_pos=tokens[last - 1].end_pos,
            suggested_replacements=self.build_suggestions(texts),
            start_token=first,
            end_token=last,
        )

    def build_suggestions(self, texts: Sequence[str]) -> list[str]:
        """
        Build suggestions from the matched text of each element.

        Args:
            texts: Matched surface text per element ("" when skipped).

        Returns:
            Deduplicated non-empty suggestions, in template order.
        """
        converted = None
        if self.suggestion_source is not None:
            source_text = texts[self.suggestion_source - 1]
            converted = self.case_converter.convert(source_text, self.case_conversion, self._sample(texts))

        if self.suggestions:
            candidates = [self._expand(t, texts, converted) for t in self.suggestions]
        elif converted is not None:
            candidates = [converted]
        else:
            candidates = []

        result: list[str] = []
        for candidate in candidates:
            candidate = candidate.strip()
            if candidate and candidate not in result:
                result.append(candidate)
        return result

    def _sample(self, texts: Sequence[str]) -> str | None:
        if self.sample_source is not None and texts[self.sample_source - 1]:
            return texts[self.sample_source - 1]
        if self.sample is not None:
            return self.sample
        return texts[self.suggestion_source - 1]

    def _expand(self, template: str, texts: Sequence[str], converted: str | None = None) -> str:
        def substitute(m: re.Match[str]) -> str:
            index = int(m.group(1))
            if converted is not None and index == self.suggestion_source:
                return converted
            return texts[index - 1]

        return BACKREF_RE.sub(substitute, template)
