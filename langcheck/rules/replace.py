"""
List-driven word replacement.

SimpleReplaceRule flags single words found in a replacement table and
suggests the listed alternatives, cased like the word in the text. Tables
are usually loaded from plain text files:

    # wrong forms (separated by |) = replacements (separated by |)
    alot=a lot
    definately|definitly=definitely
    irregardless=regardless|irrespective
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Mapping, Sequence

from langcheck.casing import DEFAULT_CASE_CONVERTER, CaseConversion, CaseConverter
from langcheck.exceptions import ConfigurationError, ResourceUnavailableError
from langcheck.models import RuleMatch
from langcheck.rules.base import Rule

if TYPE_CHECKING:
    from langcheck.models import AnalyzedSentence

logger = logging.getLogger(__name__)


DEFAULT_MESSAGE = "'{word}' may be wrong. Did you mean {suggestions}?"


class SimpleReplaceRule(Rule):
    """
    Flags words listed in a replacement table.

    Without ``case_sensitive`` the table is matched ignoring case and the
    suggestions follow the word's casing ("Alot" -> "A lot", "ALOT" ->
    "A LOT").

    Attributes:
        replacements: Wrong form -> replacements, as given.
        case_sensitive: Match table keys exactly.
        case_converter: Locale converter for lookups and suggestion casing.

    Example:
        >>> rule = SimpleReplaceRule({"alot": ["a lot"]})
        >>> [m.suggested_replacements for m in rule.match(analyze("Alot of it"))]
        [['A lot']]
    """

    def __init__(
        self,
        replacements: Mapping[str, Sequence[str]],
        rule_id: str = "SIMPLE_REPLACE",
        description: str = "Words with a listed replacement",
        message: str = DEFAULT_MESSAGE,
        short_message: str = "Wrong word",
        case_sensitive: bool = False,
        case_converter: CaseConverter = DEFAULT_CASE_CONVERTER,
    ):
        """
        Initialize the rule.

        Args:
            replacements: Wrong form -> non-empty list of replacements.
            rule_id: Identifier reported in matches.
            description: Rule description.
            message: Match message; ``{word}`` and ``{suggestions}`` are
                filled in.
            short_message: Short match message.
            case_sensitive: Match table keys exactly.
            case_converter: Locale converter for lookups and casing.
        """
        self.id = rule_id
        self.description = description
        self.message = message
        self.short_message = short_message
        self.case_sensitive = case_sensitive
        self.case_converter = case_converter

        self.replacements: dict[str, tuple[str, ...]] = {}
        for wrong, suggestions in replacements.items():
            if isinstance(suggestions, str):
                suggestions = [suggestions]
            suggestions = tuple(s for s in suggestions if s)
            if not wrong or not suggestions:
                raise ConfigurationError(f"Rule {rule_id}: {wrong!r} needs at least one replacement")
            self.replacements[wrong] = suggestions

        if case_sensitive:
            self._lookup = dict(self.replacements)
        else:
            self._lookup = {case_converter.to_lowercase(k): v for k, v in self.replacements.items()}

    def __len__(self) -> int:
        return len(self.replacements)

    @classmethod
    def from_file(cls, path: str | Path, encoding: str = "utf-8", **kwargs) -> SimpleReplaceRule:
        """Build the rule from a replacement file (see load_replacements)."""
        return cls(load_replacements(path, encoding), **kwargs)

    def replacements_for(self, word: str) -> tuple[str, ...]:
        """Suggestions for ``word`` in its own casing; empty if not listed."""
        key = word if self.case_sensitive else self.case_converter.to_lowercase(word)
        suggestions = self._lookup.get(key, ())
        if self.case_sensitive:
            return suggestions
        return tuple(self.case_converter.convert(s, CaseConversion.PRESERVE, word) for s in suggestions)

    def match(self, sentence: AnalyzedSentence) -> list[RuleMatch]:
        matches = []
        for index, token in enumerate(sentence.tokens):
            suggestions = self.replacements_for(token.text)
            if not suggestions:
                continue
            quoted = " or ".join(f"'{s}'" for s in suggestions)
            matches.append(
                RuleMatch(
                    rule_id=self.id,
                    message=self.message.format(word=token.text, suggestions=quoted),
                    short_message=self.short_message,
                    from_pos=token.start_pos,
                    to_pos=token.end_pos,
                    suggested_replacements=list(suggestions),
                    start_token=index,
                    end_token=index + 1,
                )
            )
        return matches


# =============================================================================
# LOADERS
# =============================================================================


def parse_replacements(lines: Iterable[str], source: str = "<lines>") -> dict[str, list[str]]:
    """
    Parse ``wrong|wrong2=replacement1|replacement2`` lines.

    Empty lines and lines starting with ``#`` are skipped. A wrong form
    listed twice keeps its last replacements.

    Raises:
        ConfigurationError: If a line is not in the expected format.
    """
    table: dict[str, list[str]] = {}
    for number, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        if not line.strip() or line.startswith("#"):
            continue
        parts = line.split("=")
        if len(parts) != 2:
            raise ConfigurationError(f"{source}:{number}: expected 'word=replacement', got {line!r}")
        wrong_forms = [w.strip() for w in parts[0].split("|") if w.strip()]
        replacements = [r.strip() for r in parts[1].split("|") if r.strip()]
        if not wrong_forms or not replacements:
            raise ConfigurationError(f"{source}:{number}: empty word or replacement in {line!r}")
        for wrong in wrong_forms:
            table[wrong] = replacements
    return table


def load_replacements(path: str | Path, encoding: str = "utf-8") -> dict[str, list[str]]:
    """
    Load a replacement table file.

    Raises:
        ConfigurationError: If a line is malformed.
        ResourceUnavailableError: If the file cannot be read.
    """
    path = Path(path)
    try:
        with open(path, encoding=encoding) as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceUnavailableError(f"Cannot read replacement file {path}: {e}") from e

    table = parse_replacements(lines, source=str(path))
    logger.info("Loaded %d replacements from %s", len(table), path)
    return table
