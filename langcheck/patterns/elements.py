"""
Token constraints for pattern rules.

A MatchElement describes what one position of a pattern accepts: a
literal or regex surface form, a POS-tag regex, a lemma, or any
combination of these. Elements can repeat (min/max occurrences) and can
carry ElementExceptions that veto an otherwise accepted token.

Regular expressions are compiled when the element is created, so a
malformed pattern fails at construction instead of halfway through a
document.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, Sequence

from langcheck.exceptions import ConfigurationError

if TYPE_CHECKING:
    from langcheck.models import AnnotatedToken

UNBOUNDED = -1

ExceptionScope = Literal["current", "next", "previous"]
SCOPE_OFFSETS = {"current": 0, "next": 1, "previous": -1}


def _compile(pattern: str, flags: int, what: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise ConfigurationError(f"Invalid {what} regex {pattern!r}: {e}") from e


@dataclass
class TokenConstraint:
    """
    Surface, POS-tag and lemma tests shared by elements and exceptions.

    All configured tests must pass for the constraint to match; ``negate``
    inverts the combined result. ``case_sensitive=None`` defers to the
    rule's setting. POS tags are always compared case-sensitively.
    """

    token: str | None = None
    regexp: bool = False
    pos_tag: str | None = None
    lemma: str | None = None
    negate: bool = False
    case_sensitive: bool | None = None

    _token_re: dict[bool, re.Pattern[str]] = field(init=False, repr=False, compare=False)
    _pos_re: re.Pattern[str] | None = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.token and self.pos_tag is None and self.lemma is None:
            raise ConfigurationError(f"{type(self).__name__} needs a token, pos_tag or lemma")

        self._token_re = {}
        if self.token:
            source = self.token if self.regexp else re.escape(self.token)
            self._token_re = {
                True: _compile(source, 0, "token"),
                False: _compile(source, re.IGNORECASE, "token"),
            }
        self._pos_re = _compile(self.pos_tag, 0, "POS tag") if self.pos_tag is not None else None

    def _is_case_sensitive(self, default: bool) -> bool:
        return default if self.case_sensitive is None else self.case_sensitive

    def test(self, token: AnnotatedToken, case_sensitive: bool = False) -> bool:
        """
        Evaluate the constraint against one token.

        Args:
            token: The token to test.
            case_sensitive: The rule's case sensitivity, used when the
                constraint does not set its own.
        """
        sensitive = self._is_case_sensitive(case_sensitive)
        result = True
        if self._token_re:
            result = self._token_re[sensitive].fullmatch(token.text) is not None
        if result and self._pos_re is not None:
            result = token.has_pos_tag(self._pos_re)
        if result and self.lemma is not None:
            if sensitive:
                result = token.has_lemma(self.lemma)
            else:
                wanted = self.lemma.casefold()
                result = any(lemma.casefold() == wanted for lemma in token.lemmas)
        return result != self.negate


@dataclass
class ElementException(TokenConstraint):
    """
    Veto for a MatchElement.

    ``scope`` selects the token tested relative to the element's position:
    the token itself ("current"), the one after it ("next") or the one
    before it ("previous"). A missing neighbour never vetoes.

    Example:
        >>> # "a" followed by anything except "lot"
        >>> MatchElement("a", exceptions=[ElementException("lot", scope="next")])
    """

    scope: ExceptionScope = "current"

    def __post_init__(self):
        if self.scope not in SCOPE_OFFSETS:
            raise ConfigurationError(f"Invalid exception scope: {self.scope!r}")
        super().__post_init__()

    def vetoes(self, tokens: Sequence[AnnotatedToken], index: int, case_sensitive: bool = False) -> bool:
        target = index + SCOPE_OFFSETS[self.scope]
        if not 0 <= target < len(tokens):
            return False
        return self.test(tokens[target], case_sensitive)


@dataclass
class MatchElement(TokenConstraint):
    """
    One position of a pattern.

    Attributes:
        min_occurrences: Minimum consecutive tokens to match (0 = optional).
        max_occurrences: Maximum consecutive tokens, or -1 for unbounded.
        exceptions: Constraints that veto the element at a position.

    Example:
        >>> MatchElement("foo")
        >>> MatchElement(pos_tag="VB.*")
        >>> MatchElement("very", min_occurrences=0, max_occurrences=-1)
    """

    min_occurrences: int = 1
    max_occurrences: int = 1
    exceptions: list[ElementException] = field(default_factory=list)

    def __post_init__(self):
        if self.min_occurrences < 0:
            raise ConfigurationError(f"min_occurrences must be >= 0: {self.min_occurrences}")
        if self.max_occurrences == 0 or self.max_occurrences < UNBOUNDED:
            raise ConfigurationError(
                f"max_occurrences must be positive or -1 (unbounded): {self.max_occurrences}"
            )
        if self.max_occurrences != UNBOUNDED and self.min_occurrences > self.max_occurrences:
            raise ConfigurationError(
                f"min_occurrences ({self.min_occurrences}) > max_occurrences ({self.max_occurrences})"
            )
        super().__post_init__()

    @property
    def is_optional(self) -> bool:
        return self.min_occurrences == 0

    def allows_more(self, count: int) -> bool:
        """Whether another repetition is allowed after ``count`` matches."""
        return self.max_occurrences == UNBOUNDED or count < self.max_occurrences

    def accepts(self, tokens: Sequence[AnnotatedToken], index: int, case_sensitive: bool = False) -> bool:
        """
        Whether the token at ``index`` satisfies this element.

        Exceptions are checked after the main constraint and always win.
        """
        if not self.test(tokens[index], case_sensitive):
            return False
        sensitive = self._is_case_sensitive(case_sensitive)
        return not any(e.vetoes(tokens, index, sensitive) for e in self.exceptions)
