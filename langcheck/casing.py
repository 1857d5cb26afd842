"""
Locale-aware case classification and conversion.

Suggestions produced by rules are passed through a CaseConverter so that
"teh" -> "the" becomes "Teh" -> "The" at the start of a sentence. Python's
str methods are locale-neutral, so the handful of locale rules that matter
for word casing are applied here:

- Dutch ("nl"): a word starting with the digraph "ij" is capitalized as
  "IJ" ("ijsselmeer" -> "IJsselmeer").
- Turkish and Azeri ("tr", "az"): dotted and dotless i are distinct
  letters (i <-> İ, ı <-> I).

Every operation leaves None and "" unchanged (predicates return False).
"""

from __future__ import annotations

import logging
from enum import Enum

from langcheck.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

DUTCH_LANGUAGES = frozenset({"nl"})
TURKIC_LANGUAGES = frozenset({"tr", "az"})


class CaseConversion(Enum):
    """How a suggestion's casing is derived from a sample."""

    NONE = "none"
    PRESERVE = "preserve"
    STARTLOWER = "startlower"
    STARTUPPER = "startupper"
    ALLUPPER = "allupper"
    ALLLOWER = "alllower"


# =============================================================================
# CASE CONVERTER
# =============================================================================


def _language_of(locale: str) -> str:
    """Language subtag of a locale such as "nl_BE" or "tr-TR"."""
    return locale.replace("-", "_").split("_", 1)[0].lower()


class CaseConverter:
    """
    Case converter bound to a locale.

    Instances hold no mutable state and can be shared freely between
    threads.

    Example:
        >>> nl = CaseConverter("nl")
        >>> nl.uppercase_first_char("ijsselmeer")
        'IJsselmeer'
        >>> CaseConverter("en").convert("xxx", CaseConversion.PRESERVE, "Yyy")
        'Xxx'
    """

    def __init__(self, locale: str):
        if not locale:
            raise ConfigurationError("Locale cannot be empty.")
        self.locale = locale
        self.language = _language_of(locale)

    def __repr__(self) -> str:
        return f"CaseConverter({self.locale!r})"

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    def starts_with_uppercase(self, s: str | None) -> bool:
        """Whether the first character is uppercase."""
        return bool(s) and s[0].isupper()

    def is_all_uppercase(self, s: str | None) -> bool:
        """Whether no letter in ``s`` is lowercase (non-letters are ignored)."""
        if not s:
            return False
        return not any(c.isalpha() and c.islower() for c in s)

    def is_mixed_case(self, s: str | None) -> bool:
        """
        Whether ``s`` mixes cases beyond plain capitalization.

        "MixedCase" and "mixedCase" are mixed; "lower", "Upper" and "ALL"
        are not.
        """
        if not s:
            return False
        has_upper = any(c.isalpha() and not c.islower() for c in s)
        capitalized = s[0].isupper() and not any(c.isalpha() and not c.islower() for c in s[1:])
        return has_upper and not self.is_all_uppercase(s) and not capitalized

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def to_uppercase(self, s: str | None) -> str | None:
        if not s:
            return s
        if self.language in TURKIC_LANGUAGES:
            s = s.replace("i", "İ")
        return s.upper()

    def to_lowercase(self, s: str | None) -> str | None:
        if not s:
            return s
        if self.language in TURKIC_LANGUAGES:
            s = s.replace("I", "ı").replace("İ", "i")
        return s.lower()

    def uppercase_first_char(self, s: str | None) -> str | None:
        """Uppercase the first character; Dutch "ij" is treated as one letter."""
        if not s:
            return s
        if self.language in DUTCH_LANGUAGES and s[:2] == "ij":
            return "IJ" + s[2:]
        return self.to_uppercase(s[0]) + s[1:]

    def lowercase_first_char(self, s: str | None) -> str | None:
        if not s:
            return s
        return self.to_lowercase(s[0]) + s[1:]

    def convert(self, s: str | None, conversion: CaseConversion, sample: str | None) -> str | None:
        """
        Convert ``s`` according to ``conversion`` and an optional sample.

        Args:
            s: The string to convert.
            conversion: The conversion to perform.
            sample: Only used by PRESERVE; its casing is copied onto ``s``.

        Returns:
            The case-converted string (None and "" are returned unchanged).
        """
        if not s:
            return s

        if conversion is CaseConversion.NONE:
            return s
        if conversion is CaseConversion.PRESERVE:
            if self.starts_with_uppercase(sample):
                if self.is_all_uppercase(sample):
                    return self.to_uppercase(s)
                return self.uppercase_first_char(s)
            return s
        if conversion is CaseConversion.STARTLOWER:
            return self.lowercase_first_char(s)
        if conversion is CaseConversion.STARTUPPER:
            return self.uppercase_first_char(s)
        if conversion is CaseConversion.ALLUPPER:
            return self.to_uppercase(s)
        if conversion is CaseConversion.ALLLOWER:
            return self.to_lowercase(s)

        logger.debug("Unknown case conversion %r; leaving %r unchanged", conversion, s)
        return s


# Shared converter for callers without a locale of their own
DEFAULT_CASE_CONVERTER = CaseConverter("en")
