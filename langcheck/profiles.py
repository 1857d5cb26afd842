"""Language profiles.

A profile bundles everything that varies between languages: the text
analysis components, the rule set, spelling dictionaries and an optional
language model. Languages differ by configuration, not by subclassing.

Standard profiles carry only lightweight, in-memory resources. Heavier
resources are attached explicitly:

    >>> profile = get_profile("en").with_spellchecker()
    >>> profile = get_profile("de").with_resources(dictionaries=[my_words])
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Callable, Iterable

from langcheck.casing import CaseConversion, CaseConverter
from langcheck.patterns import ElementException, MatchElement, PatternRule
from langcheck.rules import LongSentenceRule, MultipleWhitespaceRule, WordRepeatRule
from langcheck.spelling.dictionary import SpellCheckerDictionary
from langcheck.spelling.ranking import NGramLanguageModel
from langcheck.tokenize import split_sentences, tokenize_words

if TYPE_CHECKING:
    from langcheck.models import AnnotatedToken
    from langcheck.rules import Rule
    from langcheck.spelling.dictionary import Dictionary
    from langcheck.spelling.ranking import LanguageModel

logger = logging.getLogger(__name__)

Tokenizer = Callable[[str, int], "list[AnnotatedToken]"]
SentenceSplitter = Callable[[str], "list[tuple[int, str]]"]
Tagger = Callable[["list[AnnotatedToken]"], None]
Disambiguator = Callable[["list[AnnotatedToken]"], "list[AnnotatedToken]"]


@dataclass(frozen=True)
class LanguageProfile:
    """Configuration for checking one language.

    Attributes:
        code: Language code used for lookup (e.g., "en").
        name: Human-readable name.
        locale: Locale for case conversion (e.g., "nl", "tr_TR").
        tokenizer: Splits a sentence into tokens.
        sentence_splitter: Splits text into (offset, sentence) pairs.
        tagger: Adds readings to tokens in place; None leaves them untagged.
        disambiguator: Filters readings; None keeps all.
        rules: Rules in declaration order.
        dictionaries: Spelling dictionaries; none disables spell checking.
        language_model: Ranks spelling suggestions; None keeps distance order.
    """

    code: str
    name: str
    locale: str
    tokenizer: Tokenizer = tokenize_words
    sentence_splitter: SentenceSplitter = split_sentences
    tagger: Tagger | None = None
    disambiguator: Disambiguator | None = None
    rules: tuple[Rule, ...] = ()
    dictionaries: tuple[Dictionary, ...] = ()
    language_model: LanguageModel | None = None

    @property
    def case_converter(self) -> CaseConverter:
        return CaseConverter(self.locale)

    @property
    def checks_spelling(self) -> bool:
        return bool(self.dictionaries)

    def with_resources(
        self,
        rules: Iterable[Rule] | None = None,
        dictionaries: Iterable[Dictionary] | None = None,
        language_model: LanguageModel | None = None,
        tagger: Tagger | None = None,
        disambiguator: Disambiguator | None = None,
    ) -> LanguageProfile:
        """Return a copy with the given resources added.

        Rules and dictionaries are appended after the existing ones; the
        other resources replace the current value when given.
        """
        changes: dict = {}
        if rules is not None:
            changes["rules"] = self.rules + tuple(rules)
        if dictionaries is not None:
            changes["dictionaries"] = self.dictionaries + tuple(dictionaries)
        if language_model is not None:
            changes["language_model"] = language_model
        if tagger is not None:
            changes["tagger"] = tagger
        if disambiguator is not None:
            changes["disambiguator"] = disambiguator
        return replace(self, **changes)

    def with_spellchecker(self, use_language_model: bool = True) -> LanguageProfile:
        """Attach the pyspellchecker word list for this language.

        Also derives a unigram language model from its word frequencies
        unless the profile already has a model.

        Raises:
            ResourceUnavailableError: If pyspellchecker has no list for it.
        """
        dictionary = SpellCheckerDictionary.for_language(self.code)
        model = None
        if use_language_model and self.language_model is None:
            model = NGramLanguageModel.from_spellchecker(dictionary.spell)
        return self.with_resources(dictionaries=[dictionary], language_model=model)


# Standard profiles


def _generic_rules() -> tuple[Rule, ...]:
    return (WordRepeatRule(), MultipleWhitespaceRule(), LongSentenceRule())


def _english_rules() -> tuple[Rule, ...]:
    converter = CaseConverter("en_US")
    a_vowel = PatternRule(
        id="EN_A_VS_AN",
        elements=[
            MatchElement("a"),
            MatchElement(
                "[aeiou]\\w*",
                regexp=True,
                exceptions=[ElementException("(uni|use|usu|eu|one|once)\\w*", regexp=True)],
            ),
        ],
        message="Use 'an' instead of '\\1' if the following word starts with a vowel sound.",
        short_message="Wrong article",
        suggestion_source=1,
        suggestions=["\\1n"],
        case_conversion=CaseConversion.PRESERVE,
        case_converter=converter,
    )
    return (
        WordRepeatRule(allowed={"had", "that"}),
        MultipleWhitespaceRule(),
        LongSentenceRule(),
        a_vowel,
    )


ENGLISH_PROFILE = LanguageProfile(
    code="en",
    name="English",
    locale="en_US",
    rules=_english_rules(),
)

DUTCH_PROFILE = LanguageProfile(
    code="nl",
    name="Dutch",
    locale="nl",
    rules=_generic_rules(),
)

GERMAN_PROFILE = LanguageProfile(
    code="de",
    name="German",
    locale="de_DE",
    rules=_generic_rules(),
)

TURKISH_PROFILE = LanguageProfile(
    code="tr",
    name="Turkish",
    locale="tr_TR",
    rules=_generic_rules(),
)

GENERIC_PROFILE = LanguageProfile(
    code="xx",
    name="Generic",
    locale="xx",
    rules=(WordRepeatRule(), MultipleWhitespaceRule()),
)


PROFILES: dict[str, LanguageProfile] = {
    "en": ENGLISH_PROFILE,
    "nl": DUTCH_PROFILE,
    "de": GERMAN_PROFILE,
    "tr": TURKISH_PROFILE,
    "xx": GENERIC_PROFILE,
}


def get_profile(code: str) -> LanguageProfile:
    """Get the profile for a language code.

    Accepts locale-style codes ("en_US", "nl-BE"). Falls back to the
    generic profile for unknown languages.
    """
    language = code.replace("-", "_").split("_", 1)[0].lower()
    profile = PROFILES.get(language)
    if profile is None:
        logger.info("No profile for %r, using generic profile", code)
        return GENERIC_PROFILE
    return profile
