"""
langcheck: Multilingual grammar, style and spell checking.

This library flags writing errors with declarative token-pattern rules
and a dictionary-based speller, and proposes corrections whose casing
follows the text they replace.

Example:
    >>> import langcheck
    >>> checker = langcheck.create_checker("en")
    >>> for match in checker.check("This is a apple."):
    ...     print(match.rule_id, match.suggested_replacements)
    EN_A_VS_AN ['an']

    >>> # Spell checking with pyspellchecker's English word list
    >>> profile = langcheck.get_profile("en").with_spellchecker()
    >>> langcheck.Checker(profile).check("Teh cat sat.")
"""

from langcheck.casing import DEFAULT_CASE_CONVERTER, CaseConversion, CaseConverter
from langcheck.checker import (
    Checker,
    CheckResult,
    CheckStats,
    check_batch,
    create_checker,
)
from langcheck.config import CheckerConfig
from langcheck.exceptions import (
    ConfigurationError,
    LangCheckError,
    ResourceUnavailableError,
)
from langcheck.models import (
    AnalyzedSentence,
    AnalyzedToken,
    AnnotatedToken,
    RuleMatch,
    SuggestionCandidate,
)
from langcheck.patterns import (
    ElementException,
    MatchElement,
    PatternMatcher,
    PatternRule,
    load_rules,
    rules_from_data,
)
from langcheck.profiles import PROFILES, LanguageProfile, get_profile
from langcheck.rules import (
    LongParagraphRule,
    LongSentenceRule,
    MultipleWhitespaceRule,
    Rule,
    SimpleReplaceRule,
    SpellerRule,
    TextLevelRule,
    WordRepeatRule,
    load_replacements,
)
from langcheck.spelling import (
    MultiSpeller,
    NGramLanguageModel,
    SpellCheckerDictionary,
    Speller,
    SuggestionRanker,
    WordListDictionary,
    load_word_list,
)

__version__ = "0.1.0"
__all__ = [
    # Main API
    "Checker",
    "CheckResult",
    "CheckStats",
    "create_checker",
    "check_batch",
    # Configuration
    "CheckerConfig",
    "LanguageProfile",
    "PROFILES",
    "get_profile",
    # Models
    "AnalyzedToken",
    "AnnotatedToken",
    "AnalyzedSentence",
    "RuleMatch",
    "SuggestionCandidate",
    # Casing
    "CaseConversion",
    "CaseConverter",
    "DEFAULT_CASE_CONVERTER",
    # Patterns
    "MatchElement",
    "ElementException",
    "PatternRule",
    "PatternMatcher",
    "load_rules",
    "rules_from_data",
    # Rules
    "Rule",
    "TextLevelRule",
    "SpellerRule",
    "SimpleReplaceRule",
    "load_replacements",
    "WordRepeatRule",
    "MultipleWhitespaceRule",
    "LongSentenceRule",
    "LongParagraphRule",
    # Spelling
    "Speller",
    "MultiSpeller",
    "WordListDictionary",
    "SpellCheckerDictionary",
    "load_word_list",
    "SuggestionRanker",
    "NGramLanguageModel",
    # Exceptions
    "LangCheckError",
    "ConfigurationError",
    "ResourceUnavailableError",
]
