"""
Checking rules.

Every rule implements ``match(sentence) -> list[RuleMatch]``:
- PatternRule (in langcheck.patterns): declarative token patterns
- SpellerRule: dictionary-based spell checking
- SimpleReplaceRule: words with a listed replacement
- WordRepeatRule, MultipleWhitespaceRule, LongSentenceRule: generic checks

TextLevelRule subclasses also implement ``match_text(sentences, text)``
and see a whole text at once:
- LongParagraphRule: paragraphs over a word limit
"""

from langcheck.rules.base import Rule, TextLevelRule
from langcheck.rules.builtin import LongParagraphRule, LongSentenceRule, MultipleWhitespaceRule, WordRepeatRule
from langcheck.rules.replace import SimpleReplaceRule, load_replacements, parse_replacements
from langcheck.rules.speller_rule import SpellerRule

__all__ = [
    "Rule",
    "TextLevelRule",
    "SpellerRule",
    "SimpleReplaceRule",
    "load_replacements",
    "parse_replacements",
    "WordRepeatRule",
    "MultipleWhitespaceRule",
    "LongSentenceRule",
    "LongParagraphRule",
]
