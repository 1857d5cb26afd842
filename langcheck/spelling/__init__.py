"""
Spell checking for langcheck.

This package provides dictionary lookup and suggestion generation:
- Bounded edit-distance search over in-memory word lists
- pyspellchecker word-frequency dictionaries
- Multi-dictionary merging (a word is valid if any dictionary accepts it)
- Context-aware suggestion ranking with an n-gram language model

Example:
    >>> from langcheck.spelling import Speller, WordListDictionary
    >>> speller = Speller(WordListDictionary(["wordone", "wordtwo"]), max_distance=2)
    >>> speller.get_suggestions("wordonexy")
    ['wordone']
"""

from langcheck.spelling.dictionary import (
    Dictionary,
    DictionaryEntry,
    SpellCheckerDictionary,
    WordListDictionary,
    load_word_list,
)
from langcheck.spelling.distance import bounded_distance, levenshtein_distance
from langcheck.spelling.ranking import (
    LanguageModel,
    NGramLanguageModel,
    SuggestionRanker,
    order_candidates,
)
from langcheck.spelling.speller import MultiSpeller, Speller

__all__ = [
    # Dictionaries
    "Dictionary",
    "DictionaryEntry",
    "WordListDictionary",
    "SpellCheckerDictionary",
    "load_word_list",
    # Spellers
    "Speller",
    "MultiSpeller",
    # Ranking
    "LanguageModel",
    "NGramLanguageModel",
    "SuggestionRanker",
    "order_candidates",
    # Distance
    "levenshtein_distance",
    "bounded_distance",
]
