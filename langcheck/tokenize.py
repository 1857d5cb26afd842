"""
Lightweight text analysis: sentence splitting, word tokenization, tagging.

These are deliberately simple regex-based components so that a profile
works out of the box. Profiles can swap in any callables with the same
signatures:

    sentence_splitter(text) -> list[(offset, sentence_text)]
    tokenizer(text, offset) -> list[AnnotatedToken]
    tagger(tokens) -> None            (adds readings in place)
    disambiguator(tokens) -> list[AnnotatedToken]
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Iterable, Mapping, Sequence

from langcheck.models import AnnotatedToken

if TYPE_CHECKING:
    from langcheck.spelling.dictionary import WordListDictionary

logger = logging.getLogger(__name__)


# =============================================================================
# PATTERNS
# =============================================================================

# Order matters: URLs and e-mail addresses are kept whole
TOKEN_PATTERN = re.compile(
    r"""
    (?:[a-z][a-z0-9+.-]*://|www\.)[^\s]*[^\s.,;:!?)\]'"]   # URL
    | [\w.+-]+@[\w-]+(?:\.[\w-]+)+                         # e-mail
    | \d+(?:[.,]\d+)*                                      # number
    | \w+(?:[-'’]\w+)*                                     # word, incl. hyphen/apostrophe compounds
    | [^\w\s]                                              # any other single symbol
    """,
    re.VERBOSE | re.IGNORECASE,
)

# Sentence-final punctuation (with closing quotes/brackets) or a blank line
SENTENCE_BOUNDARY_PATTERN = re.compile(r"[.!?]+[\"'”’)\]]*(?=\s)|\n[ \t]*\n")


# =============================================================================
# SENTENCES AND TOKENS
# =============================================================================


def split_sentences(text: str) -> list[tuple[int, str]]:
    """
    Split text into sentences.

    A sentence ends at ".", "!" or "?" followed by whitespace, unless the
    next word starts lowercase ("e.g. this"), and at blank lines.

    Returns:
        (offset, sentence) pairs; sentences are stripped and never empty.

    Example:
        >>> split_sentences("One two.  Three?")
        [(0, 'One two.'), (10, 'Three?')]
    """
    pieces = []
    start = 0
    for m in SENTENCE_BOUNDARY_PATTERN.finditer(text):
        if not m.group().isspace():
            following = text[m.end() :].lstrip()
            if following and following[0].islower():
                continue
        pieces.append((start, m.end()))
        start = m.end()
    pieces.append((start, len(text)))

    sentences = []
    for begin, end in pieces:
        chunk = text[begin:end]
        stripped = chunk.lstrip()
        offset = begin + len(chunk) - len(stripped)
        stripped = stripped.rstrip()
        if stripped:
            sentences.append((offset, stripped))
    return sentences


def tokenize_words(text: str, offset: int = 0) -> list[AnnotatedToken]:
    """
    Split a sentence into tokens without readings.

    Args:
        text: Sentence text.
        offset: Position of ``text`` in the document; added to token offsets.

    Returns:
        Tokens in order; whitespace is not a token but is recorded in
        ``whitespace_before``.
    """
    tokens = []
    for m in TOKEN_PATTERN.finditer(text):
        start = m.start()
        tokens.append(
            AnnotatedToken(
                text=m.group(),
                start_pos=offset + start,
                whitespace_before=start > 0 and text[start - 1].isspace(),
                sentence_start=not tokens,
            )
        )
    return tokens


# =============================================================================
# TAGGING
# =============================================================================


class DictionaryTagger:
    """
    Tagger backed by a lexicon of (lemma, POS tag) readings.

    Lookup tries the exact form first, then the lowercase form. Tokens not
    in the lexicon keep an empty reading list.

    Example:
        >>> tagger = DictionaryTagger({"runs": [("run", "VBZ"), ("run", "NNS")]})
        >>> tokens = tokenize_words("He runs")
        >>> tagger(tokens)
        >>> tokens[1].pos_tags
        ['VBZ', 'NNS']
    """

    def __init__(self, lexicon: Mapping[str, Sequence[tuple[str | None, str | None]]]):
        self._lexicon = {form: tuple(readings) for form, readings in lexicon.items()}

    def __len__(self) -> int:
        return len(self._lexicon)

    @classmethod
    def from_dictionary(cls, dictionary: WordListDictionary) -> DictionaryTagger:
        """Use a word list's tags as POS tags, with the word as its own lemma."""
        lexicon = {word: [(word, tag) for tag in sorted(dictionary.tags_for(word))] for word in dictionary}
        return cls({word: readings for word, readings in lexicon.items() if readings})

    def readings_for(self, form: str) -> tuple[tuple[str | None, str | None], ...]:
        return self._lexicon.get(form) or self._lexicon.get(form.lower(), ())

    def __call__(self, tokens: Iterable[AnnotatedToken]) -> None:
        for token in tokens:
            for lemma, pos_tag in self.readings_for(token.text):
                token.add_reading(lemma, pos_tag)
