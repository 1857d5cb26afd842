"""
Spelling dictionaries.

A dictionary answers two questions: is this word valid, and which valid
words lie within a given edit distance of it. Two implementations are
provided:

- WordListDictionary: an in-memory trie built from a word list, searched
  with a bounded Levenshtein walk (prefixes whose best distance already
  exceeds the bound are pruned).
- SpellCheckerDictionary: an adapter over a pyspellchecker SpellChecker,
  reusing its word-frequency data and edit-distance candidate generation.

Dictionaries are immutable once built. Lookups keep no cursor state, so a
single instance can be shared by concurrent spellers.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Iterator

from langcheck.exceptions import ResourceUnavailableError
from langcheck.spelling.distance import bounded_distance, next_row

if TYPE_CHECKING:
    from spellchecker import SpellChecker

logger = logging.getLogger(__name__)


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass(frozen=True)
class DictionaryEntry:
    """A word with the tags it carries in the dictionary."""

    word: str
    tags: frozenset[str] = frozenset()


class _TrieNode:
    __slots__ = ("children", "word", "order")

    def __init__(self) -> None:
        self.children: dict[str, _TrieNode] = {}
        self.word: str | None = None
        self.order = -1


# =============================================================================
# DICTIONARY BASE
# =============================================================================


class Dictionary(ABC):
    """
    Abstract base for spelling dictionaries.

    Attributes:
        name: Identifier used in logs.
        converts_case: Whether capitalized or all-caps variants of a known
            lowercase word are accepted too.
    """

    name: str = "base"
    converts_case: bool = True

    @abstractmethod
    def contains(self, word: str) -> bool:
        """Whether ``word`` is in the dictionary exactly as written."""
        pass

    @abstractmethod
    def lookup(self, word: str, max_distance: int) -> list[str]:
        """
        Find dictionary words within ``max_distance`` edits of ``word``.

        Returns:
            Words ordered by ascending edit distance, then by the
            dictionary's natural order. ``word`` itself is included when
            it is in the dictionary.
        """
        pass

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)


# =============================================================================
# WORD LIST DICTIONARY
# =============================================================================


class WordListDictionary(Dictionary):
    """
    In-memory dictionary backed by a character trie.

    Insertion order is the natural order used to break distance ties.

    Example:
        >>> d = WordListDictionary(["wordone", "wordtwo"])
        >>> d.contains("wordone")
        True
        >>> d.lookup("wordonex", 1)
        ['wordone']
    """

    def __init__(
        self,
        entries: Iterable[str | DictionaryEntry],
        converts_case: bool = True,
        name: str = "word_list",
    ):
        """
        Build the dictionary.

        Args:
            entries: Words or DictionaryEntry objects. Empty words are skipped;
                repeated words merge their tags.
            converts_case: Accept capitalized/all-caps variants of lowercase words.
            name: Identifier used in logs.
        """
        self.name = name
        self.converts_case = converts_case
        self._root = _TrieNode()
        self._tags: dict[str, frozenset[str]] = {}

        for entry in entries:
            if isinstance(entry, str):
                entry = DictionaryEntry(entry)
            if not entry.word:
                continue
            if entry.word in self._tags:
                self._tags[entry.word] = self._tags[entry.word] | entry.tags
                continue
            self._tags[entry.word] = entry.tags
            self._insert(entry.word, len(self._tags) - 1)

        logger.debug("Built dictionary '%s' with %d words", self.name, len(self._tags))

    def _insert(self, word: str, order: int) -> None:
        node = self._root
        for char in word:
            node = node.children.setdefault(char, _TrieNode())
        node.word = word
        node.order = order

    def __len__(self) -> int:
        return len(self._tags)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)

    def __repr__(self) -> str:
        return f"WordListDictionary(name={self.name!r}, words={len(self)})"

    def contains(self, word: str) -> bool:
        return word in self._tags

    def tags_for(self, word: str) -> frozenset[str]:
        """Tags recorded for ``word`` (empty when unknown)."""
        return self._tags.get(word, frozenset())

    def lookup(self, word: str, max_distance: int) -> list[str]:
        if max_distance < 0:
            return []

        found: list[tuple[int, int, str]] = []
        first_row = list(range(len(word) + 1))
        stack = [(child, char, first_row) for char, child in self._root.children.items()]

        while stack:
            node, char, previous_row = stack.pop()
            row = next_row(previous_row, char, word)
            if node.word is not None and row[-1] <= max_distance:
                found.append((row[-1], node.order, node.word))
            # No extension of this prefix can get closer than its best cell
            if min(row) <= max_distance:
                stack.extend((child, c, row) for c, child in node.children.items())

        found.sort()
        return [w for _, _, w in found]


# =============================================================================
# PYSPELLCHECKER ADAPTER
# =============================================================================


class SpellCheckerDictionary(Dictionary):
    """
    Dictionary view of a pyspellchecker SpellChecker.

    Natural order is descending corpus frequency, then alphabetical.
    pyspellchecker generates candidates for at most two edits, so larger
    distances are capped at 2.

    Example:
        >>> from spellchecker import SpellChecker
        >>> d = SpellCheckerDictionary(SpellChecker())
        >>> d.contains("philosophy")
        True
    """

    MAX_SUPPORTED_DISTANCE = 2

    def __init__(self, spell: SpellChecker, converts_case: bool = True, name: str = "pyspellchecker"):
        self.spell = spell
        self.converts_case = converts_case
        self.name = name

    @classmethod
    def for_language(cls, language: str = "en", **kwargs) -> SpellCheckerDictionary:
        """
        Load the word-frequency list pyspellchecker ships for ``language``.

        Raises:
            ResourceUnavailableError: If pyspellchecker has no list for it.
        """
        from spellchecker import SpellChecker

        try:
            spell = SpellChecker(language=language)
        except (ValueError, OSError) as e:
            raise ResourceUnavailableError(
                f"No pyspellchecker dictionary for language {language!r}"
            ) from e
        logger.info("Loaded pyspellchecker dictionary for %s", language)
        return cls(spell, name=f"pyspellchecker:{language}", **kwargs)

    def contains(self, word: str) -> bool:
        # SpellChecker.__contains__ lowercases; case variants are the speller's job
        return word in self.spell.word_frequency.dictionary

    def frequency(self, word: str) -> int:
        """Corpus count for ``word`` (0 when unknown)."""
        return self.spell.word_frequency.dictionary.get(word, 0)

    def lookup(self, word: str, max_distance: int) -> list[str]:
        if max_distance < 0 or not word:
            return []
        max_distance = min(max_distance, self.MAX_SUPPORTED_DISTANCE)

        candidates = {word}
        if max_distance >= 1:
            candidates.update(self.spell.edit_distance_1(word))
        if max_distance >= 2:
            candidates.update(self.spell.edit_distance_2(word))

        found = []
        for w in candidates:
            if not self.contains(w):
                continue
            # pyspellchecker edits the lowercased word, so re-measure against the input
            distance = bounded_distance(word, w, max_distance)
            if distance is not None:
                found.append((distance, -self.frequency(w), w))
        found.sort()
        return [w for _, _, w in found]


# =============================================================================
# LOADERS
# =============================================================================


def load_word_list(
    path: str | Path,
    converts_case: bool = True,
    encoding: str = "utf-8",
) -> WordListDictionary:
    """
    Load a plain text word list.

    One entry per line: the word, optionally followed by tab-separated tags.
    Lines starting with ``#`` are comments; trailing ``#`` comments are
    stripped.

    Args:
        path: File to read.
        converts_case: Passed to WordListDictionary.
        encoding: File encoding.

    Returns:
        WordListDictionary named after the file.

    Raises:
        ResourceUnavailableError: If the file cannot be read.
    """
    path = Path(path)
    try:
        with open(path, encoding=encoding) as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceUnavailableError(f"Cannot read word list {path}: {e}") from e

    entries = []
    for line in lines:
        if line.startswith("#"):
            continue
        line = line.split("#", 1)[0].strip()
        if not line:
            continue
        word, *tags = line.split("\t")
        entries.append(DictionaryEntry(word.strip(), frozenset(t.strip() for t in tags if t.strip())))

    dictionary = WordListDictionary(entries, converts_case=converts_case, name=path.name)
    logger.info("Loaded %d words from %s", len(dictionary), path)
    return dictionary
