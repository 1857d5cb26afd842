"""
Pytest configuration and fixtures for langcheck tests.
"""

import pytest


@pytest.fixture(scope="session")
def sample_config():
    """Return a default CheckerConfig for testing."""
    from langcheck import CheckerConfig

    return CheckerConfig()


@pytest.fixture
def word_dictionary():
    """Small in-memory dictionary used across speller tests."""
    from langcheck.spelling import WordListDictionary

    return WordListDictionary(["wordone", "wordtwo"])


@pytest.fixture
def make_tokens():
    """Build untagged tokens from a space-separated string, with offsets."""
    from langcheck.tokenize import tokenize_words

    def _make(text: str):
        return tokenize_words(text)

    return _make


@pytest.fixture
def make_sentence():
    """Build an AnalyzedSentence from text, optionally tagging tokens.

    ``tags`` maps a token index to a list of (lemma, pos_tag) readings.
    """
    from langcheck.models import AnalyzedSentence
    from langcheck.tokenize import tokenize_words

    def _make(text: str, tags=None):
        tokens = tokenize_words(text)
        for index, readings in (tags or {}).items():
            for lemma, pos_tag in readings:
                tokens[index].add_reading(lemma, pos_tag)
        return AnalyzedSentence(text=text, tokens=tuple(tokens))

    return _make
