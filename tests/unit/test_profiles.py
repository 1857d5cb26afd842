"""Tests for language profiles.

LanguageProfile bundles the analysis components and resources for one language.
"""

import pytest

from langcheck.exceptions import ResourceUnavailableError
from langcheck.profiles import (
    ENGLISH_PROFILE,
    GENERIC_PROFILE,
    PROFILES,
    TURKISH_PROFILE,
    LanguageProfile,
    get_profile,
)
from langcheck.rules import WordRepeatRule
from langcheck.spelling import NGramLanguageModel, WordListDictionary
from langcheck.tokenize import split_sentences, tokenize_words


class TestLanguageProfile:
    """Test LanguageProfile dataclass."""

    def test_defaults(self):
        """A bare profile uses the built-in analysis and has no resources."""
        profile = LanguageProfile(code="fi", name="Finnish", locale="fi")
        assert profile.tokenizer is tokenize_words
        assert profile.sentence_splitter is split_sentences
        assert profile.tagger is None
        assert profile.disambiguator is None
        assert profile.rules == ()
        assert not profile.checks_spelling

    def test_case_converter_uses_locale(self):
        """Case conversion follows the profile locale."""
        assert TURKISH_PROFILE.case_converter.to_uppercase("i") == "İ"
        assert ENGLISH_PROFILE.case_converter.to_uppercase("i") == "I"

    def test_profiles_are_frozen(self):
        """Profiles cannot be mutated in place."""
        with pytest.raises(AttributeError):
            ENGLISH_PROFILE.locale = "en_GB"

    def test_with_resources_appends(self):
        """Rules and dictionaries are appended, other resources replaced."""
        words = WordListDictionary(["hello"])
        extra_rule = WordRepeatRule()
        model = NGramLanguageModel.from_sentences([["hello"]])

        profile = GENERIC_PROFILE.with_resources(rules=[extra_rule], dictionaries=[words], language_model=model)

        assert profile.rules == GENERIC_PROFILE.rules + (extra_rule,)
        assert profile.dictionaries == (words,)
        assert profile.language_model is model
        assert profile.checks_spelling
        # Original untouched
        assert GENERIC_PROFILE.dictionaries == ()

    def test_with_resources_keeps_unspecified(self):
        """Omitted resources keep their current value."""
        tagger = lambda tokens: None  # noqa: E731
        profile = GENERIC_PROFILE.with_resources(tagger=tagger).with_resources(rules=[])
        assert profile.tagger is tagger
        assert profile.rules == GENERIC_PROFILE.rules

    def test_with_spellchecker_unavailable_language(self):
        """Languages without a pyspellchecker list raise a resource error."""
        with pytest.raises(ResourceUnavailableError):
            TURKISH_PROFILE.with_spellchecker()


class TestStandardProfiles:
    """Test the predefined profiles."""

    def test_registry(self):
        """All standard languages are registered by code."""
        assert set(PROFILES) == {"en", "nl", "de", "tr", "xx"}
        for code, profile in PROFILES.items():
            assert profile.code == code

    def test_english_rules(self):
        """English adds the article rule to the generic rules."""
        ids = [r.id for r in ENGLISH_PROFILE.rules]
        assert ids == ["WORD_REPEAT_RULE", "WHITESPACE_RULE", "TOO_LONG_SENTENCE", "EN_A_VS_AN"]

    def test_rule_ids_unique(self):
        """No profile declares the same rule twice."""
        for profile in PROFILES.values():
            ids = [r.id for r in profile.rules]
            assert len(ids) == len(set(ids))


class TestGetProfile:
    """Test get_profile function."""

    @pytest.mark.parametrize("code", ["en", "EN", "en_US", "en-GB"])
    def test_locale_codes(self, code):
        """Region and case do not matter."""
        assert get_profile(code) is ENGLISH_PROFILE

    def test_unknown_falls_back(self):
        """Unknown languages get the generic profile."""
        assert get_profile("fi") is GENERIC_PROFILE
