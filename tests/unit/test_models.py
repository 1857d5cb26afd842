"""
Tests for langcheck data models.
"""

import re

from langcheck.models import (
    AnalyzedSentence,
    AnalyzedToken,
    AnnotatedToken,
    RuleMatch,
    SuggestionCandidate,
)


class TestAnnotatedToken:
    """Test AnnotatedToken readings and offsets."""

    def test_from_reading_without_lemma_or_tag(self):
        """No reading is created when lemma and tag are unknown."""
        token = AnnotatedToken.from_reading("xyz")
        assert token.readings == []
        assert token.is_tagged is False
        assert token.lemmas == []
        assert token.pos_tags == []

    def test_from_reading_with_tag(self):
        """A single reading is created from lemma and tag."""
        token = AnnotatedToken.from_reading("runs", lemma="run", pos_tag="VBZ", start_pos=3)
        assert token.readings == [AnalyzedToken("runs", "run", "VBZ")]
        assert token.is_tagged is True
        assert token.start_pos == 3
        assert token.end_pos == 7

    def test_add_reading(self):
        """Readings accumulate in order."""
        token = AnnotatedToken.from_reading("runs", lemma="run", pos_tag="VBZ")
        token.add_reading("run", "NNS")
        assert token.pos_tags == ["VBZ", "NNS"]
        assert token.lemmas == ["run", "run"]

    def test_has_pos_tag_full_match(self):
        """POS patterns must match the whole tag."""
        token = AnnotatedToken.from_reading("runs", lemma="run", pos_tag="VBZ")
        assert token.has_pos_tag("VB.*")
        assert token.has_pos_tag(re.compile("VBZ"))
        assert not token.has_pos_tag("VB")
        assert not token.has_pos_tag("NN.*")

    def test_has_pos_tag_untagged(self):
        """Untagged tokens match no POS pattern."""
        assert not AnnotatedToken("bar").has_pos_tag(".*")

    def test_lemma_only_reading(self):
        """A reading may carry a lemma without a tag."""
        token = AnnotatedToken.from_reading("went", lemma="go")
        assert token.has_lemma("go")
        assert token.is_tagged is False

    def test_with_readings_leaves_original(self):
        """with_readings returns a new token."""
        token = AnnotatedToken.from_reading("runs", lemma="run", pos_tag="VBZ")
        token.add_reading("run", "NNS")
        narrowed = token.with_readings([token.readings[1]])
        assert narrowed.pos_tags == ["NNS"]
        assert token.pos_tags == ["VBZ", "NNS"]
        assert narrowed.text == "runs"


class TestAnalyzedSentence:
    """Test AnalyzedSentence."""

    def test_words_and_length(self):
        """Sentence exposes its surface forms."""
        sentence = AnalyzedSentence("a b", (AnnotatedToken("a"), AnnotatedToken("b", start_pos=2)))
        assert len(sentence) == 2
        assert sentence.words == ["a", "b"]


class TestRuleMatch:
    """Test RuleMatch serialization."""

    def test_to_dict(self):
        """to_dict reports offset and length."""
        match = RuleMatch("R1", "msg", from_pos=4, to_pos=9, suggested_replacements=["x"])
        data = match.to_dict()
        assert data["rule_id"] == "R1"
        assert data["offset"] == 4
        assert data["length"] == 5
        assert data["replacements"] == ["x"]


class TestSuggestionCandidate:
    """Test candidate ordering."""

    def test_unscored_orders_by_distance_then_text(self):
        """Without scores, distance then text decides."""
        candidates = [
            SuggestionCandidate("b", 2),
            SuggestionCandidate("c", 1),
            SuggestionCandidate("a", 1),
        ]
        ordered = sorted(candidates, key=lambda c: c.sort_key)
        assert [c.correction for c in ordered] == ["a", "c", "b"]

    def test_score_descending_first(self):
        """Higher scores win over smaller distances."""
        candidates = [
            SuggestionCandidate("near", 1, lm_score=-5.0),
            SuggestionCandidate("far", 3, lm_score=-1.0),
        ]
        ordered = sorted(candidates, key=lambda c: c.sort_key)
        assert [c.correction for c in ordered] == ["far", "near"]

    def test_scored_before_unscored(self):
        """Scored candidates come before unscored ones."""
        candidates = [
            SuggestionCandidate("plain", 1),
            SuggestionCandidate("scored", 2, lm_score=-10.0),
        ]
        ordered = sorted(candidates, key=lambda c: c.sort_key)
        assert [c.correction for c in ordered] == ["scored", "plain"]
