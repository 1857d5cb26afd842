"""
Tests for suggestion ranking and the n-gram language model.
"""

from collections import Counter

import pytest
from spellchecker import SpellChecker

from langcheck.exceptions import ConfigurationError
from langcheck.models import SuggestionCandidate
from langcheck.spelling import LanguageModel, NGramLanguageModel, SuggestionRanker, order_candidates


class FixedModel(LanguageModel):
    """Scores a sequence by a fixed per-word table."""

    name = "fixed"

    def __init__(self, scores):
        self.scores = scores

    def score(self, tokens):
        return sum(self.scores.get(t, 0.0) for t in tokens)


class TestPassThrough:
    """Ranker without a language model."""

    @pytest.mark.parametrize(
        "suggestions",
        [[], ["a"], ["b", "a", "c"], ["same", "same"], ["zeta", "alpha", "mid"]],
    )
    def test_preserves_order(self, suggestions):
        ranker = SuggestionRanker()
        assert ranker.is_pass_through
        assert ranker.rank(suggestions, ["x", "?", "y"], 1) == suggestions

    def test_returns_new_list(self):
        suggestions = ["b", "a"]
        ranked = SuggestionRanker().rank(suggestions, [], 0)
        assert ranked == suggestions
        assert ranked is not suggestions

    def test_candidates_untouched(self):
        candidates = [SuggestionCandidate("b", 2), SuggestionCandidate("a", 1)]
        assert SuggestionRanker().rank_candidates(candidates, [], 0) == candidates

    def test_scoring_requires_model(self):
        with pytest.raises(ConfigurationError):
            SuggestionRanker().score("a", ["a"], 0)


class TestScoredRanking:
    """Ranker with a language model."""

    def test_sorted_by_descending_score(self):
        ranker = SuggestionRanker(FixedModel({"good": 2.0, "better": 5.0, "bad": -1.0}))
        assert ranker.rank(["bad", "good", "better"], ["the", "?"], 1) == ["better", "good", "bad"]

    def test_ties_keep_input_order(self):
        ranker = SuggestionRanker(FixedModel({}))
        assert ranker.rank(["b", "a", "c"], ["x", "?"], 1) == ["b", "a", "c"]

    def test_context_window(self):
        """Only context_length tokens on each side reach the model."""
        seen = []

        class RecordingModel(LanguageModel):
            def score(self, tokens):
                seen.append(list(tokens))
                return 0.0

        ranker = SuggestionRanker(RecordingModel(), context_length=1)
        ranker.rank(["cat"], ["a", "the", "cst", "sat", "down"], 2)
        assert seen == [["the", "cat", "sat"]]

    def test_rank_candidates_attaches_scores(self):
        ranker = SuggestionRanker(FixedModel({"far": 3.0, "near": 1.0}))
        candidates = [SuggestionCandidate("near", 1), SuggestionCandidate("far", 2)]
        ranked = ranker.rank_candidates(candidates, ["?"], 0)
        assert [c.correction for c in ranked] == ["far", "near"]
        assert ranked[0].lm_score == 3.0

    def test_invalid_context_length(self):
        with pytest.raises(ConfigurationError):
            SuggestionRanker(context_length=-1)


class TestOrderCandidates:
    """Test the candidate comparator."""

    def test_order(self):
        candidates = [
            SuggestionCandidate("c", 1),
            SuggestionCandidate("b", 2, lm_score=-2.0),
            SuggestionCandidate("a", 3, lm_score=-2.0),
            SuggestionCandidate("d", 1, lm_score=-1.0),
        ]
        assert [c.correction for c in order_candidates(candidates)] == ["d", "b", "a", "c"]


class TestNGramLanguageModel:
    """Test the stupid backoff model."""

    @pytest.fixture
    def model(self):
        sentences = [
            ["the", "cat", "sat"],
            ["the", "cat", "ran"],
            ["a", "cot", "is", "a", "bed"],
        ]
        return NGramLanguageModel.from_sentences(sentences, order=2)

    def test_counts(self, model):
        assert model.count("the", "cat") == 2
        assert model.count("cat") == 2
        assert model.count("The") == 2

    def test_seen_bigram_scores_higher(self, model):
        assert model.score(["the", "cat"]) > model.score(["the", "cot"])

    def test_unseen_words_have_finite_score(self, model):
        score = model.score(["zzz", "qqq"])
        assert score < 0
        assert score > float("-inf")

    def test_ranker_prefers_context_fit(self, model):
        ranker = SuggestionRanker(model)
        assert ranker.rank(["cot", "cat"], ["the", "cxt", "sat"], 1) == ["cat", "cot"]

    def test_invalid_order(self):
        with pytest.raises(ConfigurationError):
            NGramLanguageModel(Counter(), order=0)

    def test_from_spellchecker(self):
        spell = SpellChecker(language=None)
        spell.word_frequency.load_words(["cat", "cat", "cot"])
        model = NGramLanguageModel.from_spellchecker(spell)
        assert model.order == 1
        assert model.count("cat") == 2
        assert model.score(["cat"]) > model.score(["cot"])
