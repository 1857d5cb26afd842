"""
Tests for the checker orchestrator.
"""

import logging

import pytest

from langcheck import CheckerConfig
from langcheck.checker import Checker, CheckResult, check_batch, create_checker
from langcheck.models import RuleMatch
from langcheck.profiles import ENGLISH_PROFILE, GENERIC_PROFILE
from langcheck.rules import LongParagraphRule, Rule, TextLevelRule
from langcheck.spelling import WordListDictionary


class FailingRule(Rule):
    """Raises on every sentence."""

    id = "FAILING_RULE"
    description = "Always fails"

    def match(self, sentence):
        raise RuntimeError("boom")


class FirstTokenRule(Rule):
    """Reports the first token of every sentence."""

    id = "FIRST_TOKEN"
    description = "Marks sentence starts"

    def match(self, sentence):
        token = sentence.tokens[0]
        return [RuleMatch(self.id, "start", token.start_pos, token.end_pos, start_token=0, end_token=1)]


class FailingTextRule(TextLevelRule):
    """Raises on every text."""

    id = "FAILING_TEXT_RULE"
    description = "Always fails"

    def match_text(self, sentences, text=None):
        raise RuntimeError("boom")


class TestAnalyze:
    """Test text analysis."""

    def test_sentences_and_offsets(self):
        checker = Checker(GENERIC_PROFILE)
        sentences = checker.analyze("One two. Three four.")
        assert [s.text for s in sentences] == ["One two.", "Three four."]
        assert sentences[1].start_pos == 9
        assert sentences[1].tokens[0].start_pos == 9

    def test_tagger_applied(self):
        def tagger(tokens):
            for token in tokens:
                token.add_reading(token.text.lower(), "X")

        checker = Checker(GENERIC_PROFILE.with_resources(tagger=tagger))
        sentence = checker.analyze_sentence("Hi there")
        assert all(t.pos_tags == ["X"] for t in sentence.tokens)

    def test_disambiguator_applied(self):
        checker = Checker(GENERIC_PROFILE.with_resources(disambiguator=lambda tokens: tokens[:1]))
        assert len(checker.analyze_sentence("Hi there")) == 1

    def test_none_rejected(self):
        with pytest.raises(ValueError):
            Checker(GENERIC_PROFILE).analyze(None)


class TestCheck:
    """Test rule execution."""

    def test_english_article(self):
        matches = create_checker("en").check("I ate a apple.")
        assert [m.rule_id for m in matches] == ["EN_A_VS_AN"]
        assert matches[0].suggested_replacements == ["an"]
        assert (matches[0].from_pos, matches[0].to_pos) == (6, 13)

    def test_english_article_exception(self):
        assert create_checker("en").check("It is a unicorn.") == []

    def test_document_order_then_rule_order(self):
        profile = GENERIC_PROFILE.with_resources(rules=[FirstTokenRule()])
        matches = Checker(profile).check("The the end. A a b.")
        assert [(m.rule_id, m.from_pos) for m in matches] == [
            ("WORD_REPEAT_RULE", 0),
            ("FIRST_TOKEN", 0),
            ("WORD_REPEAT_RULE", 13),
            ("FIRST_TOKEN", 13),
        ]

    def test_parallel_keeps_order(self):
        profile = GENERIC_PROFILE.with_resources(rules=[FirstTokenRule()])
        text = " ".join(f"Sentence {i}." for i in range(20))
        sequential = Checker(profile).check(text)
        parallel = Checker(profile, CheckerConfig(parallel=True, max_workers=4)).check(text)
        assert parallel == sequential
        assert len(parallel) == 20

    def test_spelling_added_with_dictionaries(self):
        profile = GENERIC_PROFILE.with_resources(dictionaries=[WordListDictionary(["the", "cat", "sat"])])
        checker = Checker(profile)
        assert checker.rules[-1].id == "SPELLER_RULE"
        matches = checker.check("The cst sat.")
        assert [m.rule_id for m in matches] == ["SPELLER_RULE"]
        assert matches[0].suggested_replacements == ["cat"]

    def test_disabled_rules(self):
        config = CheckerConfig(disabled_rules={"WORD_REPEAT_RULE"})
        checker = Checker(GENERIC_PROFILE, config)
        assert "WORD_REPEAT_RULE" not in [r.id for r in checker.rules]
        assert checker.check("The the end.") == []

    def test_empty_text(self):
        assert Checker(GENERIC_PROFILE).check("") == []


class TestTextLevelRules:
    """Test rules that see the whole text."""

    TEXT = "A b c d.\n\nE f."

    def test_rules_partitioned(self):
        profile = GENERIC_PROFILE.with_resources(rules=[LongParagraphRule(), FirstTokenRule()])
        checker = Checker(profile)
        assert [r.id for r in checker.text_rules] == ["TOO_LONG_PARAGRAPH"]
        assert "TOO_LONG_PARAGRAPH" not in [r.id for r in checker.sentence_rules]
        assert len(checker.rules) == 4

    def test_matches_in_document_order(self):
        profile = GENERIC_PROFILE.with_resources(rules=[LongParagraphRule(max_words=2), FirstTokenRule()])
        matches = Checker(profile).check(self.TEXT)
        assert [(m.rule_id, m.from_pos, m.to_pos) for m in matches] == [
            ("FIRST_TOKEN", 0, 1),
            ("TOO_LONG_PARAGRAPH", 0, 3),
            ("FIRST_TOKEN", 10, 11),
        ]

    def test_blank_line_ends_paragraph(self):
        profile = GENERIC_PROFILE.with_resources(rules=[LongParagraphRule(max_words=4)])
        assert Checker(profile).check(self.TEXT) == []
        assert len(Checker(profile).check("A b c d. E f.")) == 1

    def test_parallel_same_result(self):
        profile = GENERIC_PROFILE.with_resources(rules=[LongParagraphRule(max_words=2), FirstTokenRule()])
        sequential = Checker(profile).check(self.TEXT)
        parallel = Checker(profile, CheckerConfig(parallel=True, max_workers=2)).check(self.TEXT)
        assert parallel == sequential

    def test_failure_counted(self):
        profile = GENERIC_PROFILE.with_resources(rules=[FailingTextRule(), FirstTokenRule()])
        result = Checker(profile, CheckerConfig(on_rule_error="skip")).check_with_stats(self.TEXT)
        assert [m.rule_id for m in result.matches] == ["FIRST_TOKEN", "FIRST_TOKEN"]
        assert result.stats.rule_failures == 1

    def test_failure_raised(self):
        profile = GENERIC_PROFILE.with_resources(rules=[FailingTextRule()])
        with pytest.raises(RuntimeError, match="boom"):
            Checker(profile, CheckerConfig(on_rule_error="raise")).check(self.TEXT)


class TestRuleFailures:
    """Test on_rule_error handling."""

    @pytest.fixture
    def profile(self):
        return GENERIC_PROFILE.with_resources(rules=[FailingRule(), FirstTokenRule()])

    def test_warn_continues(self, profile, caplog):
        checker = Checker(profile, CheckerConfig(on_rule_error="warn"))
        with caplog.at_level(logging.WARNING, logger="langcheck.checker"):
            result = checker.check_with_stats("Hello world.")
        assert [m.rule_id for m in result.matches] == ["FIRST_TOKEN"]
        assert result.stats.rule_failures == 1
        assert "FAILING_RULE" in caplog.text

    def test_skip_continues(self, profile):
        result = Checker(profile, CheckerConfig(on_rule_error="skip")).check_with_stats("Hello world.")
        assert [m.rule_id for m in result.matches] == ["FIRST_TOKEN"]
        assert result.stats.rule_failures == 1

    def test_raise(self, profile):
        with pytest.raises(RuntimeError, match="boom"):
            Checker(profile, CheckerConfig(on_rule_error="raise")).check("Hello world.")


class TestStats:
    """Test run statistics."""

    def test_counts(self):
        result = Checker(GENERIC_PROFILE).check_with_stats("The the end. Fine here.")
        assert isinstance(result, CheckResult)
        assert result.text == "The the end. Fine here."
        assert result.stats.sentences_checked == 2
        assert result.stats.matches_found == 1
        assert result.stats.rule_failures == 0
        assert result.stats.processing_time_ms >= 0


class TestCheckBatch:
    """Test batch checking."""

    def test_results_in_order(self):
        results = list(check_batch(["The the end.", "Fine."], Checker(GENERIC_PROFILE)))
        assert [i for i, _ in results] == [0, 1]
        assert len(results[0][1].matches) == 1
        assert results[1][1].matches == []

    def test_bad_input_yields_exception(self):
        results = list(check_batch(["Fine.", None], Checker(GENERIC_PROFILE)))
        assert isinstance(results[1][1], ValueError)

    def test_bad_input_skipped(self):
        checker = Checker(GENERIC_PROFILE, CheckerConfig(on_rule_error="skip"))
        results = list(check_batch([None, "Fine."], checker))
        assert [i for i, _ in results] == [1]

    def test_bad_input_raises(self):
        checker = Checker(GENERIC_PROFILE, CheckerConfig.strict())
        with pytest.raises(ValueError):
            list(check_batch([None], checker))


class TestCreateChecker:
    """Test the factory."""

    def test_known_language(self):
        assert create_checker("en").profile is ENGLISH_PROFILE

    def test_unknown_language(self):
        assert create_checker("fi").profile is GENERIC_PROFILE
