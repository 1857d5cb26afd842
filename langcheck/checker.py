"""
Checker orchestrator.

This module runs a language profile over text:
1. Sentence splitting and tokenization
2. Tagging and disambiguation
3. Rule matching (pattern rules, spell checking, generic rules)

Matches come back in document order; within a sentence, in the order the
rules were declared. Text-level rules (TextLevelRule) run once per text
after the sentence rules, and their matches are filed under the sentence
they start in. A rule that fails is logged and skipped (see
CheckerConfig.on_rule_error) without affecting other rules.
"""

from __future__ import annotations

import logging
import time
from bisect import bisect_right
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable

from langcheck.config import CheckerConfig
from langcheck.models import AnalyzedSentence
from langcheck.profiles import get_profile
from langcheck.rules import SpellerRule, TextLevelRule

if TYPE_CHECKING:
    from langcheck.models import RuleMatch
    from langcheck.profiles import LanguageProfile
    from langcheck.rules import Rule

logger = logging.getLogger(__name__)


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass
class CheckStats:
    """Statistics for one checking run."""

    sentences_checked: int = 0
    matches_found: int = 0
    rule_failures: int = 0
    processing_time_ms: float = 0.0


@dataclass
class CheckResult:
    """Result of checking a text."""

    text: str
    matches: list[RuleMatch] = field(default_factory=list)
    stats: CheckStats = field(default_factory=CheckStats)


@dataclass
class _SentenceResult:
    matches: list[RuleMatch]
    failures: int


# =============================================================================
# CHECKER
# =============================================================================


class Checker:
    """
    Checks text with the rules of a language profile.

    The checker and its rules are read-only after construction, so one
    instance can serve concurrent calls.

    Attributes:
        profile: Language profile providing analysis components and rules.
        config: Checking options.
        rules: Active rules in declaration order (spell checking last).

    Example:
        >>> checker = Checker(get_profile("en"))
        >>> [m.rule_id for m in checker.check("This is is a test.")]
        ['WORD_REPEAT_RULE']
    """

    def __init__(self, profile: LanguageProfile, config: CheckerConfig | None = None):
        self.profile = profile
        self.config = config or CheckerConfig()
        self.rules = self._build_rules()
        self.sentence_rules = [r for r in self.rules if not isinstance(r, TextLevelRule)]
        self.text_rules = [r for r in self.rules if isinstance(r, TextLevelRule)]
        logger.debug(
            "Checker for %s with %d rules: %s",
            profile.code,
            len(self.rules),
            ", ".join(r.id for r in self.rules),
        )

    def __repr__(self) -> str:
        return f"Checker({self.profile.code!r}, rules={len(self.rules)})"

    def _build_rules(self) -> list[Rule]:
        rules = list(self.profile.rules)
        if self.profile.checks_spelling:
            rules.append(
                SpellerRule.from_config(
                    self.profile.dictionaries,
                    self.config,
                    language_model=self.profile.language_model,
                    case_converter=self.profile.case_converter,
                )
            )
        return [r for r in rules if r.id not in self.config.disabled_rules]

    # -------------------------------------------------------------------------
    # Analysis
    # -------------------------------------------------------------------------

    def analyze_sentence(self, text: str, offset: int = 0) -> AnalyzedSentence:
        """Tokenize, tag and disambiguate one sentence."""
        tokens = self.profile.tokenizer(text, offset)
        if self.profile.tagger is not None:
            self.profile.tagger(tokens)
        if self.profile.disambiguator is not None:
            tokens = self.profile.disambiguator(tokens)
        return AnalyzedSentence(text=text, tokens=tuple(tokens), start_pos=offset)

    def analyze(self, text: str) -> list[AnalyzedSentence]:
        """
        Split text into analyzed sentences.

        Args:
            text: Text to analyze.

        Returns:
            Sentences in document order; offsets refer to ``text``.
        """
        if text is None:
            raise ValueError("Input text cannot be None")
        return [self.analyze_sentence(s, offset) for offset, s in self.profile.sentence_splitter(text)]

    # -------------------------------------------------------------------------
    # Checking
    # -------------------------------------------------------------------------

    def _apply(self, rule: Rule, position: int, func: Callable[..., list[RuleMatch]], *args) -> list[RuleMatch] | None:
        """Call one rule; None when it failed and on_rule_error absorbed the failure."""
        try:
            return func(*args)
        except Exception as e:
            if self.config.on_rule_error == "raise":
                raise
            if self.config.on_rule_error == "warn":
                logger.warning("Rule %s failed on text at %d: %s", rule.id, position, e)
            else:
                logger.debug("Rule %s failed on text at %d: %s", rule.id, position, e)
            return None

    def _check_sentence(self, sentence: AnalyzedSentence) -> _SentenceResult:
        matches: list[RuleMatch] = []
        failures = 0
        for rule in self.sentence_rules:
            found = self._apply(rule, sentence.start_pos, rule.match, sentence)
            if found is None:
                failures += 1
            else:
                matches.extend(found)
        return _SentenceResult(matches, failures)

    def _check_text(
        self, sentences: list[AnalyzedSentence], results: list[_SentenceResult], text: str | None
    ) -> int:
        """Run text-level rules and file each match under the sentence it starts in."""
        failures = 0
        starts = [s.start_pos for s in sentences]
        for rule in self.text_rules:
            found = self._apply(rule, 0, rule.match_text, sentences, text)
            if found is None:
                failures += 1
                continue
            for match in found:
                index = max(bisect_right(starts, match.from_pos) - 1, 0)
                results[index].matches.append(match)
        return failures

    def _run(self, sentences: list[AnalyzedSentence], text: str | None = None) -> tuple[list[_SentenceResult], int]:
        if self.config.parallel and len(sentences) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                # map() yields in submission order
                results = list(executor.map(self._check_sentence, sentences))
        else:
            results = [self._check_sentence(s) for s in sentences]
        if not sentences:
            return results, 0
        return results, self._check_text(sentences, results, text)

    def check_sentences(self, sentences: Iterable[AnalyzedSentence]) -> list[RuleMatch]:
        """Run all rules over already analyzed sentences."""
        results, _ = self._run(list(sentences))
        return [m for r in results for m in r.matches]

    def check(self, text: str) -> list[RuleMatch]:
        """
        Check text and return all matches.

        Args:
            text: Text to check.

        Returns:
            Matches in document order, then rule declaration order.
        """
        return self.check_with_stats(text).matches

    def check_with_stats(self, text: str) -> CheckResult:
        """Check text and return matches with run statistics."""
        start_time = time.time()
        sentences = self.analyze(text)
        results, text_failures = self._run(sentences, text)

        matches = [m for r in results for m in r.matches]
        stats = CheckStats(
            sentences_checked=len(sentences),
            matches_found=len(matches),
            rule_failures=sum(r.failures for r in results) + text_failures,
            processing_time_ms=(time.time() - start_time) * 1000,
        )
        logger.info(
            "Checked %d sentences: %d matches, %d rule failures (%.1f ms)",
            stats.sentences_checked,
            stats.matches_found,
            stats.rule_failures,
            stats.processing_time_ms,
        )
        return CheckResult(text=text, matches=matches, stats=stats)


def create_checker(language: str = "en", config: CheckerConfig | None = None) -> Checker:
    """
    Create a checker for a language code.

    Unknown languages get the generic profile.

    Example:
        >>> checker = create_checker("nl")
    """
    return Checker(get_profile(language), config)


def check_batch(
    texts: Iterable[str],
    checker: Checker,
):
    """
    Check multiple texts, yielding results in input order.

    Args:
        texts: Texts to check.
        checker: Checker to use.

    Yields:
        (index, result) tuples where result is a CheckResult or Exception
    """
    for index, text in enumerate(texts):
        try:
            yield (index, checker.check_with_stats(text))
        except Exception as e:
            if checker.config.on_rule_error == "raise":
                raise
            if checker.config.on_rule_error == "skip":
                continue
            logger.warning("Text %d could not be checked: %s", index, e)
            yield (index, e)
