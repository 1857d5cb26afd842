#!/usr/bin/env python3
"""
Basic langcheck Usage Example

This example demonstrates the core workflow:
1. Check text with a standard language profile
2. Attach a spelling dictionary and language model
3. Load pattern rules from YAML
4. Check many texts in a batch
"""

import logging
from pathlib import Path

from langcheck import CheckerConfig, create_checker, get_profile, load_rules
from langcheck.checker import Checker, check_batch
from langcheck.exceptions import ResourceUnavailableError
from langcheck.spelling import NGramLanguageModel, WordListDictionary


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # ─────────────────────────────────────────────────────────────────────────
    # 1. Basic Checking
    # ─────────────────────────────────────────────────────────────────────────

    checker = create_checker("en")
    text = "This is is a example.  It has a few problems."

    for match in checker.check(text):
        print(f"{match.rule_id} [{match.from_pos}:{match.to_pos}] {text[match.from_pos:match.to_pos]!r}")
        print(f"  {match.message}")
        if match.suggested_replacements:
            print(f"  Suggestions: {', '.join(match.suggested_replacements)}")

    # ─────────────────────────────────────────────────────────────────────────
    # 2. Spelling
    # ─────────────────────────────────────────────────────────────────────────

    # pyspellchecker word lists are downloaded with the package
    try:
        profile = get_profile("en").with_spellchecker()
    except ResourceUnavailableError as e:
        print(f"No word list available: {e}")
        profile = get_profile("en")

    # Project-specific words go into a small extra dictionary
    jargon = WordListDictionary(["langcheck", "tokenizer", "lemma"])
    corpus = [s.lower().split() for s in ["the cat sat on the mat", "the dog sat on the rug"]]
    profile = profile.with_resources(
        dictionaries=[jargon],
        language_model=NGramLanguageModel.from_sentences(corpus, order=2),
    )

    checker = Checker(profile, CheckerConfig(max_spelling_suggestions=5))
    for match in checker.check("The cat sta on the mat near langcheck."):
        print(f"{match.rule_id}: {match.suggested_replacements}")

    # ─────────────────────────────────────────────────────────────────────────
    # 3. Pattern Rules from YAML
    # ─────────────────────────────────────────────────────────────────────────

    rules = load_rules(Path(__file__).parent / "rules_en.yaml")
    checker = Checker(get_profile("en").with_resources(rules=rules))
    for match in checker.check("We could of gone there. Its a nice day."):
        print(f"{match.rule_id}: {match.message} -> {match.suggested_replacements}")

    # ─────────────────────────────────────────────────────────────────────────
    # 4. Batch Checking
    # ─────────────────────────────────────────────────────────────────────────

    texts = ["The the start.", "Nothing wrong here.", "A apple a day."]
    checker = Checker(get_profile("en"), CheckerConfig(parallel=True))
    for index, result in check_batch(texts, checker):
        if isinstance(result, Exception):
            print(f"Text {index} failed: {result}")
            continue
        print(f"Text {index}: {result.stats.matches_found} matches in {result.stats.processing_time_ms:.1f} ms")


if __name__ == "__main__":
    main()
