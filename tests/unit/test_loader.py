"""
Tests for loading pattern rules from YAML.
"""

import pytest

from langcheck.casing import CaseConversion
from langcheck.exceptions import ConfigurationError, ResourceUnavailableError
from langcheck.patterns import load_rules, parse_rule, rules_from_data

RULES_YAML = r"""
locale: nl
rules:
  - id: A_VOWEL
    message: Use 'an' before '\2'.
    suggestion_source: 1
    suggestions: ['\1n']
    case_conversion: PRESERVE
    pattern:
      - token: a
      - token: "[aeiou]\\w*"
        regexp: true
        exceptions:
          - token: "(uni|eu)\\w*"
            regexp: true
  - id: FOO_VERB
    message: foo before a verb
    pattern:
      - token: foo
      - pos: "VB.*"
        min: 1
        max: 2
"""


class TestRulesFromData:
    """Building rules from parsed YAML structures."""

    def test_bare_list(self):
        rules = rules_from_data([{"id": "R", "message": "m", "pattern": [{"token": "x"}]}])
        assert [r.id for r in rules] == ["R"]

    def test_none_gives_no_rules(self):
        assert rules_from_data(None) == []

    def test_element_keys(self):
        rule = parse_rule(
            {
                "id": "R",
                "message": "m",
                "pattern": [
                    {"token": "x", "min": 0, "max": -1, "negate": True, "case_sensitive": True},
                    {"pos_tag": "NN", "lemma": "cat"},
                ],
            }
        )
        first, second = rule.elements
        assert first.min_occurrences == 0
        assert first.max_occurrences == -1
        assert first.negate is True
        assert first.case_sensitive is True
        assert second.pos_tag == "NN"
        assert second.lemma == "cat"

    def test_numeric_token_coerced(self):
        rule = parse_rule({"id": "R", "message": "m", "pattern": [{"token": 1}]})
        assert rule.elements[0].token == "1"

    def test_single_suggestion_string(self):
        rule = parse_rule({"id": "R", "message": "m", "suggestions": "y", "pattern": [{"token": "x"}]})
        assert rule.suggestions == ("y",)

    def test_missing_pattern(self):
        with pytest.raises(ConfigurationError, match="pattern"):
            parse_rule({"id": "R", "message": "m"})

    def test_unknown_rule_key(self):
        with pytest.raises(ConfigurationError, match="unknown keys"):
            parse_rule({"id": "R", "message": "m", "pattern": [{"token": "x"}], "colour": "red"})

    def test_unknown_element_key(self):
        with pytest.raises(ConfigurationError, match="unknown keys"):
            parse_rule({"id": "R", "message": "m", "pattern": [{"tokn": "x"}]})

    def test_bad_case_conversion(self):
        with pytest.raises(ConfigurationError, match="case_conversion"):
            parse_rule(
                {
                    "id": "R",
                    "message": "m",
                    "suggestion_source": 1,
                    "case_conversion": "shout",
                    "pattern": [{"token": "x"}],
                }
            )

    def test_non_string_sample(self):
        """A sample YAML reads as a number is rejected when the rule is built."""
        with pytest.raises(ConfigurationError, match="sample"):
            rules_from_data(
                [
                    {
                        "id": "R",
                        "message": "m",
                        "suggestion_source": 1,
                        "case_conversion": "preserve",
                        "sample": 5,
                        "pattern": [{"token": "x"}],
                    }
                ]
            )

    def test_invalid_quantifiers(self):
        with pytest.raises(ConfigurationError):
            parse_rule({"id": "R", "message": "m", "pattern": [{"token": "x", "min": 3, "max": 1}]})

    def test_element_must_be_mapping(self):
        with pytest.raises(ConfigurationError, match="mapping"):
            parse_rule({"id": "R", "message": "m", "pattern": ["x"]})

    def test_duplicate_ids(self):
        definition = {"id": "R", "message": "m", "pattern": [{"token": "x"}]}
        with pytest.raises(ConfigurationError, match="Duplicate"):
            rules_from_data([definition, definition])


class TestLoadRules:
    """Loading rule files."""

    def test_load_file(self, tmp_path, make_sentence):
        path = tmp_path / "rules.yaml"
        path.write_text(RULES_YAML, encoding="utf-8")

        rules = load_rules(path)

        assert [r.id for r in rules] == ["A_VOWEL", "FOO_VERB"]
        a_vowel = rules[0]
        assert a_vowel.case_conversion is CaseConversion.PRESERVE
        assert a_vowel.case_converter.language == "nl"
        assert len(a_vowel.elements[1].exceptions) == 1

        match = a_vowel.match(make_sentence("A apple"))[0]
        assert match.suggested_replacements == ["An"]
        assert match.message == "Use 'an' before 'apple'."
        assert a_vowel.match(make_sentence("a unicorn")) == []

        foo_verb = rules[1]
        assert foo_verb.elements[1].max_occurrences == 2
        assert len(foo_verb.match(make_sentence("foo bar", tags={1: [("bar", "VB")]}))) == 1

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("rules: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_rules(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ResourceUnavailableError):
            load_rules(tmp_path / "missing.yaml")

    def test_rules_must_be_list(self, tmp_path):
        path = tmp_path / "rules.yaml"
        path.write_text("rules: {id: R}\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="list"):
            load_rules(path)
