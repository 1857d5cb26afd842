"""
Load pattern rules from YAML.

File layout:

    locale: en            # optional; selects the case converter
    rules:
      - id: A_VOWEL
        message: "Use 'an' before a vowel."
        suggestion_source: 1
        suggestions: ['\\1n \\2']
        case_conversion: preserve
        pattern:
          - token: a
          - token: "[aeiou].*"
            regexp: true
            exceptions:
              - token: "(uni|eu).*"
                regexp: true

A bare list of rules is accepted as well. Element keys: ``token``,
``regexp``, ``pos`` (or ``pos_tag``), ``lemma``, ``negate``,
``case_sensitive``, ``min``, ``max`` and ``exceptions``; exceptions take
the same constraint keys plus ``scope``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from langcheck.casing import CaseConversion, CaseConverter
from langcheck.exceptions import ConfigurationError, ResourceUnavailableError
from langcheck.patterns.elements import ElementException, MatchElement
from langcheck.patterns.rule import PatternRule

logger = logging.getLogger(__name__)


CONSTRAINT_KEYS = {
    "token": "token",
    "regexp": "regexp",
    "pos": "pos_tag",
    "pos_tag": "pos_tag",
    "lemma": "lemma",
    "negate": "negate",
    "case_sensitive": "case_sensitive",
}
ELEMENT_KEYS = {**CONSTRAINT_KEYS, "min": "min_occurrences", "max": "max_occurrences"}
EXCEPTION_KEYS = {**CONSTRAINT_KEYS, "scope": "scope"}
RULE_KEYS = {
    "id",
    "message",
    "short_message",
    "description",
    "pattern",
    "suggestion_source",
    "case_conversion",
    "sample",
    "sample_source",
    "suggestions",
    "case_sensitive",
}


def _require_mapping(data: Any, where: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ConfigurationError(f"{where}: expected a mapping, got {type(data).__name__}")
    return data


def _translate(data: dict[str, Any], keys: dict[str, str], where: str) -> dict[str, Any]:
    unknown = set(data) - set(keys)
    if unknown:
        raise ConfigurationError(f"{where}: unknown keys {sorted(unknown)}")
    return {keys[k]: v for k, v in data.items()}


def _parse_exception(data: Any, where: str) -> ElementException:
    kwargs = _translate(_require_mapping(data, where), EXCEPTION_KEYS, where)
    if "token" in kwargs:
        kwargs["token"] = str(kwargs["token"])
    return ElementException(**kwargs)


def _parse_element(data: Any, where: str) -> MatchElement:
    data = dict(_require_mapping(data, where))
    exceptions = data.pop("exceptions", None) or []
    if not isinstance(exceptions, list):
        raise ConfigurationError(f"{where}: 'exceptions' must be a list")

    kwargs = _translate(data, ELEMENT_KEYS, where)
    if "token" in kwargs:
        # YAML reads bare numbers and booleans as non-strings
        kwargs["token"] = str(kwargs["token"])
    kwargs["exceptions"] = [
        _parse_exception(e, f"{where}, exception {i + 1}") for i, e in enumerate(exceptions)
    ]
    return MatchElement(**kwargs)


def _parse_case_conversion(value: Any, where: str) -> CaseConversion:
    try:
        return CaseConversion(str(value).lower())
    except ValueError:
        valid = ", ".join(c.value for c in CaseConversion)
        raise ConfigurationError(f"{where}: unknown case_conversion {value!r} (valid: {valid})") from None


def parse_rule(data: Any, case_converter: CaseConverter | None = None) -> PatternRule:
    """
    Build a PatternRule from a parsed YAML mapping.

    Raises:
        ConfigurationError: If the definition is invalid.
    """
    data = dict(_require_mapping(data, "rule"))
    where = f"rule {data.get('id', '<no id>')}"

    unknown = set(data) - RULE_KEYS
    if unknown:
        raise ConfigurationError(f"{where}: unknown keys {sorted(unknown)}")
    for key in ("id", "message", "pattern"):
        if key not in data:
            raise ConfigurationError(f"{where}: missing '{key}'")

    pattern = data.pop("pattern")
    if not isinstance(pattern, list):
        raise ConfigurationError(f"{where}: 'pattern' must be a list of elements")
    elements = [_parse_element(e, f"{where}, element {i + 1}") for i, e in enumerate(pattern)]

    if "case_conversion" in data:
        data["case_conversion"] = _parse_case_conversion(data["case_conversion"], where)
    suggestions = data.pop("suggestions", None) or []
    if isinstance(suggestions, str):
        suggestions = [suggestions]

    kwargs = {**data, "id": str(data["id"]), "elements": elements, "suggestions": suggestions}
    if case_converter is not None:
        kwargs["case_converter"] = case_converter
    try:
        return PatternRule(**kwargs)
    except TypeError as e:
        raise ConfigurationError(f"{where}: {e}") from e


def rules_from_data(data: Any, case_converter: CaseConverter | None = None) -> list[PatternRule]:
    """
    Build rules from already parsed YAML.

    Args:
        data: A mapping with a ``rules`` list (and optional ``locale``), or
            a bare list of rule mappings.
        case_converter: Overrides the converter chosen by ``locale``.

    Returns:
        Rules in declaration order.

    Raises:
        ConfigurationError: If any definition is invalid or ids repeat.
    """
    if data is None:
        return []
    if isinstance(data, dict):
        if case_converter is None and data.get("locale"):
            case_converter = CaseConverter(str(data["locale"]))
        definitions = data.get("rules") or []
    else:
        definitions = data
    if not isinstance(definitions, list):
        raise ConfigurationError("'rules' must be a list")

    rules = [parse_rule(d, case_converter) for d in definitions]

    seen: set[str] = set()
    for rule in rules:
        if rule.id in seen:
            raise ConfigurationError(f"Duplicate rule id: {rule.id}")
        seen.add(rule.id)
    return rules


def load_rules(path: str | Path, case_converter: CaseConverter | None = None) -> list[PatternRule]:
    """
    Load pattern rules from a YAML file.

    Raises:
        ResourceUnavailableError: If the file cannot be read.
        ConfigurationError: If the YAML or a rule definition is invalid.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceUnavailableError(f"Cannot read rule file {path}: {e}") from e

    rules = rules_from_data(data, case_converter)
    logger.info("Loaded %d pattern rules from %s", len(rules), path)
    return rules
