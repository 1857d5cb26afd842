"""
Pattern rules: declarative token patterns that flag errors.

Example:
    >>> from langcheck.patterns import MatchElement, PatternRule
    >>> rule = PatternRule(
    ...     id="FOO_VERB",
    ...     elements=[MatchElement("foo"), MatchElement(pos_tag="VB.*")],
    ...     message="'foo' followed by a verb",
    ... )
    >>> rule.match(sentence)
"""

from langcheck.patterns.elements import UNBOUNDED, ElementException, MatchElement, TokenConstraint
from langcheck.patterns.loader import load_rules, parse_rule, rules_from_data
from langcheck.patterns.matcher import MatchAttempt, MatchState, PatternMatcher
from langcheck.patterns.rule import PatternRule, surface_text

__all__ = [
    # Elements
    "TokenConstraint",
    "MatchElement",
    "ElementException",
    "UNBOUNDED",
    # Rules
    "PatternRule",
    "surface_text",
    # Matching
    "PatternMatcher",
    "MatchAttempt",
    "MatchState",
    # Loading
    "load_rules",
    "parse_rule",
    "rules_from_data",
]
