"""
Configuration for langcheck checking runs.
"""

from dataclasses import dataclass, field
from typing import Literal

from langcheck.exceptions import ConfigurationError


@dataclass
class CheckerConfig:
    """
    Configuration for a Checker.

    All options have sensible defaults. Create a config only
    if you need to customize behavior.

    Example:
        >>> config = CheckerConfig(parallel=True, max_workers=8)
        >>> checker = Checker(get_profile("en"), config)
    """

    # Spelling options
    max_spelling_suggestions: int = 10  # 0 = unlimited
    speller_distances: tuple[int, ...] = (1, 2, 3)  # Tried in order until suggestions appear
    min_length_for_escalation: int = 5  # Shorter words only use the first distance

    # Ranking options
    context_length: int = 2  # Tokens on each side fed to the language model

    # Execution options
    parallel: bool = False
    max_workers: int = 4

    # Error handling for rules that fail while matching
    on_rule_error: Literal["warn", "skip", "raise"] = "warn"

    # Rule IDs to leave out of a run
    disabled_rules: set[str] = field(default_factory=set)

    def __post_init__(self):
        """Validate configuration."""
        if self.max_spelling_suggestions < 0:
            raise ConfigurationError(
                f"max_spelling_suggestions must be >= 0, got {self.max_spelling_suggestions}"
            )

        if not self.speller_distances:
            raise ConfigurationError("speller_distances must not be empty")
        if any(d <= 0 for d in self.speller_distances):
            raise ConfigurationError(
                f"speller_distances must be positive, got {self.speller_distances!r}"
            )
        if list(self.speller_distances) != sorted(set(self.speller_distances)):
            raise ConfigurationError(
                f"speller_distances must be strictly ascending, got {self.speller_distances!r}"
            )

        if self.min_length_for_escalation < 1:
            raise ConfigurationError(
                f"min_length_for_escalation must be >= 1, got {self.min_length_for_escalation}"
            )
        if self.context_length < 0:
            raise ConfigurationError(f"context_length must be >= 0, got {self.context_length}")
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be >= 1, got {self.max_workers}")

        valid_error_modes = ("warn", "skip", "raise")
        if self.on_rule_error not in valid_error_modes:
            raise ConfigurationError(
                f"on_rule_error must be one of {valid_error_modes}, got {self.on_rule_error!r}"
            )

    @classmethod
    def strict(cls) -> "CheckerConfig":
        """Propagate rule failures and only suggest close corrections."""
        return cls(on_rule_error="raise", speller_distances=(1,))

    @classmethod
    def lenient(cls) -> "CheckerConfig":
        """Swallow rule failures quietly and search further for suggestions."""
        return cls(on_rule_error="skip", speller_distances=(1, 2, 3), min_length_for_escalation=4)
