"""
Exception classes for langcheck.

All langcheck exceptions inherit from LangCheckError,
making it easy to catch all library errors.

A rule or word that simply does not match is never an error: callers
get an empty list back. Exceptions are reserved for problems detected
while building rules, dictionaries, models and configuration.

Example:
    >>> try:
    ...     rules = langcheck.load_rules("rules.yaml")
    ... except langcheck.ConfigurationError as e:
    ...     print(f"Bad rule file: {e}")
    ... except langcheck.LangCheckError as e:
    ...     print(f"langcheck error: {e}")
"""


class LangCheckError(Exception):
    """
    Base exception for all langcheck errors.

    Catch this to handle any langcheck-specific error.
    """

    pass


class ConfigurationError(LangCheckError, ValueError):
    """
    Raised for an invalid rule definition or configuration.

    Always raised at construction/compile time, never while matching.

    Example:
        >>> MatchElement(token="a", min_occurrences=2, max_occurrences=1)
        ConfigurationError: min_occurrences (2) > max_occurrences (1)
    """

    pass


class ResourceUnavailableError(LangCheckError):
    """
    Raised when a dictionary, language model or rule file cannot be loaded.

    Only the constructing call fails; instances that were already built
    are unaffected.
    """

    pass
