"""LLM-related exception classes.

Contains all exception classes for LLM operations:
- LLMError: Base exception for LLM-related errors
- MissingAPIKeyError: Raised when the provider's API key is not configured
- JSONParseError: Raised when an LLM reply cannot be parsed
- MissingFieldError: Raised when a parsed reply has no usable commit message
"""

from commitsmith.exceptions import CommitsmithError, ConfigurationError


class LLMError(CommitsmithError):
    """Base exception for LLM-related errors."""

    pass


class MissingAPIKeyError(LLMError, ConfigurationError):
    """Raised when the required API key is not set."""

    pass


class JSONParseError(LLMError):
    """Raised when the LLM response cannot be parsed as valid JSON."""

    pass


class MissingFieldError(LLMError):
    """Raised when a parsed LLM reply lacks the commit message field."""

    pass
