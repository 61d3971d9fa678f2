"""LLM provider module for commitsmith.

This module provides a unified interface to multiple text-generation
backends. The active provider is chosen by AppConfig.provider.
"""

from commitsmith.config import AppConfig, LLMProvider
from commitsmith.llm.base import (
    BaseLLMProvider,
    Failure,
    FailureReason,
    GenerationResult,
    Success,
)
from commitsmith.llm.exceptions import (
    JSONParseError,
    LLMError,
    MissingAPIKeyError,
    MissingFieldError,
)
from commitsmith.llm.prompts import GenerationRequest, build_request


def get_provider(config: AppConfig, provider: LLMProvider | None = None) -> BaseLLMProvider:
    """Get an LLM provider instance.

    Args:
        config: The application configuration.
        provider: The provider to use. Defaults to config.provider.

    Returns:
        An instance of the appropriate LLM provider, with its API key resolved.

    Raises:
        MissingAPIKeyError: If the provider's API key is not configured.
        ValueError: If the provider is not supported.
    """
    provider = provider or config.provider

    if provider == LLMProvider.GROQ:
        from commitsmith.llm.groq_provider import GroqProvider

        return GroqProvider(config)

    elif provider == LLMProvider.OPENAI:
        from commitsmith.llm.openai_provider import OpenAIProvider

        return OpenAIProvider(config)

    elif provider == LLMProvider.OPENROUTER:
        from commitsmith.llm.openrouter_provider import OpenRouterProvider

        return OpenRouterProvider(config)

    elif provider == LLMProvider.GOOGLE:
        from commitsmith.llm.google_provider import GoogleProvider

        return GoogleProvider(config)

    elif provider == LLMProvider.ANTHROPIC:
        from commitsmith.llm.anthropic_provider import AnthropicProvider

        return AnthropicProvider(config)

    else:
        raise ValueError(f"Unsupported provider: {provider}")


__all__ = [
    "BaseLLMProvider",
    "Failure",
    "FailureReason",
    "GenerationRequest",
    "GenerationResult",
    "JSONParseError",
    "LLMError",
    "MissingAPIKeyError",
    "MissingFieldError",
    "Success",
    "build_request",
    "get_provider",
]
