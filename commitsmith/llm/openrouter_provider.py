"""OpenRouter provider implementation.

OpenRouter provides unified access to many models through a single API.
It uses an OpenAI-compatible API format.
"""

from openai import OpenAI

from commitsmith.config import LLMProvider
from commitsmith.llm.base import BaseLLMProvider
from commitsmith.llm.prompts import GenerationRequest

# OpenRouter API base URL
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


class OpenRouterProvider(BaseLLMProvider):
    """OpenRouter LLM provider."""

    provider = LLMProvider.OPENROUTER
    display_name = "OpenRouter"

    def _complete(self, request: GenerationRequest) -> str:
        # Create an OpenAI client pointing to OpenRouter
        client = OpenAI(
            api_key=self.api_key,
            base_url=self.config.base_url or OPENROUTER_BASE_URL,
            timeout=self.config.timeout,
        )

        # Not every routed model supports JSON schemas; json_object is widely honoured
        response = client.chat.completions.create(
            model=self.model,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
            messages=[
                {"role": "system", "content": request.instructions},
                {"role": "user", "content": request.user_content},
            ],
            response_format={"type": "json_object"},
            extra_headers={"X-Title": "commitsmith"},
        )
        return response.choices[0].message.content
