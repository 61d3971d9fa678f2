"""Anthropic Claude provider implementation."""

from anthropic import Anthropic

from commitsmith.config import LLMProvider
from commitsmith.llm.base import BaseLLMProvider
from commitsmith.llm.prompts import GenerationRequest


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude LLM provider.

    The Messages API has no JSON response mode, so the reply shape relies on
    the instructions alone.
    """

    provider = LLMProvider.ANTHROPIC
    display_name = "Anthropic"

    def _complete(self, request: GenerationRequest) -> str:
        client = Anthropic(
            api_key=self.api_key,
            base_url=self.config.base_url,
            timeout=self.config.timeout,
        )

        message = client.messages.create(
            model=self.model,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
            system=request.instructions,
            messages=[{"role": "user", "content": request.user_content}],
        )

        for block in message.content:
            if block.type == "text":
                return block.text
        return ""
