"""Groq provider implementation."""

from groq import Groq

from commitsmith.config import LLMProvider
from commitsmith.llm.base import BaseLLMProvider
from commitsmith.llm.prompts import GenerationRequest


class GroqProvider(BaseLLMProvider):
    """Groq LLM provider (fast inference for open-source models)."""

    provider = LLMProvider.GROQ
    display_name = "Groq"

    def _complete(self, request: GenerationRequest) -> str:
        client = Groq(
            api_key=self.api_key,
            base_url=self.config.base_url,
            timeout=self.config.timeout,
        )

        # JSON mode guarantees a syntactically valid object
        response = client.chat.completions.create(
            model=self.model,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
            messages=[
                {"role": "system", "content": request.instructions},
                {"role": "user", "content": request.user_content},
            ],
            response_format={"type": "json_object"},
        )
        return response.choices[0].message.content
