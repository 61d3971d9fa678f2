"""OpenAI provider implementation."""

from openai import OpenAI

from commitsmith.config import LLMProvider
from commitsmith.llm.base import BaseLLMProvider
from commitsmith.llm.parsing import reply_json_schema
from commitsmith.llm.prompts import GenerationRequest


class OpenAIProvider(BaseLLMProvider):
    """OpenAI LLM provider.

    Uses structured outputs, so the reply is constrained to the
    CommitMessageReply schema by the service itself.
    """

    provider = LLMProvider.OPENAI
    display_name = "OpenAI"

    def _complete(self, request: GenerationRequest) -> str:
        client = OpenAI(
            api_key=self.api_key,
            base_url=self.config.base_url,
            timeout=self.config.timeout,
        )

        response = client.chat.completions.create(
            model=self.model,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
            messages=[
                {"role": "system", "content": request.instructions},
                {"role": "user", "content": request.user_content},
            ],
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "commit_message",
                    "strict": True,
                    "schema": reply_json_schema(),
                },
            },
        )
        return response.choices[0].message.content
