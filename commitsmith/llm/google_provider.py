"""Google Gemini provider implementation."""

from google import genai
from google.genai import types

from commitsmith.config import LLMProvider
from commitsmith.llm.base import BaseLLMProvider
from commitsmith.llm.parsing import CommitMessageReply
from commitsmith.llm.prompts import GenerationRequest


class GoogleProvider(BaseLLMProvider):
    """Google Gemini LLM provider."""

    provider = LLMProvider.GOOGLE
    display_name = "Google Gemini"

    def _complete(self, request: GenerationRequest) -> str:
        # HttpOptions.timeout is in milliseconds
        http_options = types.HttpOptions(
            base_url=self.config.base_url,
            timeout=int(self.config.timeout * 1000),
        )
        client = genai.Client(api_key=self.api_key, http_options=http_options)

        response = client.models.generate_content(
            model=self.model,
            contents=request.user_content,
            config=types.GenerateContentConfig(
                system_instruction=request.instructions,
                max_output_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                response_mime_type="application/json",
                response_schema=CommitMessageReply,
            ),
        )
        return response.text
