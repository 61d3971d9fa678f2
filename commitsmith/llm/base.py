"""Base classes and shared types for LLM providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from commitsmith.config import API_KEY_ENV_VARS, DEFAULT_MODELS, AppConfig, LLMProvider
from commitsmith.llm.exceptions import JSONParseError, MissingAPIKeyError, MissingFieldError
from commitsmith.llm.parsing import extract_commit_message, parse_json_response
from commitsmith.llm.prompts import GenerationRequest


class FailureReason(Enum):
    """Why a generation attempt produced no message."""

    SERVICE_ERROR = "network/service error"
    MALFORMED_REPLY = "malformed reply"
    MISSING_FIELD = "missing field"


@dataclass(frozen=True)
class Success:
    """A generation call that produced a candidate message."""

    message: str
    model: str = ""
    raw_response: str = ""


@dataclass(frozen=True)
class Failure:
    """A generation call that produced no usable message."""

    reason: FailureReason
    detail: str = ""


GenerationResult = Union[Success, Failure]


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers.

    Subclasses implement `_complete`, which performs exactly one service call
    and returns the raw reply text. `generate` turns that into a
    GenerationResult and never raises.
    """

    provider: LLMProvider
    display_name: str = ""

    def __init__(self, config: AppConfig, api_key: Optional[str] = None):
        """Initialize the provider.

        Args:
            config: The application configuration (model, limits, timeout).
            api_key: Explicit API key; looked up in the config when omitted.

        Raises:
            MissingAPIKeyError: If no API key is available.
        """
        self.config = config
        self.model = config.model or DEFAULT_MODELS[self.provider]
        self.api_key = api_key or self.get_api_key()

    @property
    def name(self) -> str:
        return f"{self.display_name} ({self.model})"

    def get_api_key(self) -> str:
        """Get the API key for this provider from the configuration.

        Returns:
            The API key string.

        Raises:
            MissingAPIKeyError: If the API key is not configured.
        """
        api_key = self.config.get_api_key(self.provider)
        if api_key:
            return api_key

        env_var = API_KEY_ENV_VARS[self.provider][0]
        raise MissingAPIKeyError(
            f"{self.display_name} API key not found. Set it using:\n"
            f"  1. Environment variable: export {env_var}=your_key_here\n"
            f"  2. Add {env_var}=your_key_here to .env.local"
        )

    @abstractmethod
    def _complete(self, request: GenerationRequest) -> str:
        """Send one request to the service and return the raw reply text.

        Raises:
            Exception: Any SDK or transport error.
        """
        pass

    def generate(self, request: GenerationRequest) -> GenerationResult:
        """Generate a candidate commit message.

        Args:
            request: The prompt and vocabularies for this run.

        Returns:
            Success with the message, or Failure with the reason.
        """
        try:
            raw_response = self._complete(request)
        except Exception as e:
            return Failure(FailureReason.SERVICE_ERROR, f"{self.display_name} API call failed: {e}")

        try:
            parsed = parse_json_response(raw_response)
        except JSONParseError as e:
            return Failure(FailureReason.MALFORMED_REPLY, str(e))

        try:
            message = extract_commit_message(parsed)
        except MissingFieldError as e:
            return Failure(FailureReason.MISSING_FIELD, str(e))

        return Success(message=message, model=self.model, raw_response=raw_response)
