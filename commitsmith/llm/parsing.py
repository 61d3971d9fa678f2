"""JSON parsing and validation utilities for LLM responses.

Contains:
- CommitMessageReply: Pydantic model for the expected reply shape
- parse_json_response: Parse raw LLM response as a JSON object
- extract_commit_message: Pull the commit message out of a parsed reply
- reply_json_schema: Schema used for provider-side structured output
"""

import json

from pydantic import BaseModel, field_validator

from commitsmith.llm.exceptions import JSONParseError, MissingFieldError


class CommitMessageReply(BaseModel):
    """Structured reply requested from the model.

    Attributes:
        commit_message: The single-line Conventional Commits message.
    """

    commit_message: str

    @field_validator("commit_message")
    @classmethod
    def commit_message_must_not_be_empty(cls, v: str) -> str:
        """Ensure the message is not blank."""
        if not v or not v.strip():
            raise ValueError("commit_message cannot be empty")
        return v.strip()


def _strip_code_fence(text: str) -> str:
    # ```json ... ``` wrapper around the reply
    if not text.startswith("```"):
        return text
    body = text.split("\n")[1:]
    if body and body[-1].strip() == "```":
        body.pop()
    return "\n".join(body)


def _outermost_object(text: str) -> str:
    # Prose before or after the object is dropped
    start, end = text.find("{"), text.rfind("}")
    if start == -1 or end <= start:
        return text
    return text[start:end + 1]


def parse_json_response(raw_response: str) -> dict:
    """Parse the LLM response as a JSON object.

    Args:
        raw_response: The raw text response from the LLM.

    Returns:
        The parsed JSON as a dictionary.

    Raises:
        JSONParseError: If parsing fails or the JSON is not an object.
    """
    if raw_response is None:
        raise JSONParseError("LLM returned an empty response.")

    cleaned = _outermost_object(_strip_code_fence(raw_response.strip()))

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise JSONParseError(
            f"Failed to parse LLM response as JSON.\n"
            f"Error: {e}\n"
            f"Raw response:\n{raw_response}"
        )

    if not isinstance(parsed, dict):
        raise JSONParseError(
            f"LLM response is not a JSON object.\n"
            f"Raw response:\n{raw_response}"
        )

    return parsed


def extract_commit_message(parsed: dict) -> str:
    """Validate parsed JSON against CommitMessageReply and return the message.

    Args:
        parsed: The parsed JSON dictionary.

    Returns:
        The commit message string.

    Raises:
        MissingFieldError: If commit_message is absent, not a string, or blank.
    """
    try:
        return CommitMessageReply(**parsed).commit_message
    except Exception as e:
        raise MissingFieldError(
            f"LLM response has no usable 'commit_message' field.\n"
            f"Error: {e}\n"
            f"Parsed JSON: {parsed}"
        )


def reply_json_schema() -> dict:
    """JSON schema of CommitMessageReply, closed for strict structured output."""
    schema = CommitMessageReply.model_json_schema()
    schema["additionalProperties"] = False
    return schema
