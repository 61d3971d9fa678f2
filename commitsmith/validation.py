"""Conventional Commits validation for generated messages.

A message is accepted only if it has the exact shape
`<type>(<scope>): <description>`, uses a known type, uses a configured scope
(when scopes are configured), and fits in MAX_MESSAGE_LENGTH characters.
Nothing is repaired: a rejected message is never trimmed or truncated.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Union

from commitsmith import MAX_MESSAGE_LENGTH
from commitsmith.exceptions import ValidationError

FORMAT_MISMATCH = "format mismatch"
LENGTH_EXCEEDED = "length exceeded"

MESSAGE_PATTERN = re.compile(
    r"^(?P<type>[^()\s:]+)\((?P<scope>[^)]+)\): (?P<description>.+)$"
)


@dataclass(frozen=True)
class ValidatedCommitMessage:
    """A commit subject line that passed validation."""

    text: str
    type: str
    scope: str
    description: str

    def __str__(self) -> str:
        return self.text


def validate_commit_message(
    message: Union[str, ValidatedCommitMessage],
    allowed_types: Iterable[str],
    allowed_scopes: Iterable[str] = (),
) -> ValidatedCommitMessage:
    """Validate a candidate commit message.

    Args:
        message: The candidate message (or an already validated one).
        allowed_types: Permitted commit types, matched case-sensitively.
        allowed_scopes: Permitted scopes. Empty means any non-empty scope.

    Returns:
        The ValidatedCommitMessage.

    Raises:
        ValidationError: With reason "format mismatch" or "length exceeded".
    """
    text = message.text if isinstance(message, ValidatedCommitMessage) else message
    types = set(allowed_types)
    scopes = set(allowed_scopes)

    # A multi-line reply can never be a single subject line
    if "\n" in text or "\r" in text:
        raise ValidationError(FORMAT_MISMATCH, text)

    match = MESSAGE_PATTERN.match(text)
    if match is None:
        raise ValidationError(FORMAT_MISMATCH, text)

    commit_type = match.group("type")
    scope = match.group("scope")
    description = match.group("description")

    if commit_type not in types:
        raise ValidationError(FORMAT_MISMATCH, text)
    if scopes and scope not in scopes:
        raise ValidationError(FORMAT_MISMATCH, text)
    if not description.strip():
        raise ValidationError(FORMAT_MISMATCH, text)

    if len(text) > MAX_MESSAGE_LENGTH:
        raise ValidationError(LENGTH_EXCEEDED, text)

    return ValidatedCommitMessage(
        text=text,
        type=commit_type,
        scope=scope,
        description=description,
    )
