"""Prompt construction for commit message generation.

Contains:
- GenerationRequest: Everything sent to the model for one run
- build_instructions: Render the system instructions for a vocabulary
- build_request: Assemble a GenerationRequest from status and diff text
"""

from dataclasses import dataclass
from typing import Iterable

from commitsmith import MAX_MESSAGE_LENGTH
from commitsmith.exceptions import EmptyChangesetError

INSTRUCTIONS_TEMPLATE = """You are a commit message generator that follows the Conventional Commits specification.
Your task is to analyze git status and diff output and generate a single-line commit message in the format: "<type>(<scope>): <description>"

Rules:
1. Type MUST be exactly one of these: {types}
2. {scope_rule}
3. Description should be clear, concise, in imperative mood and present tense
4. Use lowercase unless a word is a proper noun or an acronym
5. The entire message must be at most {max_length} characters
6. Do not include breaking change indicators, body text or footers

IMPORTANT: You must respond with ONLY a JSON object in this format:
{{
  "commit_message": "<type>(<scope>): <description>"
}}"""

SCOPE_RULE_FIXED = "Scope MUST be exactly one of these: {scopes}"
SCOPE_RULE_FREE = "Scope should be a short lowercase word naming the affected area of the code"

USER_CONTENT_TEMPLATE = """Generate a commit message for the following changes.

[STATUS]
{status_text}

[DIFF]
{diff_text}"""


@dataclass(frozen=True)
class GenerationRequest:
    """The prompt and vocabularies for a single generation call."""

    instructions: str
    allowed_types: tuple[str, ...]
    allowed_scopes: tuple[str, ...]
    status_text: str
    diff_text: str

    @property
    def user_content(self) -> str:
        return USER_CONTENT_TEMPLATE.format(
            status_text=self.status_text or "(no status output)",
            diff_text=self.diff_text,
        )


def build_instructions(allowed_types: Iterable[str], allowed_scopes: Iterable[str]) -> str:
    """Render the system instructions, embedding both vocabularies in order.

    Args:
        allowed_types: Permitted commit types.
        allowed_scopes: Permitted scopes (empty leaves the scope to the model).

    Returns:
        The instruction text.
    """
    scopes = list(allowed_scopes)
    if scopes:
        scope_rule = SCOPE_RULE_FIXED.format(scopes=", ".join(scopes))
    else:
        scope_rule = SCOPE_RULE_FREE

    return INSTRUCTIONS_TEMPLATE.format(
        types=", ".join(allowed_types),
        scope_rule=scope_rule,
        max_length=MAX_MESSAGE_LENGTH,
    )


def build_request(
    status_text: str,
    diff_text: str,
    allowed_types: Iterable[str],
    allowed_scopes: Iterable[str] = (),
) -> GenerationRequest:
    """Build the generation request for a set of changes.

    Args:
        status_text: Output of git status.
        diff_text: Diff of the changes to describe.
        allowed_types: Permitted commit types.
        allowed_scopes: Permitted scopes.

    Returns:
        The GenerationRequest.

    Raises:
        EmptyChangesetError: If the diff is empty.
    """
    if not diff_text or not diff_text.strip():
        raise EmptyChangesetError()

    types = tuple(allowed_types)
    scopes = tuple(allowed_scopes)
    return GenerationRequest(
        instructions=build_instructions(types, scopes),
        allowed_types=types,
        allowed_scopes=scopes,
        status_text=status_text,
        diff_text=diff_text,
    )
