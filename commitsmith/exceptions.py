"""Exception classes shared across commitsmith.

Contains:
- CommitsmithError: Base exception for every fatal pipeline error
- ConfigurationError: Raised when a required setting is missing or invalid
- EmptyChangesetError: Raised when there is nothing to summarize
- GenerationError: Raised when the model did not produce a usable message
- ValidationError: Raised when a generated message fails the format check
"""


class CommitsmithError(Exception):
    """Base exception for commitsmith errors."""

    pass


class ConfigurationError(CommitsmithError):
    """Raised when a required configuration value is missing or invalid."""

    pass


class EmptyChangesetError(CommitsmithError):
    """Raised when there are no changes to describe."""

    def __init__(
        self,
        message: str = (
            "No changes to commit: tracked files match HEAD. "
            "Untracked files are not included; stage them with `git add` "
            "(or `git add -N`) first."
        ),
    ):
        super().__init__(message)


class GenerationError(CommitsmithError):
    """Raised when the text-generation service did not yield a message."""

    def __init__(self, reason: str, detail: str = ""):
        self.reason = reason
        self.detail = detail
        super().__init__(f"Commit message generation failed: {reason}")


class ValidationError(CommitsmithError):
    """Raised when a candidate commit message fails validation."""

    def __init__(self, reason: str, message: str):
        self.reason = reason
        self.message = message
        super().__init__(f"Invalid commit message ({reason}): {message!r}")
