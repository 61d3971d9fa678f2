"""Git-related exception classes.

Contains all exception classes for git operations:
- GitError: Base exception for git-related errors
- ProcessError: Raised when git cannot be launched or times out
- InspectionError: Raised when status or diff cannot be read
- CommitError: Raised when staging or committing genuinely fails
"""

from commitsmith.exceptions import CommitsmithError


class GitError(CommitsmithError):
    """Custom exception for git-related errors."""

    pass


class ProcessError(GitError):
    """Raised when a git process cannot be run to completion."""

    pass


class InspectionError(GitError):
    """Raised when the repository state cannot be read."""

    pass


class CommitError(GitError):
    """Raised when the commit could not be created."""

    pass
