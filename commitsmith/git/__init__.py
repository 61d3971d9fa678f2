"""Git access for commitsmith.

This package provides:
- exceptions: GitError, ProcessError, InspectionError, CommitError
- runner: ProcessResult, run_git_command, run_git_command_async
- inspector: RepositoryState, RepositoryInspector
- commit: CommitResult, CommitApplier, has_commit_summary
"""

from commitsmith.git.exceptions import (
    CommitError,
    GitError,
    InspectionError,
    ProcessError,
)
from commitsmith.git.runner import (
    ProcessResult,
    run_git_command,
    run_git_command_async,
)
from commitsmith.git.inspector import (
    EMPTY_TREE,
    RepositoryInspector,
    RepositoryState,
)
from commitsmith.git.commit import (
    CommitApplier,
    CommitResult,
    has_commit_summary,
)


__all__ = [
    # Exceptions
    "CommitError",
    "GitError",
    "InspectionError",
    "ProcessError",
    # Runner
    "ProcessResult",
    "run_git_command",
    "run_git_command_async",
    # Inspector
    "EMPTY_TREE",
    "RepositoryInspector",
    "RepositoryState",
    # Commit
    "CommitApplier",
    "CommitResult",
    "has_commit_summary",
]
