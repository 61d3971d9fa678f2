"""Staging and committing with a validated message.

Contains:
- CommitResult: Outcome of a successful commit
- CommitApplier: Stages the captured paths and runs `git commit`
- has_commit_summary: Detect git's "N files changed" summary in command output
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from commitsmith.git.exceptions import CommitError, ProcessError
from commitsmith.git.inspector import DIFF_FLAGS, RepositoryState
from commitsmith.git.runner import ProcessResult, run_git_command
from commitsmith.validation import ValidatedCommitMessage

# "1 file changed", "3 files changed, 10 insertions(+)"
COMMIT_SUMMARY_PATTERN = re.compile(r"\b\d+ files? changed\b")


@dataclass(frozen=True)
class CommitResult:
    """Outcome of a commit that was actually created."""

    message: str
    output: str
    exit_code: int = 0
    hook_exit_ignored: bool = False


def has_commit_summary(output: str) -> bool:
    """Check whether git output reports that a commit was written.

    Args:
        output: Combined stdout/stderr of `git commit`.

    Returns:
        True if a "N file(s) changed" summary line is present.
    """
    return bool(COMMIT_SUMMARY_PATTERN.search(output))


def _literal_pathspec(path: str) -> str:
    # Paths from `git diff --name-only` are relative to the top level
    return f":(top,literal){path}"


class CommitApplier:
    """Creates a commit from the paths captured in a RepositoryState."""

    def __init__(self, repo_dir: Path, timeout: Optional[float] = None):
        self.repo_dir = Path(repo_dir)
        self.timeout = timeout

    def _run(self, args: list[str]) -> ProcessResult:
        try:
            return run_git_command(args, self.repo_dir, timeout=self.timeout)
        except ProcessError as e:
            raise CommitError(str(e))

    def stage(self, state: RepositoryState) -> None:
        """Stage exactly the paths covered by the captured diff.

        Raises:
            CommitError: If git add fails.
        """
        if not state.paths:
            raise CommitError("Nothing to stage: the captured diff covers no files.")

        pathspecs = [_literal_pathspec(path) for path in state.paths]
        result = self._run(["add", "-A", "--", *pathspecs])
        if not result.ok:
            raise CommitError(f"Failed to stage changes:\n{result.stderr.strip()}")

    def verify_staged(self, state: RepositoryState) -> None:
        """Ensure the index holds exactly the content that was described.

        Raises:
            CommitError: If the staged diff differs from the captured diff.
        """
        result = self._run(["diff", "--cached", *DIFF_FLAGS, state.base])
        if not result.ok:
            raise CommitError(f"Failed to read staged diff:\n{result.stderr.strip()}")
        if result.stdout != state.diff_text:
            raise CommitError(
                "The working tree changed after the diff was captured; "
                "the staged changes no longer match the generated message. "
                "Changes are left staged; run the tool again to regenerate."
            )

    def commit(self, message: ValidatedCommitMessage) -> CommitResult:
        """Run `git commit -m <message>`.

        A non-zero exit whose output still carries the commit summary is treated
        as success (hooks can fail after the commit has been written).

        Raises:
            CommitError: If the commit was not created.
        """
        result = self._run(["commit", "-m", message.text])
        output = (result.stdout + result.stderr).strip()

        if result.ok:
            return CommitResult(message=message.text, output=output)

        if has_commit_summary(output):
            return CommitResult(
                message=message.text,
                output=output,
                exit_code=result.exit_code,
                hook_exit_ignored=True,
            )

        raise CommitError(
            f"git commit failed with exit code {result.exit_code}"
            + (f":\n{output}" if output else "")
        )

    def apply(self, message: ValidatedCommitMessage, state: RepositoryState) -> CommitResult:
        """Stage the captured changes and commit them with the given message.

        Args:
            message: A message that passed validation.
            state: The repository snapshot the message was generated from.

        Returns:
            The CommitResult.

        Raises:
            CommitError: If staging, verification or the commit fails. Anything
                staged before the failure stays staged.
        """
        self.stage(state)
        self.verify_staged(state)
        return self.commit(message)
