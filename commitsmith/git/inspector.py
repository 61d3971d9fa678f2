"""Repository state collection.

Contains:
- RepositoryState: Status text, diff text and changed paths captured for one run
- RepositoryInspector: Reads status and diff output from the target repository

The pipeline diffs before it stages: `git diff <base>` covers every tracked
change (staged or not) and leaves the index untouched. The commit step later
stages exactly the captured paths.
"""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from commitsmith.git.exceptions import InspectionError, ProcessError
from commitsmith.git.runner import ProcessResult, run_git_command, run_git_command_async

# Object id of git's empty tree, used as the diff base before the first commit
EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

# Byte-stable diff output; renames are listed as a deletion plus an addition
# so both paths of a move get staged
DIFF_FLAGS = ["--no-color", "--no-ext-diff", "--no-renames"]


@dataclass(frozen=True)
class RepositoryState:
    """Snapshot of the working tree taken at the start of a run."""

    status_text: str
    diff_text: str
    paths: tuple[str, ...] = ()
    base: str = "HEAD"

    @property
    def is_empty(self) -> bool:
        return not self.diff_text.strip()


def _status_from(result: ProcessResult) -> str:
    # Partial output is still useful to the model, so only fail when there is none
    if not result.ok and not result.stdout.strip():
        raise InspectionError(
            f"Failed to get git status (exit code {result.exit_code}):\n{result.stderr.strip()}"
        )
    return result.stdout.strip()


def _diff_from(result: ProcessResult) -> str:
    if not result.ok:
        raise InspectionError(
            f"Failed to get git diff (exit code {result.exit_code}):\n{result.stderr.strip()}"
        )
    return result.stdout


def _paths_from(result: ProcessResult) -> tuple[str, ...]:
    if not result.ok:
        raise InspectionError(
            f"Failed to list changed files (exit code {result.exit_code}):\n{result.stderr.strip()}"
        )
    return tuple(path for path in result.stdout.split("\0") if path)


def _base_from(result: ProcessResult) -> str:
    return "HEAD" if result.ok and result.stdout.strip() else EMPTY_TREE


class RepositoryInspector:
    """Reads the working-tree state of a single repository."""

    def __init__(self, repo_dir: Path, timeout: Optional[float] = None):
        self.repo_dir = Path(repo_dir)
        self.timeout = timeout

    def _run(self, args: list[str]) -> ProcessResult:
        try:
            return run_git_command(args, self.repo_dir, timeout=self.timeout)
        except ProcessError as e:
            raise InspectionError(str(e))

    async def _run_async(self, args: list[str]) -> ProcessResult:
        try:
            return await run_git_command_async(args, self.repo_dir, timeout=self.timeout)
        except ProcessError as e:
            raise InspectionError(str(e))

    def resolve_base(self) -> str:
        """Return the revision diffs are taken against (HEAD, or the empty tree)."""
        return _base_from(self._run(["rev-parse", "--verify", "--quiet", "HEAD"]))

    def get_status(self) -> str:
        """Get the human-readable `git status` output.

        Raises:
            InspectionError: If git status failed and produced no output.
        """
        return _status_from(self._run(["status"]))

    def get_diff(self, staged: bool = False) -> str:
        """Get the diff of pending changes.

        Args:
            staged: Stage everything with `git add .` first and diff the index.
                This side effect is not undone if a later step fails.

        Returns:
            The raw diff text (empty when there is nothing to commit).

        Raises:
            InspectionError: If staging or diffing fails.
        """
        base = self.resolve_base()
        if staged:
            add = self._run(["add", "."])
            if not add.ok:
                raise InspectionError(f"Failed to stage changes:\n{add.stderr.strip()}")
            return _diff_from(self._run(["diff", "--cached", *DIFF_FLAGS, base]))
        return _diff_from(self._run(["diff", *DIFF_FLAGS, base]))

    async def get_status_async(self) -> str:
        return _status_from(await self._run_async(["status"]))

    async def get_diff_async(self, base: str) -> str:
        return _diff_from(await self._run_async(["diff", *DIFF_FLAGS, base]))

    async def get_changed_paths_async(self, base: str) -> tuple[str, ...]:
        return _paths_from(await self._run_async(["diff", "--name-only", "-z", "--no-renames", base]))

    async def capture_state(self) -> RepositoryState:
        """Capture status, diff and changed paths concurrently.

        The three reads are independent and joined with asyncio.gather; the
        first failure fails the whole capture.

        Returns:
            A RepositoryState for this run.

        Raises:
            InspectionError: If any of the reads fails.
        """
        base = _base_from(
            await self._run_async(["rev-parse", "--verify", "--quiet", "HEAD"])
        )
        status_text, diff_text, paths = await asyncio.gather(
            self.get_status_async(),
            self.get_diff_async(base),
            self.get_changed_paths_async(base),
        )
        return RepositoryState(
            status_text=status_text,
            diff_text=diff_text,
            paths=paths,
            base=base,
        )
