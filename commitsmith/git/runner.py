"""Git command runner.

Contains:
- ProcessResult: Captured stdout, stderr and exit status of a git command
- run_git_command: Run a git command and block until it finishes
- run_git_command_async: Run a git command as an asyncio subprocess

Commands are always passed as argument lists; nothing goes through a shell.
"""

import asyncio
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from commitsmith.git.exceptions import ProcessError


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of a finished git process."""

    args: tuple[str, ...]
    stdout: str
    stderr: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    @property
    def command(self) -> str:
        return "git " + " ".join(self.args)

    def check(self, description: str = "") -> "ProcessResult":
        """Raise ProcessError if the command exited with a non-zero status.

        Args:
            description: Short label used in the error message.

        Returns:
            The result itself, for chaining.
        """
        if not self.ok:
            label = description or self.command
            details = self.stderr.strip() or self.stdout.strip()
            raise ProcessError(
                f"{label} failed with exit code {self.exit_code}"
                + (f"\n{details}" if details else "")
            )
        return self


def _decode(output: Optional[bytes]) -> str:
    return (output or b"").decode("utf-8", errors="replace")


def _ensure_directory(cwd: Path) -> None:
    if not Path(cwd).is_dir():
        raise ProcessError(f"Repository directory does not exist: {cwd}")


def run_git_command(
    args: Sequence[str],
    cwd: Path,
    timeout: Optional[float] = None,
) -> ProcessResult:
    """Run a git command and return its captured output.

    Args:
        args: List of arguments to pass to git.
        cwd: Working directory for the command.
        timeout: Seconds to wait before killing the process (None waits forever).

    Returns:
        The captured ProcessResult. A non-zero exit status is not an error here.

    Raises:
        ProcessError: If git cannot be launched or the timeout expires.
    """
    _ensure_directory(cwd)
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=str(cwd),
            capture_output=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise ProcessError("Git is not installed or not in PATH.")
    except subprocess.TimeoutExpired:
        raise ProcessError(f"git {' '.join(args)} timed out after {timeout} seconds.")

    # No newline translation: CRLF content must reach callers unchanged
    return ProcessResult(
        args=tuple(args),
        stdout=_decode(result.stdout),
        stderr=_decode(result.stderr),
        exit_code=result.returncode,
    )


async def run_git_command_async(
    args: Sequence[str],
    cwd: Path,
    timeout: Optional[float] = None,
) -> ProcessResult:
    """Run a git command without blocking the event loop.

    Args:
        args: List of arguments to pass to git.
        cwd: Working directory for the command.
        timeout: Seconds to wait before killing the process (None waits forever).

    Returns:
        The captured ProcessResult.

    Raises:
        ProcessError: If git cannot be launched or the timeout expires.
    """
    _ensure_directory(cwd)
    try:
        proc = await asyncio.create_subprocess_exec(
            "git",
            *args,
            cwd=str(cwd),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError:
        raise ProcessError("Git is not installed or not in PATH.")

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        raise ProcessError(f"git {' '.join(args)} timed out after {timeout} seconds.")

    return ProcessResult(
        args=tuple(args),
        stdout=_decode(stdout),
        stderr=_decode(stderr),
        exit_code=proc.returncode,
    )
