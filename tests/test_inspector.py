"""Tests for commitsmith.git.inspector module."""

from unittest.mock import AsyncMock

import pytest

from commitsmith.git.exceptions import InspectionError, ProcessError
from commitsmith.git.inspector import (
    DIFF_FLAGS,
    EMPTY_TREE,
    RepositoryInspector,
    RepositoryState,
)
from commitsmith.git.runner import ProcessResult


def _result(args, stdout="", stderr="", exit_code=0):
    return ProcessResult(args=tuple(args), stdout=stdout, stderr=stderr, exit_code=exit_code)


def _fake_git(responses, calls=None):
    """Build a run_git_command replacement keyed by the git subcommand."""

    def run(args, cwd, timeout=None):
        if calls is not None:
            calls.append(list(args))
        response = responses[args[0]]
        if isinstance(response, Exception):
            raise response
        return _result(args, **response)

    return run


class TestRepositoryState:
    """Tests for RepositoryState."""

    def test_is_empty_for_blank_diff(self):
        """Test that a whitespace-only diff counts as empty."""
        assert RepositoryState(status_text="clean", diff_text="  \n").is_empty

    def test_not_empty_with_diff(self, sample_state):
        """Test that a real diff is not empty."""
        assert not sample_state.is_empty


class TestGetStatus:
    """Tests for RepositoryInspector.get_status."""

    def test_returns_status(self, mocker, mock_repo_dir):
        """Test that status output is returned stripped."""
        mocker.patch(
            "commitsmith.git.inspector.run_git_command",
            side_effect=_fake_git({"status": {"stdout": "On branch main\n"}}),
        )

        assert RepositoryInspector(mock_repo_dir).get_status() == "On branch main"

    def test_partial_output_is_usable(self, mocker, mock_repo_dir):
        """Test that a non-zero exit with output still returns the output."""
        mocker.patch(
            "commitsmith.git.inspector.run_git_command",
            side_effect=_fake_git(
                {"status": {"stdout": "On branch main\n", "stderr": "warning", "exit_code": 1}}
            ),
        )

        assert RepositoryInspector(mock_repo_dir).get_status() == "On branch main"

    def test_failure_without_output_raises(self, mocker, mock_repo_dir):
        """Test that a failed status with no output raises InspectionError."""
        mocker.patch(
            "commitsmith.git.inspector.run_git_command",
            side_effect=_fake_git(
                {"status": {"stderr": "fatal: not a git repository", "exit_code": 128}}
            ),
        )

        with pytest.raises(InspectionError) as exc_info:
            RepositoryInspector(mock_repo_dir).get_status()

        assert "not a git repository" in str(exc_info.value)

    def test_process_error_becomes_inspection_error(self, mocker, mock_repo_dir):
        """Test that launch failures surface as InspectionError."""
        mocker.patch(
            "commitsmith.git.inspector.run_git_command",
            side_effect=ProcessError("Git is not installed or not in PATH."),
        )

        with pytest.raises(InspectionError):
            RepositoryInspector(mock_repo_dir).get_status()


class TestGetDiff:
    """Tests for RepositoryInspector.get_diff."""

    def test_unstaged_diff_does_not_touch_index(self, mocker, mock_repo_dir, sample_diff):
        """Test that the default diff never runs git add."""
        calls = []
        mocker.patch(
            "commitsmith.git.inspector.run_git_command",
            side_effect=_fake_git(
                {
                    "rev-parse": {"stdout": "abc123\n"},
                    "diff": {"stdout": sample_diff},
                },
                calls,
            ),
        )

        diff = RepositoryInspector(mock_repo_dir).get_diff()

        assert diff == sample_diff
        assert ["diff", *DIFF_FLAGS, "HEAD"] in calls
        assert not any(call[0] == "add" for call in calls)

    def test_staged_diff_stages_first(self, mocker, mock_repo_dir, sample_diff):
        """Test that staged=True runs git add . before diffing the index."""
        calls = []
        mocker.patch(
            "commitsmith.git.inspector.run_git_command",
            side_effect=_fake_git(
                {
                    "rev-parse": {"stdout": "abc123\n"},
                    "add": {},
                    "diff": {"stdout": sample_diff},
                },
                calls,
            ),
        )

        diff = RepositoryInspector(mock_repo_dir).get_diff(staged=True)

        assert diff == sample_diff
        add_index = calls.index(["add", "."])
        diff_index = calls.index(["diff", "--cached", *DIFF_FLAGS, "HEAD"])
        assert add_index < diff_index

    def test_staging_failure_raises(self, mocker, mock_repo_dir):
        """Test that a failing git add raises InspectionError."""
        mocker.patch(
            "commitsmith.git.inspector.run_git_command",
            side_effect=_fake_git(
                {
                    "rev-parse": {"stdout": "abc123\n"},
                    "add": {"stderr": "fatal: index.lock exists", "exit_code": 128},
                }
            ),
        )

        with pytest.raises(InspectionError) as exc_info:
            RepositoryInspector(mock_repo_dir).get_diff(staged=True)

        assert "stage" in str(exc_info.value)

    def test_uses_empty_tree_without_commits(self, mocker, mock_repo_dir):
        """Test that a repository without HEAD diffs against the empty tree."""
        calls = []
        mocker.patch(
            "commitsmith.git.inspector.run_git_command",
            side_effect=_fake_git(
                {
                    "rev-parse": {"exit_code": 1},
                    "diff": {"stdout": ""},
                },
                calls,
            ),
        )

        RepositoryInspector(mock_repo_dir).get_diff()

        assert ["diff", *DIFF_FLAGS, EMPTY_TREE] in calls

    def test_diff_failure_raises(self, mocker, mock_repo_dir):
        """Test that a failing diff raises InspectionError."""
        mocker.patch(
            "commitsmith.git.inspector.run_git_command",
            side_effect=_fake_git(
                {
                    "rev-parse": {"stdout": "abc123\n"},
                    "diff": {"stderr": "fatal: bad object", "exit_code": 128},
                }
            ),
        )

        with pytest.raises(InspectionError):
            RepositoryInspector(mock_repo_dir).get_diff()


def _fake_git_async(responses):
    sync = _fake_git(responses)

    async def run(args, cwd, timeout=None):
        if args[:2] == ["diff", "--name-only"]:
            return sync(["name-only", *args], cwd, timeout)
        return sync(args, cwd, timeout)

    return run


class TestCaptureState:
    """Tests for RepositoryInspector.capture_state."""

    @pytest.mark.asyncio
    async def test_captures_status_diff_and_paths(self, mocker, mock_repo_dir, sample_status, sample_diff):
        """Test that all three reads are joined into one RepositoryState."""
        mocker.patch(
            "commitsmith.git.inspector.run_git_command_async",
            new=AsyncMock(
                side_effect=_fake_git_async(
                    {
                        "rev-parse": {"stdout": "abc123\n"},
                        "status": {"stdout": sample_status},
                        "diff": {"stdout": sample_diff},
                        "name-only": {"stdout": "core/app.py\0docs/read me.md\0"},
                    }
                )
            ),
        )

        state = await RepositoryInspector(mock_repo_dir).capture_state()

        assert state.status_text == sample_status.strip()
        assert state.diff_text == sample_diff
        assert state.paths == ("core/app.py", "docs/read me.md")
        assert state.base == "HEAD"

    @pytest.mark.asyncio
    async def test_empty_working_tree(self, mocker, mock_repo_dir):
        """Test a clean working tree yields an empty state."""
        mocker.patch(
            "commitsmith.git.inspector.run_git_command_async",
            new=AsyncMock(
                side_effect=_fake_git_async(
                    {
                        "rev-parse": {"stdout": "abc123\n"},
                        "status": {"stdout": "nothing to commit, working tree clean\n"},
                        "diff": {"stdout": ""},
                        "name-only": {"stdout": ""},
                    }
                )
            ),
        )

        state = await RepositoryInspector(mock_repo_dir).capture_state()

        assert state.is_empty
        assert state.paths == ()

    @pytest.mark.asyncio
    async def test_any_failed_read_fails_capture(self, mocker, mock_repo_dir):
        """Test that one failing read fails the whole capture."""
        mocker.patch(
            "commitsmith.git.inspector.run_git_command_async",
            new=AsyncMock(
                side_effect=_fake_git_async(
                    {
                        "rev-parse": {"stdout": "abc123\n"},
                        "status": {"stdout": "On branch main\n"},
                        "diff": {"stderr": "fatal: bad object", "exit_code": 128},
                        "name-only": {"stdout": "core/app.py\0"},
                    }
                )
            ),
        )

        with pytest.raises(InspectionError):
            await RepositoryInspector(mock_repo_dir).capture_state()

    @pytest.mark.asyncio
    async def test_rename_detection_disabled(self, mocker, mock_repo_dir):
        """Test that both sides of a move are listed as separate paths."""
        mock_run = mocker.patch(
            "commitsmith.git.inspector.run_git_command_async",
            new=AsyncMock(
                side_effect=_fake_git_async(
                    {
                        "rev-parse": {"stdout": "abc123\n"},
                        "status": {"stdout": "renamed: core/app.py -> core/main.py\n"},
                        "diff": {"stdout": "diff --git a/core/app.py b/core/app.py\n"},
                        "name-only": {"stdout": "core/app.py\0core/main.py\0"},
                    }
                )
            ),
        )

        state = await RepositoryInspector(mock_repo_dir).capture_state()

        diff_calls = [c.args[0] for c in mock_run.call_args_list if c.args[0][0] == "diff"]
        assert all("--no-renames" in args for args in diff_calls)
        assert len(diff_calls) == 2
        assert state.paths == ("core/app.py", "core/main.py")
