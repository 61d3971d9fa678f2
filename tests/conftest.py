"""Shared test fixtures and configuration."""

import shutil
import subprocess
import tempfile
from pathlib import Path

import pytest

from commitsmith.config import AppConfig, LLMProvider
from commitsmith.git.inspector import RepositoryState
from commitsmith.llm.base import BaseLLMProvider
from commitsmith.llm.prompts import GenerationRequest


SAMPLE_STATUS = """On branch main
Changes not staged for commit:
  (use "git add <file>..." to update what will be committed)
\tmodified:   core/app.py
"""

SAMPLE_DIFF = """diff --git a/core/app.py b/core/app.py
index 1234567..abcdefg 100644
--- a/core/app.py
+++ b/core/app.py
@@ -1,2 +1,3 @@
 def main():
     print("hello")
+added line
"""


class FakeProvider(BaseLLMProvider):
    """Provider that returns a canned reply instead of calling a service."""

    provider = LLMProvider.GROQ
    display_name = "Fake"

    def __init__(self, config: AppConfig, reply: str = "", error: Exception | None = None):
        super().__init__(config, api_key="test-key")
        self.reply = reply
        self.error = error
        self.requests: list[GenerationRequest] = []

    def _complete(self, request: GenerationRequest) -> str:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_repo_dir(temp_dir):
    """Create a mock git repository directory."""
    # Create .git directory to simulate a git repo
    git_dir = temp_dir / ".git"
    git_dir.mkdir()
    return temp_dir


@pytest.fixture
def app_config(mock_repo_dir):
    """AppConfig pointing at the mock repository, scoped to 'core'."""
    return AppConfig(
        repo_dir=mock_repo_dir,
        scopes=("core",),
        api_keys={"GROQ_API_KEY": "test-key"},
    )


@pytest.fixture
def sample_status():
    return SAMPLE_STATUS


@pytest.fixture
def sample_diff():
    return SAMPLE_DIFF


@pytest.fixture
def sample_state():
    """RepositoryState matching SAMPLE_STATUS / SAMPLE_DIFF."""
    return RepositoryState(
        status_text=SAMPLE_STATUS,
        diff_text=SAMPLE_DIFF,
        paths=("core/app.py",),
        base="HEAD",
    )


@pytest.fixture
def make_provider(app_config):
    """Factory for FakeProvider instances bound to app_config."""

    def _make(reply: str = "", error: Exception | None = None) -> FakeProvider:
        return FakeProvider(app_config, reply=reply, error=error)

    return _make


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        check=True,
    )
    return result.stdout.decode("utf-8", errors="replace")


@pytest.fixture
def git(monkeypatch, temp_dir):
    """Isolated git environment; returns a helper that runs git in a repo."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    gitconfig = temp_dir / "gitconfig"
    gitconfig.write_text(
        "[user]\n"
        "\tname = Test User\n"
        "\temail = test@example.com\n"
        "[commit]\n"
        "\tgpgsign = false\n"
        "[init]\n"
        "\tdefaultBranch = main\n"
    )
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(gitconfig))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    # Older git ignores GIT_CONFIG_GLOBAL; identity must still be set
    for role in ("AUTHOR", "COMMITTER"):
        monkeypatch.setenv(f"GIT_{role}_NAME", "Test User")
        monkeypatch.setenv(f"GIT_{role}_EMAIL", "test@example.com")
    return _git


@pytest.fixture
def git_repo(git, temp_dir):
    """A real git repository with one commit containing core/app.py."""
    repo = temp_dir / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    (repo / "core").mkdir()
    (repo / "core" / "app.py").write_text('def main():\n    print("hello")\n')
    git(repo, "add", ".")
    git(repo, "commit", "-q", "-m", "chore(core): initial commit")
    return repo
