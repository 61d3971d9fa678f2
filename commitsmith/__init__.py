"""AI-assisted Conventional Commits for a local git repository."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("commitsmith")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"


# Allowed commit types, in the order they are shown to the model
COMMIT_TYPES = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "chore",
    "ci",
    "build",
    "revert",
)

# Hard limit for the generated subject line
MAX_MESSAGE_LENGTH = 100
