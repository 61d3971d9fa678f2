"""CLI entry point for commitsmith.

This module provides the typer application: the default command runs the
commit pipeline, and `setup` writes repository settings to a dotenv file.
"""

import typer

from commitsmith.cli.main import main_command
from commitsmith.cli.setup_env import setup_command

# Main application
app = typer.Typer(
    name="commitsmith",
    help="commitsmith: AI-generated Conventional Commits for your working tree",
    add_completion=False,
)

# Add individual commands
app.command("setup")(setup_command)

# Set the main callback for default behavior (includes --version flag)
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "main_command",
    "setup_command",
]
