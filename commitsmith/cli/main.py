"""Main CLI command: generate, validate and commit."""

from pathlib import Path
from typing import Optional

import typer

from commitsmith import __version__
from commitsmith.config import load_config
from commitsmith.console import Console
from commitsmith.exceptions import CommitsmithError, EmptyChangesetError
from commitsmith.llm import get_provider
from commitsmith.pipeline import Pipeline


def main_command(
    ctx: typer.Context,
    repo: Optional[Path] = typer.Option(
        None,
        "--repo",
        "-r",
        help="Repository to commit in (overrides REPO_DIR)",
    ),
    env_file: Optional[Path] = typer.Option(
        None,
        "--env-file",
        help="Dotenv file to read (default: .env.local, then .env)",
    ),
    provider: Optional[str] = typer.Option(
        None,
        "--provider",
        "-p",
        help="LLM provider (groq, openai, openrouter, google, anthropic)",
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Model name (defaults to the provider's default model)",
    ),
    show_logs: bool = typer.Option(
        False,
        "--show-logs",
        "-l",
        help="Show diagnostic output (overrides SHOW_LOGS)",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Generate and validate the message without staging or committing",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
    ),
) -> None:
    """Generate a Conventional Commits message for pending changes and commit them."""
    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    if version:
        typer.echo(f"commitsmith {__version__}")
        raise typer.Exit(0)

    overrides = {
        "repo_dir": repo,
        "provider": provider,
        "model": model,
        "show_logs": True if show_logs else None,
    }

    try:
        config = load_config(env_file=env_file, overrides=overrides)
        console = Console(show_logs=config.show_logs)
        console.debug(f"repository: {config.repo_dir}")
        console.debug("scopes: " + (", ".join(config.scopes) or "(any)"))

        llm = get_provider(config)
        Pipeline(config, llm, console=console, dry_run=dry_run).run()

    except EmptyChangesetError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except CommitsmithError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
