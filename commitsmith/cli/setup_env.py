"""CLI command for writing repository settings to a dotenv file."""

import json
from pathlib import Path

import typer
from dotenv import dotenv_values, set_key, unset_key

from commitsmith.config import API_KEY_ENV_VARS, ENV_KEYS, LLMProvider, parse_scopes

# Keys written by setup, and the aliases they replace
REPO_KEY = ENV_KEYS["repo_dir"][0]
SCOPES_KEY = ENV_KEYS["scopes"][0]
PROVIDER_KEY = ENV_KEYS["provider"][0]
MANAGED_KEYS = ENV_KEYS["repo_dir"] + ENV_KEYS["scopes"]


def setup_command(
    env_file: Path = typer.Option(
        Path(".env.local"),
        "--env-file",
        help="Dotenv file to write",
    ),
) -> None:
    """Interactively set the repository path, scopes and provider."""
    existing = dotenv_values(env_file) if env_file.is_file() else {}

    if any(key in existing for key in MANAGED_KEYS):
        override = typer.confirm(
            f"The entries already exist in {env_file}. Do you want to override them?",
            default=False,
        )
        if not override:
            typer.echo(f"No changes made to {env_file}.")
            raise typer.Exit(0)

    repo_path = typer.prompt("Enter the project repository path (e.g., /path/to/your/repo)")
    repo_dir = Path(repo_path.strip()).expanduser()
    if not repo_dir.is_dir():
        typer.echo(f"Repository path does not exist: {repo_dir}", err=True)
        raise typer.Exit(1)

    scopes_raw = typer.prompt('Enter the scopes (e.g., ["api","ui"] or api,ui)')
    try:
        scopes = parse_scopes(scopes_raw)
    except ValueError as e:
        typer.echo(f"Invalid scopes: {e}", err=True)
        raise typer.Exit(1)
    if not scopes:
        typer.echo("Please provide at least one scope.", err=True)
        raise typer.Exit(1)

    typer.echo()
    typer.echo("Available LLM providers:")
    providers = list(LLMProvider)
    for i, llm_provider in enumerate(providers, 1):
        typer.echo(f"  {i}. {llm_provider.value}")

    provider_choice = typer.prompt(
        f"Select a provider (1-{len(providers)})",
        type=int,
        default=1,
    )
    if provider_choice < 1 or provider_choice > len(providers):
        typer.echo("Invalid choice. Aborting.", err=True)
        raise typer.Exit(1)
    selected_provider = providers[provider_choice - 1]

    env_var = API_KEY_ENV_VARS[selected_provider][0]
    api_key = typer.prompt(
        f"Enter your {selected_provider.value} API key (leave blank to keep {env_var} unchanged)",
        default="",
        show_default=False,
        hide_input=True,
    )

    try:
        env_file.touch(exist_ok=True)
        # Drop aliases so the values written below are the ones that get read
        for key in MANAGED_KEYS:
            if key in existing:
                unset_key(env_file, key)
        set_key(env_file, REPO_KEY, str(repo_dir.resolve()))
        set_key(env_file, SCOPES_KEY, json.dumps(list(scopes)))
        set_key(env_file, PROVIDER_KEY, selected_provider.value)
        if api_key.strip():
            set_key(env_file, env_var, api_key.strip())
    except OSError as e:
        typer.echo(f"Error writing {env_file}: {e}", err=True)
        raise typer.Exit(1)

    typer.echo()
    typer.echo(f"✓ Updated {env_file}")
    typer.echo(f"  Repository: {repo_dir.resolve()}")
    typer.echo(f"  Scopes: {', '.join(scopes)}")
    typer.echo(f"  Provider: {selected_provider.value}")
