"""Line-oriented console output.

Progress lines go to stderr so that stdout carries only the final commit
message. Debug lines are printed only when SHOW_LOGS / --show-logs is on.
"""

import typer


class Console:
    """Thin wrapper around typer.echo with a verbosity switch."""

    def __init__(self, show_logs: bool = False):
        self.show_logs = show_logs

    def info(self, message: str) -> None:
        typer.echo(message, err=True)

    def result(self, message: str) -> None:
        typer.echo(message)

    def error(self, message: str) -> None:
        typer.echo(message, err=True)

    def debug(self, label: str, detail: str = "") -> None:
        """Print a diagnostic line (and optional block) when logs are enabled."""
        if not self.show_logs:
            return
        typer.echo(f"[debug] {label}", err=True)
        if detail:
            typer.echo(detail, err=True)
