"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics
and resolved option listings.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .config import FormatOptions
from .errors import PipelineStageError


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, PipelineStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_options(options: FormatOptions) -> None:
    """Print one `name: true|false` row per option in declaration order."""

    for name, value in options.as_dict().items():
        typer.echo(f"{name}: {'true' if value else 'false'}")
