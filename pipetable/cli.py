"""Command-line interface for pipetable.

Responsibilities:
- Expose user-facing commands for formatting tables and inspecting options.
- Resolve options from CLI flags, environment, and YAML config files.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .cli_rendering import echo_options, exit_with_command_error
from .config import ConfigLoader, FormatOptions, resolve_format_options
from .errors import PipelineStageError
from .formatter import MarkdownTableFormatter
from .telemetry.logger import RunLogger

app = typer.Typer(
    name="pipetable",
    no_args_is_help=True,
    help="Reformat pipe-delimited markdown tables.",
)

ConfigFileOption = Annotated[
    Path | None,
    typer.Option("--config", help="Optional YAML file with formatter options."),
]
ConsistentCellsWidthOption = Annotated[
    bool | None,
    typer.Option(
        "--consistent-cells-width/--no-consistent-cells-width",
        help="Pad every cell to the widest cell of its column.",
    ),
]
AddPaddingOption = Annotated[
    bool | None,
    typer.Option(
        "--add-padding/--no-add-padding",
        help="Surround cell content with one space on each side.",
    ),
]
RemoveHeaderOption = Annotated[
    bool | None,
    typer.Option(
        "--remove-header/--no-remove-header",
        help="Drop the header and separator rows when the table has a header.",
    ),
]


def _version_callback(value: bool) -> None:
    """Print the package version and exit when `--version` is given."""

    if value:
        typer.echo(f"pipetable {__version__}")
        raise typer.Exit()


@app.callback()
def _app_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """Reformat pipe-delimited markdown tables."""


def _load_yaml_config(config_path: Path | None) -> FormatOptions | None:
    """Load a YAML config file when requested and map failures to stage errors."""

    if config_path is None:
        return None

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config keys/values and rerun.",
        ) from exc
    except OSError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Failed to load config file `{config_path}`: {exc}",
            hint="Verify the file is readable.",
        ) from exc


def _resolve_command_options(
    config_file: Path | None,
    consistent_cells_width: bool | None,
    add_padding: bool | None,
    remove_header: bool | None,
) -> FormatOptions:
    """Resolve effective options as CLI flags > env > config file > defaults."""

    base_options = _load_yaml_config(config_file)
    try:
        return resolve_format_options(
            cli={
                "consistent_cells_width": consistent_cells_width,
                "add_padding": add_padding,
                "remove_header": remove_header,
            },
            env=os.environ,
            base=base_options,
        )
    except ValueError as exc:
        raise PipelineStageError(
            stage="config",
            detail=str(exc),
            hint="Use `true`/`false` for `PIPETABLE_*` environment variables.",
        ) from exc


def _read_input(input_path: Path | None) -> str:
    """Read table text from a file, or from stdin when no path (or `-`) is given."""

    if input_path is None or str(input_path) == "-":
        return sys.stdin.read()

    try:
        return input_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise PipelineStageError(
            stage="read",
            detail=f"Input file not found: `{input_path}`.",
            hint="Pass an existing file or pipe the table through stdin.",
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise PipelineStageError(
            stage="read",
            detail=f"Failed to read input file `{input_path}`: {exc}",
            hint="Verify the file is readable UTF-8 text.",
        ) from exc


def _write_output(out: Path, content: str) -> None:
    """Write formatted text to `out`, creating parent directories."""

    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise PipelineStageError(
            stage="write",
            detail=f"Failed to write output file `{out}`: {exc}",
            hint="Verify the output directory is writable.",
        ) from exc


def _create_run_logger() -> RunLogger:
    """Route phase logs to stderr as the only loguru output of the command."""

    logger.remove()
    return RunLogger(sink=sys.stderr)


@app.command("format")
def format_command(
    input_path: Annotated[
        Path | None,
        typer.Argument(help="Path to a file with the table; reads stdin when omitted or `-`."),
    ] = None,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Write the formatted table to this file instead of stdout."),
    ] = None,
    config_file: ConfigFileOption = None,
    consistent_cells_width: ConsistentCellsWidthOption = None,
    add_padding: AddPaddingOption = None,
    remove_header: RemoveHeaderOption = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Emit per-stage phase logs to stderr."),
    ] = False,
) -> None:
    """Format one pipe table."""

    try:
        options = _resolve_command_options(
            config_file=config_file,
            consistent_cells_width=consistent_cells_width,
            add_padding=add_padding,
            remove_header=remove_header,
        )
        text = _read_input(input_path)
        run_logger = _create_run_logger() if verbose else None
        try:
            formatter = MarkdownTableFormatter(options, run_logger=run_logger)
            formatted = formatter.format(text) if text else ""
        finally:
            if run_logger is not None:
                run_logger.close()
        if out is not None:
            _write_output(out, formatted)
    except Exception as exc:
        exit_with_command_error("format", exc)

    if out is None:
        typer.echo(formatted)
    else:
        typer.echo(f"Formatted table: {out}", err=True)


@app.command("options")
def options_command(
    config_file: ConfigFileOption = None,
    consistent_cells_width: ConsistentCellsWidthOption = None,
    add_padding: AddPaddingOption = None,
    remove_header: RemoveHeaderOption = None,
) -> None:
    """Print the resolved formatter options."""

    try:
        options = _resolve_command_options(
            config_file=config_file,
            consistent_cells_width=consistent_cells_width,
            add_padding=add_padding,
            remove_header=remove_header,
        )
    except Exception as exc:
        exit_with_command_error("options", exc)

    echo_options(options)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
