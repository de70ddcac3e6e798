"""Integration tests for the `format` and `options` CLI commands."""

from __future__ import annotations

from pathlib import Path

from pytest import MonkeyPatch
from typer.testing import CliRunner

from pipetable import __version__
from pipetable.cli import app

_KAAMELOTT_FORMATTED = "\n".join(
    [
        "| Livre | Personnage | Citation                                     |",
        "|-------|------------|----------------------------------------------|",
        "| IV    | Perceval   | j'apprécie les fruits au sirop               |",
        "| II    | Arthur     | Mais vous êtes pas mort, espèce de connard ? |",
        "| I     | Merlin     | Qu'est-ce qui est petit et marron ?          |",
    ]
)


def test_format_command_reads_file_and_prints_default_format(
    tmp_path: Path, kaamelott_table: str
) -> None:
    """Formatting a file should print the aligned, padded table to stdout."""

    input_path = tmp_path / "table.md"
    input_path.write_text(kaamelott_table, encoding="utf-8")

    result = CliRunner().invoke(app, ["format", str(input_path)])

    assert result.exit_code == 0
    assert result.stdout == _KAAMELOTT_FORMATTED + "\n"


def test_format_command_reads_stdin_with_flags() -> None:
    """Without a path the table is read from stdin and flags select stages."""

    result = CliRunner().invoke(
        app,
        ["format", "--no-consistent-cells-width", "--no-add-padding", "--remove-header"],
        input="|h1|h2|\n|---|---|\n| a1 | b1 |\n",
    )

    assert result.exit_code == 0
    assert result.stdout == "|a1|b1|\n"


def test_format_command_accepts_dash_for_stdin() -> None:
    """`-` is an explicit alias for stdin."""

    result = CliRunner().invoke(
        app,
        ["format", "-", "--no-consistent-cells-width", "--no-add-padding"],
        input="a1|b1|\na2|b2\n|a3|b3",
    )

    assert result.exit_code == 0
    assert result.stdout == "|a1|b1|\n|a2|b2|\n|a3|b3|\n"


def test_format_command_normalizes_windows_line_endings(tmp_path: Path) -> None:
    """CRLF files should format the same as LF files."""

    input_path = tmp_path / "crlf.md"
    input_path.write_bytes(b"|a|b|\r\n|c|d|\r\n")

    result = CliRunner().invoke(
        app, ["format", str(input_path), "--no-consistent-cells-width", "--no-add-padding"]
    )

    assert result.exit_code == 0
    assert result.stdout == "|a|b|\n|c|d|\n"


def test_format_command_prints_empty_line_for_empty_input() -> None:
    """Empty input should produce empty output."""

    result = CliRunner().invoke(app, ["format"], input="")

    assert result.exit_code == 0
    assert result.stdout == "\n"


def test_format_command_writes_output_file(tmp_path: Path) -> None:
    """`--out` should write the formatted table verbatim and report the path."""

    input_path = tmp_path / "table.md"
    input_path.write_text("|h1|h2|\n|---|---|\n|a1|b1|", encoding="utf-8")
    out_path = tmp_path / "nested" / "formatted.md"

    result = CliRunner().invoke(
        app,
        ["format", str(input_path), "--out", str(out_path), "--no-consistent-cells-width"],
    )

    assert result.exit_code == 0
    assert out_path.read_text(encoding="utf-8") == "| h1 | h2 |\n|----|----|\n| a1 | b1 |"
    assert f"Formatted table: {out_path}" in result.output


def test_format_command_applies_config_file_and_env_precedence(
    tmp_path: Path, monkeypatch: MonkeyPatch
) -> None:
    """Flags override env, env overrides the config file, the file overrides defaults."""

    config_path = tmp_path / "pipetable.yaml"
    config_path.write_text(
        "consistent_cells_width: false\nadd_padding: false\nremove_header: true\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("PIPETABLE_REMOVE_HEADER", "false")

    result = CliRunner().invoke(
        app,
        ["format", "--config", str(config_path), "--add-padding"],
        input="|h1|h2|\n|---|---|\n|a1|b1|",
    )

    assert result.exit_code == 0
    assert result.stdout == "| h1 | h2 |\n|----|----|\n| a1 | b1 |\n"


def test_format_command_verbose_logs_phases_to_stderr() -> None:
    """`--verbose` should emit phase lines for every executed stage."""

    result = CliRunner().invoke(app, ["format", "--verbose"], input="|a|b|")

    assert result.exit_code == 0
    assert "| a | b |" in result.output
    assert "[phase] level=INFO stage=consistent_cells_width event=complete" in result.output
    assert "[phase] level=INFO stage=add_padding event=complete" in result.output
    assert "stage=remove_header" not in result.output


def test_options_command_prints_resolved_options(
    tmp_path: Path, monkeypatch: MonkeyPatch
) -> None:
    """`options` should list the effective values after precedence resolution."""

    config_path = tmp_path / "pipetable.yaml"
    config_path.write_text("addPadding: false\n", encoding="utf-8")
    monkeypatch.setenv("PIPETABLE_REMOVE_HEADER", "yes")

    result = CliRunner().invoke(
        app, ["options", "--config", str(config_path), "--no-consistent-cells-width"]
    )

    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "consistent_cells_width: false",
        "add_padding: false",
        "remove_header: true",
    ]


def test_version_option_prints_package_version() -> None:
    """`--version` should print the version and exit successfully."""

    result = CliRunner().invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.stdout.strip() == f"pipetable {__version__}"
