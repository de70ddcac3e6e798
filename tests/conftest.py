"""Shared pytest fixtures for the full pipetable test suite."""

from __future__ import annotations

import pytest

from pipetable.config import FormatOptions


@pytest.fixture
def options_all_off() -> FormatOptions:
    """Provide options with every optional stage disabled."""

    return FormatOptions(consistent_cells_width=False, add_padding=False, remove_header=False)


@pytest.fixture
def kaamelott_table() -> str:
    """Provide a ragged table with a header, uneven pipes, and non-ASCII text."""

    return "\n".join(
        [
            "  Livre| Personnage |    Citation|",
            "|---|---|-------",
            "  IV  | Perceval | j'apprécie les fruits au sirop |",
            "|II|Arthur|Mais vous êtes pas mort, espèce de connard ?",
            "| I | Merlin | Qu'est-ce qui est petit et marron ? |",
        ]
    )


@pytest.fixture(autouse=True)
def _clear_pipetable_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host `PIPETABLE_*` variables from leaking into option resolution."""

    for key in (
        "PIPETABLE_CONSISTENT_CELLS_WIDTH",
        "PIPETABLE_ADD_PADDING",
        "PIPETABLE_REMOVE_HEADER",
    ):
        monkeypatch.delenv(key, raising=False)
