"""Markdown pipe-table formatter.

Responsibilities:
- Assemble the ordered stage list from `FormatOptions` once per instance.
- Fold a tokenized grid through the stages and serialize the result.
- Optionally report each stage to a `RunLogger`.

The formatter is a total function of (text, options): it holds no mutable
state after construction and is safe to share between callers.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from .config import FormatOptions
from .table.grid import Grid
from .table.tokenizer import serialize, tokenize
from .table.transformers import (
    AddMissingCells,
    AddPadding,
    NormalizeColumnWidths,
    RemoveHeader,
    TableTransformer,
    TrimCellContent,
    TrimEmptyRows,
)
from .telemetry.logger import RunLogger

_StageResult = TypeVar("_StageResult")


class MarkdownTableFormatter:
    """Reformat pipe-delimited markdown tables according to `FormatOptions`."""

    def __init__(
        self,
        options: FormatOptions | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        """Initialize with options merged over defaults and build the stage list."""

        self.options = options if options is not None else FormatOptions()
        self._run_logger = run_logger
        self.stages: tuple[TableTransformer, ...] = self._build_stages()

    def _build_stages(self) -> tuple[TableTransformer, ...]:
        """Return the fixed-order stage chain selected by the options."""

        stages: list[TableTransformer] = [
            TrimCellContent(),
            TrimEmptyRows(),
            AddMissingCells(),
        ]
        if self.options.consistent_cells_width:
            stages.append(NormalizeColumnWidths())
        if self.options.add_padding:
            stages.append(AddPadding())
        if self.options.remove_header:
            stages.append(RemoveHeader())
        return tuple(stages)

    def format(self, text: str) -> str:
        """Return `text` reformatted as a canonical pipe table."""

        grid = self._run_stage("tokenize", lambda: tokenize(text), _grid_context)
        for stage in self.stages:
            grid = self._run_stage(
                stage.name,
                lambda stage=stage, grid=grid: stage.transform(grid),
                _grid_context,
            )
        return self._run_stage("serialize", lambda: serialize(grid))

    def _run_stage(
        self,
        stage_name: str,
        action: Callable[[], _StageResult],
        describe: Callable[[_StageResult], dict[str, object]] | None = None,
    ) -> _StageResult:
        """Run one named stage and emit start/complete/failure telemetry events."""

        if self._run_logger is None:
            return action()

        self._run_logger.log_stage_start(stage_name)
        try:
            result = action()
        except Exception as exc:
            self._run_logger.log_stage_failure(stage_name, type(exc).__name__)
            raise
        context = describe(result) if describe is not None else {}
        self._run_logger.log_stage_complete(stage_name, **context)
        return result


def _grid_context(grid: Grid) -> dict[str, object]:
    """Describe grid dimensions for stage-complete log lines."""

    return {
        "rows": len(grid),
        "columns": max((len(row) for row in grid), default=0),
    }
