"""find_recent_files strategy: newest files first."""

from __future__ import annotations

from nlshell.engine.strategies.base import PipelineParams, PipelineStrategy
from nlshell.models.operations import Direction, FindFiles, OperationPipeline, SortField


class RecentFilesStrategy(PipelineStrategy):
    intent_name = "find_recent_files"

    def build(self, params: PipelineParams) -> OperationPipeline:
        # "Recent" already implies newest first; sort_order is ignored.
        return self.skeleton(
            FindFiles(path=params.path, pattern=params.pattern),
            SortField.TIME,
            Direction.DESCENDING,
            params.limit,
        )
