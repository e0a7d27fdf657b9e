"""find_files_by_size strategy: largest or smallest files first."""

from __future__ import annotations

from nlshell.engine.strategies.base import PipelineParams, PipelineStrategy
from nlshell.models.operations import FindFiles, OperationPipeline, SortField


class FileSizeStrategy(PipelineStrategy):
    intent_name = "find_files_by_size"

    def build(self, params: PipelineParams) -> OperationPipeline:
        return self.skeleton(
            FindFiles(path=params.path, pattern=params.pattern),
            SortField.SIZE,
            params.direction,
            params.limit,
        )
