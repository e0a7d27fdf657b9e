"""check_disk_usage strategy: biggest entries under a directory."""

from __future__ import annotations

from nlshell.engine.strategies.base import PipelineParams, PipelineStrategy
from nlshell.models.operations import Direction, DiskUsage, OperationPipeline, SortField


class DiskUsageStrategy(PipelineStrategy):
    intent_name = "check_disk_usage"

    def build(self, params: PipelineParams) -> OperationPipeline:
        # du prints the size in its first column.
        return self.skeleton(
            DiskUsage(path=params.path),
            SortField.DEFAULT,
            Direction.DESCENDING,
            params.limit,
        )
