"""Maps intent names to their pipeline strategy."""

from __future__ import annotations

from nlshell.engine.strategies.base import PipelineStrategy
from nlshell.engine.strategies.disk_usage import DiskUsageStrategy
from nlshell.engine.strategies.file_size import FileSizeStrategy
from nlshell.engine.strategies.recent_files import RecentFilesStrategy


class StrategyRegistry:
    def __init__(self) -> None:
        self._strategies: dict[str, PipelineStrategy] = {}
        for strategy in (FileSizeStrategy(), RecentFilesStrategy(), DiskUsageStrategy()):
            self.register(strategy)

    def get(self, intent_name: str) -> PipelineStrategy | None:
        return self._strategies.get(intent_name)

    def register(self, strategy: PipelineStrategy) -> None:
        self._strategies[strategy.intent_name] = strategy

    def names(self) -> list[str]:
        return list(self._strategies)
