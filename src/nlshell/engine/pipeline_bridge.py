"""Pipeline bridge: converts intent matches into operation pipelines."""

from __future__ import annotations

from collections.abc import Mapping

from nlshell.engine.strategies.base import PipelineParams
from nlshell.engine.strategy_registry import StrategyRegistry
from nlshell.models.entity import EntityType
from nlshell.models.intent import IntentMatch
from nlshell.models.plan import ExecutionPlan


class PipelineBridge:
    def __init__(self, registry: StrategyRegistry | None = None, enabled: bool = True) -> None:
        self._registry = registry or StrategyRegistry()
        self._enabled = enabled

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    def convert(
        self, match: IntentMatch, entities: Mapping[str, EntityType]
    ) -> ExecutionPlan | None:
        """Return ``None`` when the intent has no strategy, so templates apply."""
        if not self._enabled:
            return None

        strategy = self._registry.get(match.intent.name)
        if strategy is None:
            return None

        params = PipelineParams.from_entities(entities)
        pipeline = strategy.build(params)
        pipeline.validate_plan()

        return ExecutionPlan(
            command=pipeline.to_shell_command(),
            template_name=match.intent.name,
            bindings=params.as_bindings(),
            operations=tuple(pipeline.operations),
        )
