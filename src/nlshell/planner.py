"""Planner: wires match -> extract -> pipeline bridge -> template fallback."""

from __future__ import annotations

import enum
from typing import Optional

from loguru import logger
from pydantic import BaseModel, Field

from nlshell.engine.pipeline_bridge import PipelineBridge
from nlshell.engine.template_engine import TemplateEngine
from nlshell.exceptions import PlanValidationError, TemplateError
from nlshell.models.entity import EntityType
from nlshell.models.intent import IntentMatch
from nlshell.models.plan import ExecutionPlan
from nlshell.parser.intent_matcher import IntentMatcher
from nlshell.parser.llm_extractor import LLMEntityExtractor


class PlanSource(str, enum.Enum):
    PIPELINE = "pipeline"
    TEMPLATE = "template"
    NONE = "none"


class PlanResult(BaseModel):
    query: str
    match: Optional[IntentMatch] = None
    entities: dict[str, EntityType] = Field(default_factory=dict)
    plan: Optional[ExecutionPlan] = None
    source: PlanSource = PlanSource.NONE
    reason: str = ""

    @property
    def has_plan(self) -> bool:
        return self.plan is not None


class Planner:
    def __init__(
        self,
        matcher: IntentMatcher,
        engine: TemplateEngine,
        bridge: PipelineBridge,
        llm_extractor: LLMEntityExtractor | None = None,
    ) -> None:
        self._matcher = matcher
        self._engine = engine
        self._bridge = bridge
        self._llm_extractor = llm_extractor

    @property
    def matcher(self) -> IntentMatcher:
        return self._matcher

    @property
    def engine(self) -> TemplateEngine:
        return self._engine

    def plan(self, query: str) -> PlanResult:
        match = self._matcher.best_match(query)
        if match is None:
            return PlanResult(query=query, reason="No intent matched")
        return self._build(query, match)

    async def aplan(self, query: str) -> PlanResult:
        """Like :meth:`plan`, but asks the LLM for entities regex missed."""
        match = self._matcher.best_match(query)
        if match is None:
            return PlanResult(query=query, reason="No intent matched")

        if self._llm_extractor is not None and match.missing_entities():
            entities = await self._llm_extractor.extract(query, match.intent.entities)
            match = match.model_copy(update={"extracted_entities": entities})
        return self._build(query, match)

    def _build(self, query: str, match: IntentMatch) -> PlanResult:
        entities = dict(match.extracted_entities)
        try:
            plan = self._bridge.convert(match, entities)
            if plan is not None:
                source = PlanSource.PIPELINE
            else:
                plan = self._engine.generate_from_intent(match)
                source = PlanSource.TEMPLATE
        except (TemplateError, PlanValidationError) as exc:
            logger.warning(f"No plan for intent {match.intent.name}: {exc}")
            return PlanResult(query=query, match=match, entities=entities, reason=str(exc))

        logger.debug(f"Planned {match.intent.name} via {source.value}: {plan.command}")
        return PlanResult(
            query=query, match=match, entities=entities, plan=plan, source=source
        )
