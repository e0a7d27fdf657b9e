"""Entry point and dependency wiring."""

from __future__ import annotations

import sys

from loguru import logger

from nlshell.cli.app import app
from nlshell.config.settings import Settings
from nlshell.engine.builtin import BuiltinIntents
from nlshell.engine.pipeline_bridge import PipelineBridge
from nlshell.parser.command_validator import CommandValidator
from nlshell.parser.intent_matcher import FuzzyConfig
from nlshell.parser.llm_extractor import LLMEntityExtractor
from nlshell.planner import Planner


def configure_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def build_planner(settings: Settings | None = None) -> Planner:
    settings = settings or Settings()

    builtins = BuiltinIntents()
    matcher = builtins.create_matcher(
        cache_capacity=settings.cache_capacity,
        fuzzy_config=FuzzyConfig(
            enabled=settings.fuzzy_enabled,
            similarity_threshold=settings.fuzzy_similarity_threshold,
            fuzzy_weight=settings.fuzzy_weight,
        ),
    )
    engine = builtins.create_engine()
    bridge = PipelineBridge(enabled=settings.use_pipeline)

    llm_extractor = None
    if settings.llm_extraction and settings.llm_available:
        llm_extractor = LLMEntityExtractor(settings)

    return Planner(matcher=matcher, engine=engine, bridge=bridge, llm_extractor=llm_extractor)


def build_validator(settings: Settings | None = None) -> CommandValidator | None:
    settings = settings or Settings()
    if not settings.llm_available:
        return None
    return CommandValidator(settings)


if __name__ == "__main__":
    app()
