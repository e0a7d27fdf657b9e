"""LLM-backed entity extraction on top of the regex extractor."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Optional

from loguru import logger
from openai import AsyncOpenAI

from nlshell.config.settings import Settings
from nlshell.exceptions import ExtractionError
from nlshell.models.entity import (
    CustomEntity,
    DateEntity,
    EntityType,
    FileTypeEntity,
    NumberEntity,
    OperationEntity,
    PathEntity,
)
from nlshell.parser.entity_extractor import EntityExtractor
from nlshell.parser.prompt_templates import ENTITY_DESCRIPTIONS, ENTITY_EXTRACTION_PROMPT
from nlshell.parser.response import extract_json_object


class LLMEntityExtractor:
    def __init__(
        self,
        settings: Settings,
        client: AsyncOpenAI | None = None,
        extractor: EntityExtractor | None = None,
    ) -> None:
        self._settings = settings
        self._client = client or AsyncOpenAI(api_key=settings.openai_api_key)
        self._extractor = extractor or EntityExtractor()

    async def extract(
        self, query: str, expected: Mapping[str, EntityType]
    ) -> dict[str, EntityType]:
        """Regex extraction, with the LLM asked only for what regex missed.

        Any LLM or parsing failure returns the regex-only result.
        """
        extracted = self._extractor.extract(query, expected)
        missing = [name for name in expected if name not in extracted]
        if not missing:
            return extracted

        prompt = self.build_prompt(query, missing, expected)
        try:
            response = await self._client.chat.completions.create(
                model=self._settings.openai_model,
                messages=[{"role": "user", "content": prompt}],
                temperature=0.0,
            )
        except Exception as exc:
            logger.warning(f"LLM entity extraction failed, using regex result: {exc}")
            return extracted

        raw = response.choices[0].message.content
        if not raw:
            logger.warning("LLM returned empty content for entity extraction")
            return extracted

        try:
            llm_entities = self.parse_response(raw, expected)
        except ExtractionError as exc:
            logger.warning(f"Could not parse LLM entity response: {exc}")
            return extracted

        # Regex results win over LLM guesses.
        return {**llm_entities, **extracted}

    @staticmethod
    def build_prompt(
        query: str, missing: list[str], expected: Mapping[str, EntityType]
    ) -> str:
        lines = [f"  - {name}: {_describe(expected[name])}" for name in missing]
        return ENTITY_EXTRACTION_PROMPT.format(query=query, parameters="\n".join(lines))

    @staticmethod
    def parse_response(
        response: str, expected: Mapping[str, EntityType]
    ) -> dict[str, EntityType]:
        data = extract_json_object(response)
        entities: dict[str, EntityType] = {}
        for name, shape in expected.items():
            entity = _coerce(shape, data.get(name))
            if entity is not None:
                entities[name] = entity
        return entities


def _describe(shape: EntityType) -> str:
    if isinstance(shape, CustomEntity):
        return shape.type_name
    return ENTITY_DESCRIPTIONS[shape.kind]


def _coerce(shape: EntityType, value: Any) -> Optional[EntityType]:
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, (int, float)):
        if isinstance(shape, NumberEntity):
            return _finite_number(value)
        return None

    if not isinstance(value, str) or not value:
        return None

    if isinstance(shape, NumberEntity):
        try:
            return _finite_number(float(value))
        except ValueError:
            return None
    if isinstance(shape, PathEntity):
        return PathEntity(value=value)
    if isinstance(shape, FileTypeEntity):
        return FileTypeEntity(value=value)
    if isinstance(shape, OperationEntity):
        return OperationEntity(value=value)
    if isinstance(shape, DateEntity):
        return DateEntity(value=value)
    if isinstance(shape, CustomEntity):
        return CustomEntity(type_name=shape.type_name, value=value)
    return None


def _finite_number(value: float) -> Optional[NumberEntity]:
    try:
        number = float(value)
    except OverflowError:
        return None
    if not math.isfinite(number):
        return None
    return NumberEntity(value=number)
