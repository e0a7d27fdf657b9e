"""Intent models: declared tasks and the result of scoring one against input."""

from __future__ import annotations

import enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from nlshell.models.entity import EntityType


class IntentDomain(str, enum.Enum):
    FILE_OPS = "FileOps"
    DATA_OPS = "DataOps"
    DIAGNOSTIC_OPS = "DiagnosticOps"
    SYSTEM_OPS = "SystemOps"


class Intent(BaseModel):
    """A named task the matcher can recognize.

    ``entities`` maps an entity name to its default value; the variant of the
    default also tells the extractor which kind of value to look for.
    Any plain string is accepted as a custom ``domain``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    domain: Union[IntentDomain, str] = "default"
    keywords: list[str] = Field(default_factory=list)
    patterns: list[str] = Field(default_factory=list)
    entities: dict[str, EntityType] = Field(default_factory=dict)
    confidence_threshold: float = Field(default=0.5, ge=0.0, le=1.0)

    def with_entity(self, name: str, entity: EntityType) -> Intent:
        return self.model_copy(update={"entities": {**self.entities, name: entity}})

    def meets_threshold(self, confidence: float) -> bool:
        return confidence >= self.confidence_threshold


class IntentMatch(BaseModel):
    intent: Intent
    confidence: float = Field(ge=0.0, le=1.0)
    matched_keywords: list[str] = Field(default_factory=list)
    extracted_entities: dict[str, EntityType] = Field(default_factory=dict)

    def meets_threshold(self) -> bool:
        return self.intent.meets_threshold(self.confidence)

    def missing_entities(self) -> list[str]:
        """Names declared by the intent that extraction did not fill."""
        return [n for n in self.intent.entities if n not in self.extracted_entities]
