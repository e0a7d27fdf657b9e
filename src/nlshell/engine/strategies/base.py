"""Abstract base for pipeline strategies and the parameters they share."""

from __future__ import annotations

import abc
import math
import sys
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict

from nlshell.models.entity import CustomEntity, EntityType, FileTypeEntity, NumberEntity, PathEntity
from nlshell.models.operations import (
    Direction,
    LimitFiles,
    Operation,
    OperationPipeline,
    SortField,
    SortFiles,
)

DEFAULT_PATH = "."
DEFAULT_PATTERN = "*"
DEFAULT_DIRECTION = Direction.DESCENDING
DEFAULT_LIMIT = 10


class PipelineParams(BaseModel):
    """Entity values mapped onto pipeline parameters, defaults applied."""

    model_config = ConfigDict(frozen=True)

    path: str = DEFAULT_PATH
    pattern: str = DEFAULT_PATTERN
    direction: Direction = DEFAULT_DIRECTION
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_entities(cls, entities: Mapping[str, EntityType]) -> PipelineParams:
        params: dict = {}

        path = entities.get("path")
        if isinstance(path, PathEntity):
            params["path"] = path.value

        ext = entities.get("ext")
        if isinstance(ext, FileTypeEntity):
            params["pattern"] = f"*.{ext.value}"

        order = entities.get("sort_order")
        if isinstance(order, CustomEntity) and order.type_name == "sort":
            params["direction"] = (
                Direction.ASCENDING if order.value == "-h" else Direction.DESCENDING
            )

        limit = entities.get("limit")
        if isinstance(limit, NumberEntity) and math.isfinite(limit.value):
            params["limit"] = min(max(int(limit.value), 0), sys.maxsize)

        return cls(**params)

    def as_bindings(self) -> dict[str, str]:
        return {
            "path": self.path,
            "pattern": self.pattern,
            "direction": self.direction.value,
            "limit": str(self.limit),
        }


class PipelineStrategy(abc.ABC):
    intent_name: str

    @abc.abstractmethod
    def build(self, params: PipelineParams) -> OperationPipeline:
        ...  # pragma: no cover

    @staticmethod
    def skeleton(
        source: Operation, field: SortField, direction: Direction, limit: int
    ) -> OperationPipeline:
        """The shared ``source | sort | head`` shape."""
        return (
            OperationPipeline(operations=[source])
            .then(SortFiles(field=field, direction=direction))
            .then(LimitFiles(count=limit))
        )
