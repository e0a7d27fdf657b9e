"""Pipeline operations: typed shell fragments joined with pipes.

The operations are fixed; only their parameters vary. Intents that differ
on a single axis (size vs. time, find vs. du) share one operation sequence
and change one field.
"""

from __future__ import annotations

import enum
from typing import Annotated, ClassVar, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from nlshell.exceptions import PlanValidationError


class SortField(str, enum.Enum):
    SIZE = "size"
    TIME = "time"
    NAME = "name"
    DEFAULT = "default"

    def sort_key(self) -> Optional[str]:
        # Columns of `ls -lh` output; DEFAULT sorts on the first column.
        return {
            SortField.SIZE: "5",
            SortField.TIME: "6",
            SortField.NAME: "9",
        }.get(self)


class Direction(str, enum.Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"

    def sort_flag(self) -> str:
        return "-h" if self is Direction.ASCENDING else "-hr"


class _Operation(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_source: ClassVar[bool] = False

    def to_shell_fragment(self) -> str:
        raise NotImplementedError  # pragma: no cover


class FindFiles(_Operation):
    op: Literal["find_files"] = "find_files"
    path: str = "."
    pattern: str = "*"

    is_source: ClassVar[bool] = True

    def to_shell_fragment(self) -> str:
        return f"find {self.path} -name '{self.pattern}' -type f -exec ls -lh {{}} +"


class ListFiles(_Operation):
    op: Literal["list_files"] = "list_files"
    path: str = "."

    is_source: ClassVar[bool] = True

    def to_shell_fragment(self) -> str:
        return f"ls -lh {self.path}"


class DiskUsage(_Operation):
    op: Literal["disk_usage"] = "disk_usage"
    path: str = "."

    is_source: ClassVar[bool] = True

    def to_shell_fragment(self) -> str:
        return f"du -sh {self.path}/*"


class SortFiles(_Operation):
    op: Literal["sort_files"] = "sort_files"
    field: SortField = SortField.DEFAULT
    direction: Direction = Direction.DESCENDING

    def to_shell_fragment(self) -> str:
        key = self.field.sort_key()
        if key is None:
            return f"sort {self.direction.sort_flag()}"
        return f"sort -k{key} {self.direction.sort_flag()}"


class LimitFiles(_Operation):
    op: Literal["limit_files"] = "limit_files"
    count: int = Field(default=10, ge=0)

    def to_shell_fragment(self) -> str:
        return f"head -n {self.count}"


class FilterFiles(_Operation):
    op: Literal["filter_files"] = "filter_files"
    condition: str

    def to_shell_fragment(self) -> str:
        return f"grep '{self.condition}'"


Operation = Annotated[
    Union[FindFiles, ListFiles, DiskUsage, SortFiles, LimitFiles, FilterFiles],
    Field(discriminator="op"),
]


class OperationPipeline(BaseModel):
    operations: list[Operation] = Field(default_factory=list)

    def then(self, operation: Operation) -> OperationPipeline:
        return OperationPipeline(operations=[*self.operations, operation])

    def to_shell_command(self) -> str:
        return " | ".join(op.to_shell_fragment() for op in self.operations)

    def validate_plan(self) -> None:
        if not self.operations:
            raise PlanValidationError("Operation pipeline is empty")
        first = self.operations[0]
        if not first.is_source:
            raise PlanValidationError(
                f"First operation must be a data source, got {first.op}"
            )

    def __len__(self) -> int:
        return len(self.operations)
