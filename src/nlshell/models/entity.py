"""Entity models: typed values extracted from natural-language input.

``EntityType`` is a closed tagged union. Every variant carries a literal
``kind`` discriminator so that intent schemas, extraction results and
serialized forms all round-trip through the same set of classes.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _EntityBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    def as_binding(self) -> str:
        """Render the value the way it is substituted into a command."""
        return str(getattr(self, "value"))


class PathEntity(_EntityBase):
    kind: Literal["path"] = "path"
    value: str = ""


class FileTypeEntity(_EntityBase):
    kind: Literal["file_type"] = "file_type"
    value: str = ""


class OperationEntity(_EntityBase):
    kind: Literal["operation"] = "operation"
    value: str = ""


class NumberEntity(_EntityBase):
    kind: Literal["number"] = "number"
    value: float = 0.0

    def as_binding(self) -> str:
        if self.value.is_integer():
            return str(int(self.value))
        return repr(self.value)


class DateEntity(_EntityBase):
    kind: Literal["date"] = "date"
    value: str = ""


class CustomEntity(_EntityBase):
    kind: Literal["custom"] = "custom"
    type_name: str
    value: str = ""


EntityType = Annotated[
    Union[
        PathEntity,
        FileTypeEntity,
        OperationEntity,
        NumberEntity,
        DateEntity,
        CustomEntity,
    ],
    Field(discriminator="kind"),
]
