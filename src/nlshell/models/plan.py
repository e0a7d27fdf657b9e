"""Template and execution plan models."""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from nlshell.models.operations import Operation

_PLACEHOLDER_RE = re.compile(r"\{([^}]*)\}?")


class Template(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    template: str
    variables: list[str] = Field(default_factory=list)
    description: str = ""

    def with_description(self, description: str) -> Template:
        return self.model_copy(update={"description": description})

    def has_variable(self, name: str) -> bool:
        return name in self.variables

    def extract_placeholders(self) -> list[str]:
        return [name for name in _PLACEHOLDER_RE.findall(self.template) if name]


class ExecutionPlan(BaseModel):
    """A generated, ready-to-run command.

    ``template_name`` names the template or intent the command came from.
    ``operations`` is only populated for plans compiled by the pipeline bridge.
    """

    model_config = ConfigDict(frozen=True)

    command: str
    template_name: str
    bindings: dict[str, str] = Field(default_factory=dict)
    operations: tuple[Operation, ...] = ()

    def get_binding(self, name: str) -> Optional[str]:
        return self.bindings.get(name)
