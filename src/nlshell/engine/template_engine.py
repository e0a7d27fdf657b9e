"""Template registry and literal ``{var}`` substitution."""

from __future__ import annotations

from collections.abc import Mapping

from nlshell.exceptions import MissingVariableError, TemplateNotFoundError
from nlshell.models.intent import IntentMatch
from nlshell.models.plan import ExecutionPlan, Template


class TemplateEngine:
    def __init__(self) -> None:
        self._templates: dict[str, Template] = {}

    def register(self, template: Template) -> None:
        self._templates[template.name] = template

    def get(self, name: str) -> Template | None:
        return self._templates.get(name)

    def generate(self, name: str, bindings: Mapping[str, str]) -> ExecutionPlan:
        template = self._templates.get(name)
        if template is None:
            raise TemplateNotFoundError(name)

        for var in template.variables:
            if var not in bindings:
                raise MissingVariableError(var, template_name=name)

        return ExecutionPlan(
            command=self.substitute(template.template, bindings),
            template_name=name,
            bindings=dict(bindings),
        )

    def generate_from_intent(self, match: IntentMatch) -> ExecutionPlan:
        # Declared defaults first, then extracted values on top.
        bindings = {name: e.as_binding() for name, e in match.intent.entities.items()}
        bindings.update(
            {name: e.as_binding() for name, e in match.extracted_entities.items()}
        )
        return self.generate(match.intent.name, bindings)

    @staticmethod
    def substitute(template: str, bindings: Mapping[str, str]) -> str:
        result = template
        for var, value in bindings.items():
            result = result.replace(f"{{{var}}}", value)
        return result

    def __len__(self) -> int:
        return len(self._templates)

    @property
    def is_empty(self) -> bool:
        return not self._templates

    def clear(self) -> None:
        self._templates.clear()

    def template_names(self) -> list[str]:
        return list(self._templates)
