"""Custom exception hierarchy for nlshell."""

from __future__ import annotations


class NlshellError(Exception):
    """Base exception for all nlshell errors."""


class TemplateError(NlshellError):
    """Base for errors raised while generating a command from a template."""


class TemplateNotFoundError(TemplateError):
    """Raised when no template is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Template not found: {name}")
        self.name = name


class MissingVariableError(TemplateError):
    """Raised when a required template variable has no binding."""

    def __init__(self, variable: str, template_name: str = "") -> None:
        super().__init__(f"Missing required variable: {variable}")
        self.variable = variable
        self.template_name = template_name


class ExtractionError(NlshellError):
    """Raised when an LLM extraction response cannot be parsed."""


class CommandValidationError(NlshellError):
    """Raised when the LLM command validation round-trip fails."""


class PlanValidationError(NlshellError):
    """Raised when an operation pipeline is structurally invalid."""
