"""LLM review of generated commands."""

from __future__ import annotations

from openai import AsyncOpenAI
from pydantic import BaseModel, Field

from nlshell.config.settings import Settings
from nlshell.exceptions import CommandValidationError, ExtractionError
from nlshell.models.plan import ExecutionPlan
from nlshell.parser.prompt_templates import COMMAND_VALIDATION_PROMPT
from nlshell.parser.response import extract_json_object


class ValidationResult(BaseModel):
    is_valid: bool = True
    confidence: float = 1.0
    reason: str = "No reason given"
    suggestions: list[str] = Field(default_factory=list)

    def should_warn(self, threshold: float) -> bool:
        return not self.is_valid or self.confidence < threshold


class CommandValidator:
    def __init__(self, settings: Settings, client: AsyncOpenAI | None = None) -> None:
        self._settings = settings
        self._client = client or AsyncOpenAI(api_key=settings.openai_api_key)

    async def validate(
        self, query: str, plan: ExecutionPlan, intent_name: str
    ) -> ValidationResult:
        prompt = COMMAND_VALIDATION_PROMPT.format(
            query=query,
            command=plan.command,
            intent_name=intent_name,
            template_name=plan.template_name,
        )

        try:
            response = await self._client.chat.completions.create(
                model=self._settings.openai_model,
                messages=[{"role": "user", "content": prompt}],
                temperature=0.0,
            )
        except Exception as exc:
            raise CommandValidationError(f"OpenAI API error: {exc}") from exc

        raw = response.choices[0].message.content
        if raw is None:
            raise CommandValidationError("OpenAI returned empty content")

        return self.parse_response(raw)

    @staticmethod
    def parse_response(raw: str) -> ValidationResult:
        try:
            data = extract_json_object(raw)
        except ExtractionError as exc:
            raise CommandValidationError(str(exc)) from exc

        result = ValidationResult()
        is_valid = data.get("is_valid")
        confidence = data.get("confidence")
        reason = data.get("reason")
        suggestions = data.get("suggestions")

        return ValidationResult(
            is_valid=is_valid if isinstance(is_valid, bool) else result.is_valid,
            confidence=(
                float(confidence)
                if isinstance(confidence, (int, float)) and not isinstance(confidence, bool)
                else result.confidence
            ),
            reason=reason if isinstance(reason, str) else result.reason,
            suggestions=(
                [s for s in suggestions if isinstance(s, str)]
                if isinstance(suggestions, list)
                else []
            ),
        )
