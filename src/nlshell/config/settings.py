"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "NLSHELL_"}

    openai_api_key: str = Field(
        default="", description="OpenAI API key (LLM features are off without it)"
    )
    openai_model: str = Field(default="gpt-4o", description="OpenAI model name")
    log_level: str = Field(default="INFO", description="Logging level")
    cache_capacity: int = Field(
        default=100, ge=1, description="Intent matcher query cache capacity"
    )
    fuzzy_enabled: bool = Field(default=False, description="Enable fuzzy keyword matching")
    fuzzy_similarity_threshold: float = Field(
        default=0.8, ge=0.0, le=1.0, description="Minimum similarity for a fuzzy keyword hit"
    )
    fuzzy_weight: float = Field(
        default=0.7, ge=0.0, le=1.0, description="Score weight applied to fuzzy keyword hits"
    )
    use_pipeline: bool = Field(
        default=True, description="Prefer the operation pipeline over templates"
    )
    llm_extraction: bool = Field(
        default=False, description="Fill missing entities with the LLM"
    )
    validation_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Warn when LLM command validation confidence falls below this",
    )

    @property
    def llm_available(self) -> bool:
        return bool(self.openai_api_key)
