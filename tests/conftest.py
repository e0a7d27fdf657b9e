"""Shared fixtures and mocks for all tests."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest
from loguru import logger

from nlshell.config.settings import Settings
from nlshell.engine.builtin import BuiltinIntents
from nlshell.models.entity import CustomEntity, FileTypeEntity, NumberEntity, PathEntity
from nlshell.models.intent import Intent, IntentDomain


@pytest.fixture
def mock_settings(monkeypatch):
    monkeypatch.setenv("NLSHELL_OPENAI_API_KEY", "sk-test-key-fake")
    monkeypatch.setenv("NLSHELL_OPENAI_MODEL", "gpt-4o")
    monkeypatch.setenv("NLSHELL_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("NLSHELL_LLM_EXTRACTION", "true")
    return Settings()


@pytest.fixture
def offline_settings(monkeypatch):
    monkeypatch.delenv("NLSHELL_OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("NLSHELL_LLM_EXTRACTION", raising=False)
    return Settings()


@pytest.fixture
def builtins():
    return BuiltinIntents()


@pytest.fixture
def builtin_matcher(builtins):
    return builtins.create_matcher()


@pytest.fixture
def builtin_engine(builtins):
    return builtins.create_engine()


@pytest.fixture
def size_intent():
    return Intent(
        name="find_files_by_size",
        domain=IntentDomain.FILE_OPS,
        keywords=["查找", "大文件"],
        entities={
            "path": PathEntity(value="."),
            "ext": FileTypeEntity(value="*"),
            "limit": NumberEntity(value=10),
            "sort_order": CustomEntity(type_name="sort", value="-hr"),
        },
        confidence_threshold=0.5,
    )


@pytest.fixture
def log_messages():
    """Collect loguru output emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(str(m)), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def mock_openai_response():
    """Create a mock OpenAI chat completion response."""
    def _make(data):
        message = MagicMock()
        message.content = data if isinstance(data, str) or data is None else json.dumps(data)
        choice = MagicMock()
        choice.message = message
        response = MagicMock()
        response.choices = [choice]
        return response
    return _make
