"""Brutal tests for the planner orchestration."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from nlshell.engine.pipeline_bridge import PipelineBridge
from nlshell.models.entity import FileTypeEntity, PathEntity
from nlshell.planner import Planner, PlanResult, PlanSource


@pytest.fixture
def planner(builtin_matcher, builtin_engine):
    return Planner(builtin_matcher, builtin_engine, PipelineBridge())


class TestPlan:
    def test_pipeline_source(self, planner):
        result = planner.plan("查找大文件")
        assert result.source == PlanSource.PIPELINE
        assert result.match.intent.name == "find_files_by_size"
        assert result.plan.command == (
            "find . -name '*' -type f -exec ls -lh {} + | sort -k5 -hr | head -n 10"
        )
        assert result.has_plan

    def test_ascending_request(self, planner):
        result = planner.plan("show the 5 smallest py files in ./src")
        assert result.plan.command == (
            "find ./src -name '*.py' -type f -exec ls -lh {} + | sort -k5 -h | head -n 5"
        )

    def test_template_source(self, planner):
        result = planner.plan("统计 rs 文件数量")
        assert result.source == PlanSource.TEMPLATE
        assert result.plan.command == "find . -name '*.rs' -type f | wc -l"
        assert result.entities == {"ext": FileTypeEntity(value="rs")}

    def test_template_fallback_when_pipeline_disabled(self, builtin_matcher, builtin_engine):
        planner = Planner(builtin_matcher, builtin_engine, PipelineBridge(enabled=False))
        result = planner.plan("查找大文件")
        assert result.source == PlanSource.TEMPLATE
        assert result.plan.command == (
            "find . -name '*.*' -type f -exec ls -lh {} + | sort -k5 -hr | head -n 10"
        )

    def test_no_match(self, planner):
        result = planner.plan("这是一个随机的句子")
        assert result == PlanResult(query="这是一个随机的句子", reason="No intent matched")
        assert result.source == PlanSource.NONE
        assert not result.has_plan

    def test_overflowing_count_falls_back_to_default_limit(self, planner):
        result = planner.plan("查找最大的 " + "9" * 400 + " 个文件")
        assert result.source == PlanSource.PIPELINE
        assert result.plan.command.endswith("| head -n 10")

    def test_missing_template_variable(self, planner, log_messages):
        result = planner.plan("ls")
        assert result.source == PlanSource.TEMPLATE

        result = planner.plan("查找文件名字为 main 的文件")
        assert result.match.intent.name == "find_files_by_name"
        assert result.source == PlanSource.NONE
        assert result.plan is None
        assert "name" in result.reason
        assert any("find_files_by_name" in m for m in log_messages)


class TestAplan:
    @pytest.mark.asyncio
    async def test_without_llm_matches_sync(self, planner):
        assert await planner.aplan("查找大文件") == planner.plan("查找大文件")

    @pytest.mark.asyncio
    async def test_llm_fills_missing_entities(self, builtin_matcher, builtin_engine):
        llm = MagicMock()
        llm.extract = AsyncMock(
            return_value={"path": PathEntity(value="/var/log"), "ext": FileTypeEntity(value="rs")}
        )
        planner = Planner(builtin_matcher, builtin_engine, PipelineBridge(), llm_extractor=llm)

        result = await planner.aplan("统计 rs 文件数量")
        assert result.plan.command == "find /var/log -name '*.rs' -type f | wc -l"
        assert result.match.extracted_entities["path"] == PathEntity(value="/var/log")
        llm.extract.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_llm_not_called_when_nothing_missing(self, builtin_matcher, builtin_engine):
        llm = MagicMock()
        llm.extract = AsyncMock(return_value={})
        planner = Planner(builtin_matcher, builtin_engine, PipelineBridge(), llm_extractor=llm)

        result = await planner.aplan("list directory ./src")
        assert result.plan.command == "ls -lh ./src"
        llm.extract.assert_not_awaited()

        await planner.aplan("ls")
        llm.extract.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_match(self, planner):
        result = await planner.aplan("这是一个随机的句子")
        assert result.source == PlanSource.NONE
