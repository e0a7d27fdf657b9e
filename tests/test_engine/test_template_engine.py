"""Brutal tests for the template engine."""

from __future__ import annotations

import pytest

from nlshell.engine.template_engine import TemplateEngine
from nlshell.exceptions import MissingVariableError, TemplateNotFoundError
from nlshell.models.entity import FileTypeEntity, NumberEntity, PathEntity
from nlshell.models.intent import Intent, IntentMatch
from nlshell.models.plan import Template

COUNT_FILES = Template(
    name="count_files",
    template="find {path} -name '*.{ext}' -type f | wc -l",
    variables=["path", "ext"],
)


@pytest.fixture
def engine():
    engine = TemplateEngine()
    engine.register(COUNT_FILES)
    return engine


class TestRegistry:
    def test_register_and_get(self, engine):
        assert engine.get("count_files") == COUNT_FILES
        assert engine.get("nope") is None
        assert len(engine) == 1
        assert engine.template_names() == ["count_files"]

    def test_register_replaces_same_name(self, engine):
        engine.register(Template(name="count_files", template="true"))
        assert len(engine) == 1
        assert engine.get("count_files").template == "true"

    def test_clear(self, engine):
        engine.clear()
        assert engine.is_empty


class TestGenerate:
    def test_count_files_exact(self, engine):
        plan = engine.generate("count_files", {"path": ".", "ext": "rs"})
        assert plan.command == "find . -name '*.rs' -type f | wc -l"
        assert plan.template_name == "count_files"
        assert plan.bindings == {"path": ".", "ext": "rs"}

    def test_unknown_template(self, engine):
        with pytest.raises(TemplateNotFoundError):
            engine.generate("nope", {})

    @pytest.mark.parametrize(
        "bindings, missing",
        [({}, "path"), ({"path": "."}, "ext"), ({"ext": "rs"}, "path")],
    )
    def test_missing_variable(self, engine, bindings, missing):
        with pytest.raises(MissingVariableError) as exc_info:
            engine.generate("count_files", bindings)
        assert exc_info.value.variable == missing
        assert exc_info.value.template_name == "count_files"

    def test_extra_bindings_are_fine(self, engine):
        plan = engine.generate("count_files", {"path": "src", "ext": "py", "unused": "x"})
        assert plan.command == "find src -name '*.py' -type f | wc -l"

    def test_empty_string_is_a_binding(self, engine):
        plan = engine.generate("count_files", {"path": "", "ext": ""})
        assert plan.command == "find  -name '*.' -type f | wc -l"

    def test_undeclared_placeholders_left_alone(self, engine):
        engine.register(
            Template(name="t", template="find {path} -exec ls {} + {other}", variables=["path"])
        )
        assert engine.generate("t", {"path": "."}).command == "find . -exec ls {} + {other}"


class TestGenerateFromIntent:
    def test_defaults_then_extracted(self, engine):
        intent = Intent(
            name="count_files",
            entities={"path": PathEntity(value="."), "ext": FileTypeEntity(value="*")},
        )
        match = IntentMatch(
            intent=intent,
            confidence=1.0,
            extracted_entities={"ext": FileTypeEntity(value="rs")},
        )
        plan = engine.generate_from_intent(match)
        assert plan.command == "find . -name '*.rs' -type f | wc -l"

    def test_number_bindings_render_as_integers(self, engine):
        engine.register(Template(name="top", template="head -n {limit}", variables=["limit"]))
        match = IntentMatch(
            intent=Intent(name="top", entities={"limit": NumberEntity(value=10)}),
            confidence=1.0,
        )
        assert engine.generate_from_intent(match).command == "head -n 10"

    def test_intent_without_template(self, engine):
        match = IntentMatch(intent=Intent(name="nope"), confidence=1.0)
        with pytest.raises(TemplateNotFoundError):
            engine.generate_from_intent(match)
