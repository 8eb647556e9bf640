"""Tests for Prompt definitions, rendering, and the registry."""

from typing import Any

import pytest

from mcpcore.content import TextContent
from mcpcore.errors import DefinitionError, InvalidParamsError
from mcpcore.prompts import (
    Prompt,
    PromptArgument,
    PromptMessage,
    PromptRegistry,
    PromptResult,
    prompt,
)


def _static(arguments: dict[str, Any], context: Any) -> PromptResult:
    return PromptResult(description="static", messages=[PromptMessage.assistant("Hi")])


class TestPromptDefinition:
    def test_definition_shape(self, greeting_prompt: Prompt) -> None:
        assert greeting_prompt.definition() == {
            "name": "greeting",
            "description": "Greet someone",
            "arguments": [{"name": "name", "description": "Who to greet", "required": True}],
        }

    def test_duplicate_argument_names_rejected(self) -> None:
        with pytest.raises(DefinitionError, match="Duplicate prompt argument"):
            Prompt(
                name="p",
                arguments=[PromptArgument(name="a"), PromptArgument(name="a")],
                handler=_static,
            )

    def test_define_normalizes_class_name(self) -> None:
        class SummarizeText:
            """Summarize a block of text."""

            def __call__(self, arguments: dict[str, Any], context: Any) -> PromptResult:
                return PromptResult()

        p = Prompt.define(SummarizeText(), arguments=[{"name": "text", "required": True}])
        assert p.name == "summarize_text"
        assert p.description == "Summarize a block of text."
        assert p.arguments[0] == PromptArgument(name="text", required=True)

    def test_decorator(self) -> None:
        @prompt(description="Code review")
        def CodeReview(arguments: dict[str, Any], context: Any) -> PromptResult:  # noqa: N802
            return PromptResult()

        assert isinstance(CodeReview, Prompt)
        assert CodeReview.name == "code_review"
        assert CodeReview.description == "Code review"

    def test_define_rejects_anonymous_handler(self) -> None:
        with pytest.raises(DefinitionError, match="name is required"):
            Prompt.define(lambda arguments, context: PromptResult())

    def test_explicit_name_wins(self) -> None:
        p = Prompt.define(_static, name="custom")
        assert p.name == "custom"


class TestPromptMessages:
    def test_user_and_assistant_helpers(self) -> None:
        assert PromptMessage.user("q").model_dump() == {
            "role": "user",
            "content": {"type": "text", "text": "q"},
        }
        assert PromptMessage.assistant("a").role == "assistant"

    def test_content_model_is_normalized(self) -> None:
        msg = PromptMessage(role="user", content=TextContent(text="x"))
        assert msg.content == {"type": "text", "text": "x"}


class TestPromptRendering:
    def test_render_passes_arguments_and_context(self) -> None:
        seen: dict[str, Any] = {}

        def handler(arguments: dict[str, Any], context: Any) -> PromptResult:
            seen["context"] = context
            return PromptResult(messages=[PromptMessage.user(arguments["topic"])])

        context = {"tenant": "t1"}
        result = Prompt(name="p", handler=handler).render({"topic": "rust"}, context)
        assert seen["context"] is context
        assert result.to_result() == {
            "description": "",
            "messages": [{"role": "user", "content": {"type": "text", "text": "rust"}}],
        }

    def test_render_accepts_mapping(self) -> None:
        def handler(arguments: dict[str, Any], context: Any) -> dict[str, Any]:
            return {
                "description": "d",
                "messages": [{"role": "assistant", "content": {"type": "text", "text": "t"}}],
            }

        result = Prompt(name="p", handler=handler).render({}, {})
        assert result.description == "d"
        assert result.messages[0].role == "assistant"

    def test_render_propagates_faults(self, failing_prompt: Prompt) -> None:
        with pytest.raises(ValueError, match="template exploded"):
            failing_prompt.render({}, {})

    def test_missing_required_arguments(self, greeting_prompt: Prompt) -> None:
        with pytest.raises(InvalidParamsError) as exc_info:
            greeting_prompt.validate_arguments({})
        assert exc_info.value.error_type == "missing_required_arguments"

    def test_optional_arguments_may_be_omitted(self) -> None:
        p = Prompt(name="p", arguments=[PromptArgument(name="tone")], handler=_static)
        p.validate_arguments({})


class TestPromptRegistry:
    def test_preserves_registration_order(self) -> None:
        registry = PromptRegistry(Prompt(name=n, handler=_static) for n in ["b", "a"])
        assert [d["name"] for d in registry.definitions()] == ["b", "a"]

    def test_duplicate_names_rejected(self) -> None:
        with pytest.raises(DefinitionError, match="Duplicate prompt name"):
            PromptRegistry([Prompt(name="x", handler=_static), Prompt(name="x", handler=_static)])

    def test_lookup(self, greeting_prompt: Prompt) -> None:
        registry = PromptRegistry([greeting_prompt])
        assert registry.get("greeting") is greeting_prompt
        assert registry.get("nope") is None
        assert "greeting" in registry
        assert list(registry) == [greeting_prompt]
