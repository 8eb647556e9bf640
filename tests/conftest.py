"""Shared fixtures: sample tools, prompts, and a fully hooked server."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any
from unittest.mock import MagicMock

import pytest

from mcpcore.config import Configuration, reset_configuration, set_protocol_version
from mcpcore.content import TextContent
from mcpcore.prompts import Prompt, PromptArgument, PromptMessage, PromptResult
from mcpcore.server import Server
from mcpcore.tools import Tool, ToolAnnotations


@pytest.fixture(autouse=True)
def _reset_process_defaults() -> Iterator[None]:
    yield
    set_protocol_version(None)
    reset_configuration()


def _echo(arguments: dict[str, Any], context: Any) -> list[TextContent]:
    return [TextContent(text=arguments["text"])]


def _explode(arguments: dict[str, Any], context: Any) -> list[TextContent]:
    raise RuntimeError("boom")


def _greet(arguments: dict[str, Any], context: Any) -> PromptResult:
    return PromptResult(
        description="A greeting",
        messages=[PromptMessage.user(f"Say hello to {arguments['name']}")],
    )


def _broken_prompt(arguments: dict[str, Any], context: Any) -> PromptResult:
    raise ValueError("template exploded")


@pytest.fixture
def echo_tool() -> Tool:
    return Tool(
        name="echo",
        description="Echo text back",
        input_schema={
            "type": "object",
            "properties": {"text": {"type": "string"}},
            "required": ["text"],
        },
        annotations=ToolAnnotations(read_only_hint=True),
        handler=_echo,
    )


@pytest.fixture
def failing_tool() -> Tool:
    return Tool(name="explode", description="Always fails", handler=_explode)


@pytest.fixture
def greeting_prompt() -> Prompt:
    return Prompt(
        name="greeting",
        description="Greet someone",
        arguments=[PromptArgument(name="name", description="Who to greet", required=True)],
        handler=_greet,
    )


@pytest.fixture
def failing_prompt() -> Prompt:
    return Prompt(name="broken", description="Always fails", handler=_broken_prompt)


@pytest.fixture
def reporter() -> MagicMock:
    return MagicMock(return_value=None)


@pytest.fixture
def callback() -> MagicMock:
    return MagicMock(return_value=None)


@pytest.fixture
def server(
    echo_tool: Tool,
    failing_tool: Tool,
    greeting_prompt: Prompt,
    failing_prompt: Prompt,
    reporter: MagicMock,
    callback: MagicMock,
) -> Server:
    return Server(
        "test-server",
        protocol_version="2024-11-05",
        tools=[echo_tool, failing_tool],
        prompts=[greeting_prompt, failing_prompt],
        context={"user_id": 42},
        configuration=Configuration(
            exception_reporter=reporter,
            instrumentation_callback=callback,
        ),
    )
