"""Fixtures for CLI tests: an importable module that defines a server."""

from __future__ import annotations

import sys
import textwrap
from collections.abc import Iterator
from pathlib import Path

import pytest

SAMPLE_MODULE = "mcpcore_sample_app"

SAMPLE_SOURCE = textwrap.dedent(
    '''
    from mcpcore import PromptMessage, PromptResult, Server, TextContent, prompt, tool


    @tool(
        description="Add two integers",
        input_schema={
            "type": "object",
            "properties": {"a": {"type": "integer"}, "b": {"type": "integer"}},
            "required": ["a", "b"],
        },
    )
    def add(arguments, context):
        return [TextContent(text=str(arguments["a"] + arguments["b"]))]


    @prompt(description="Ask for a haiku", arguments=[{"name": "topic", "required": True}])
    def haiku(arguments, context):
        return PromptResult(messages=[PromptMessage.user("Write a haiku about " + arguments["topic"])])


    server = Server("sample", version="1.2.3", tools=[add], prompts=[haiku])


    def build():
        return Server("built", tools=[add])


    not_a_server = 42
    '''
)


@pytest.fixture
def sample_app(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    (tmp_path / f"{SAMPLE_MODULE}.py").write_text(SAMPLE_SOURCE)
    monkeypatch.syspath_prepend(str(tmp_path))
    yield SAMPLE_MODULE
    sys.modules.pop(SAMPLE_MODULE, None)
