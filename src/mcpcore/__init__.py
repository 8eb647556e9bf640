"""mcpcore — a Model Context Protocol JSON-RPC server core."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from mcpcore.config import Configuration as Configuration
    from mcpcore.config import configure as configure
    from mcpcore.config import set_protocol_version as set_protocol_version
    from mcpcore.content import TextContent as TextContent
    from mcpcore.prompts import Prompt as Prompt
    from mcpcore.prompts import PromptArgument as PromptArgument
    from mcpcore.prompts import PromptMessage as PromptMessage
    from mcpcore.prompts import PromptResult as PromptResult
    from mcpcore.prompts import prompt as prompt
    from mcpcore.server import Server as Server
    from mcpcore.tools import Tool as Tool
    from mcpcore.tools import ToolAnnotations as ToolAnnotations
    from mcpcore.tools import ToolResponse as ToolResponse
    from mcpcore.tools import tool as tool

_EXPORTS = {
    "Configuration": "mcpcore.config",
    "configure": "mcpcore.config",
    "set_protocol_version": "mcpcore.config",
    "TextContent": "mcpcore.content",
    "Prompt": "mcpcore.prompts",
    "PromptArgument": "mcpcore.prompts",
    "PromptMessage": "mcpcore.prompts",
    "PromptResult": "mcpcore.prompts",
    "prompt": "mcpcore.prompts",
    "Server": "mcpcore.server",
    "Tool": "mcpcore.tools",
    "ToolAnnotations": "mcpcore.tools",
    "ToolResponse": "mcpcore.tools",
    "tool": "mcpcore.tools",
}


def __getattr__(name: str) -> object:
    module_path = _EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'mcpcore' has no attribute {name!r}")
