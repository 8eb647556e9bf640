"""Tools — schema-described capabilities a client invokes through ``tools/call``.

A :class:`Tool` pairs MCP metadata with a handler satisfying
:class:`ToolHandler`.  Handlers are plain callables; build tools either by
constructing :class:`Tool` directly, with :meth:`Tool.define`, or with the
:func:`tool` decorator::

    @tool(input_schema={"type": "object", "properties": {"text": {"type": "string"}}})
    def echo(arguments, context):
        return [TextContent(text=arguments["text"])]

    registry = ToolRegistry([echo])
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError, best_match
from jsonschema.validators import validator_for
from pydantic import BaseModel, ConfigDict, Field, field_validator

from mcpcore.content import ContentBlock, TextContent, to_block
from mcpcore.errors import DefinitionError, InvalidParamsError
from mcpcore.utils.naming import handle_from_identifier, identifier_of

logger = logging.getLogger(__name__)


@runtime_checkable
class ToolHandler(Protocol):
    """Executes a tool call.

    Receives the call's ``arguments`` and the server's opaque ``context`` and
    returns a :class:`ToolResponse`, a string, one content block, or a
    sequence of content blocks.  Handlers may be invoked concurrently when
    the server is shared between threads.
    """

    def __call__(
        self, arguments: dict[str, Any], context: Mapping[str, Any]
    ) -> ToolResponse | ContentBlock | Sequence[ContentBlock] | str: ...


# ---------------------------------------------------------------------------
# Metadata and results
# ---------------------------------------------------------------------------


class ToolAnnotations(BaseModel):
    """Descriptive hints about a tool's behaviour.  Never enforced."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str | None = None
    read_only_hint: bool | None = Field(default=None, alias="readOnlyHint")
    destructive_hint: bool | None = Field(default=None, alias="destructiveHint")
    idempotent_hint: bool | None = Field(default=None, alias="idempotentHint")
    open_world_hint: bool | None = Field(default=None, alias="openWorldHint")


class ToolResponse(BaseModel):
    """Ordered content blocks produced by one tool call."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[dict[str, Any]] = Field(default_factory=lambda: list[dict[str, Any]]())
    is_error: bool = Field(default=False, alias="isError")

    @field_validator("content", mode="before")
    @classmethod
    def _normalize_blocks(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [to_block(part) for part in value]
        return value

    @classmethod
    def from_text(cls, text: str, *, is_error: bool = False) -> ToolResponse:
        """Create a response with a single text block."""
        return cls(content=[TextContent(text=text)], is_error=is_error)

    @classmethod
    def coerce(cls, value: Any) -> ToolResponse:
        """Accept whatever a handler returned and turn it into a response."""
        if isinstance(value, ToolResponse):
            return value
        if isinstance(value, str):
            return cls.from_text(value)
        if isinstance(value, (list, tuple)):
            return cls(content=list(value))
        if isinstance(value, (dict, BaseModel)):
            return cls(content=[value])
        msg = f"tool handler must return a ToolResponse or content blocks, got {type(value).__name__}"
        raise TypeError(msg)

    def to_result(self) -> dict[str, Any]:
        return {"content": list(self.content), "isError": self.is_error}


@dataclass(frozen=True)
class ToolOk:
    """The handler completed normally."""

    response: ToolResponse


@dataclass(frozen=True)
class ToolFailed:
    """The handler raised; the fault is reported and converted, never re-raised."""

    fault: Exception


ToolOutcome = ToolOk | ToolFailed


# ---------------------------------------------------------------------------
# Tool
# ---------------------------------------------------------------------------


def _empty_object_schema() -> dict[str, Any]:
    return {"type": "object", "properties": {}}


class Tool(BaseModel):
    """A named, schema-described tool bound to its handler."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, arbitrary_types_allowed=True)

    name: str
    title: str | None = None
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=_empty_object_schema, alias="inputSchema")
    annotations: ToolAnnotations | None = None
    handler: ToolHandler = Field(exclude=True, repr=False)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not value.strip():
            raise DefinitionError("tool name must not be empty")
        return value

    @field_validator("input_schema")
    @classmethod
    def _check_schema(cls, schema: dict[str, Any]) -> dict[str, Any]:
        if schema.get("type") != "object":
            raise DefinitionError("tool input schema must have type 'object'")
        try:
            validator_for(schema, default=Draft202012Validator).check_schema(schema)
        except SchemaError as exc:
            raise DefinitionError(f"invalid tool input schema: {exc.message}") from exc
        declared = schema.get("properties", {})
        undeclared = [name for name in schema.get("required", []) if name not in declared]
        if undeclared:
            raise DefinitionError(
                f"required arguments missing from properties: {', '.join(undeclared)}"
            )
        return schema

    @classmethod
    def define(
        cls,
        handler: ToolHandler,
        *,
        name: str | None = None,
        title: str | None = None,
        description: str | None = None,
        input_schema: dict[str, Any] | None = None,
        annotations: ToolAnnotations | dict[str, Any] | None = None,
    ) -> Tool:
        """Build a tool around a plain function or callable object.

        ``name`` defaults to the snake_case form of the handler's identifier
        and ``description`` to its docstring.
        """
        fields: dict[str, Any] = {
            "name": name or handle_from_identifier(identifier_of(handler)),
            "title": title,
            "description": description if description is not None else inspect.getdoc(handler) or "",
            "annotations": annotations,
            "handler": handler,
        }
        if input_schema is not None:
            fields["input_schema"] = input_schema
        return cls(**fields)

    def definition(self) -> dict[str, Any]:
        """The ``tools/list`` entry for this tool."""
        data: dict[str, Any] = {"name": self.name}
        if self.title is not None:
            data["title"] = self.title
        data["description"] = self.description
        data["inputSchema"] = self.input_schema
        if self.annotations is not None:
            hints = self.annotations.model_dump(by_alias=True, exclude_none=True)
            if hints:
                data["annotations"] = hints
        return data

    def validate_arguments(self, arguments: Mapping[str, Any]) -> None:
        """Check *arguments* against the input schema.

        Raises:
            InvalidParamsError: tagged ``missing_required_arguments`` or
                ``invalid_schema``.
        """
        missing = [name for name in self.input_schema.get("required", []) if name not in arguments]
        if missing:
            raise InvalidParamsError(
                f"Missing required arguments: {', '.join(missing)}",
                data={"tool": self.name, "missing": missing},
                error_type="missing_required_arguments",
            )
        validator = validator_for(self.input_schema, default=Draft202012Validator)(self.input_schema)
        error = best_match(validator.iter_errors(dict(arguments)))
        if error is not None:
            raise InvalidParamsError(
                f"Invalid arguments for tool {self.name}: {error.message}",
                data={"tool": self.name, "path": [str(p) for p in error.absolute_path]},
                error_type="invalid_schema",
            )

    def invoke(self, arguments: dict[str, Any], context: Mapping[str, Any]) -> ToolOutcome:
        """Run the handler inside the guarded region."""
        try:
            return ToolOk(ToolResponse.coerce(self.handler(arguments, context)))
        except Exception as exc:
            logger.warning("Tool %s raised %s: %s", self.name, type(exc).__name__, exc)
            return ToolFailed(exc)


def tool(
    func: ToolHandler | None = None,
    /,
    *,
    name: str | None = None,
    title: str | None = None,
    description: str | None = None,
    input_schema: dict[str, Any] | None = None,
    annotations: ToolAnnotations | dict[str, Any] | None = None,
) -> Any:
    """Decorator form of :meth:`Tool.define`; usable bare or with arguments."""

    def decorate(handler: ToolHandler) -> Tool:
        return Tool.define(
            handler,
            name=name,
            title=title,
            description=description,
            input_schema=input_schema,
            annotations=annotations,
        )

    if func is not None:
        return decorate(func)
    return decorate


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class ToolRegistry:
    """Ordered, read-only name-to-tool map fixed at construction."""

    def __init__(self, tools: Iterable[Tool] = ()) -> None:
        self._tools: dict[str, Tool] = {}
        for item in tools:
            if item.name in self._tools:
                raise DefinitionError(f"Duplicate tool name: {item.name}")
            self._tools[item.name] = item

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def definitions(self) -> list[dict[str, Any]]:
        """``tools/list`` entries in registration order."""
        return [item.definition() for item in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)
