"""Prompts — reusable templates served through ``prompts/get``.

Unlike tools, prompts have no application-level failure envelope: a handler
that raises is an unexpected fault and propagates out of the server.
"""

from __future__ import annotations

import inspect
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Literal, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mcpcore.content import TextContent, to_block
from mcpcore.errors import DefinitionError, InvalidParamsError
from mcpcore.utils.naming import handle_from_identifier, identifier_of


@runtime_checkable
class PromptHandler(Protocol):
    """Renders a prompt from its ``arguments`` and the server ``context``."""

    def __call__(
        self, arguments: dict[str, Any], context: Mapping[str, Any]
    ) -> PromptResult | Mapping[str, Any]: ...


class PromptArgument(BaseModel):
    """One named argument a prompt accepts."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    required: bool = False


class PromptMessage(BaseModel):
    """A single message of the rendered conversation fragment."""

    role: Literal["user", "assistant"]
    content: dict[str, Any]

    @field_validator("content", mode="before")
    @classmethod
    def _normalize_block(cls, value: Any) -> Any:
        if isinstance(value, (BaseModel, dict)):
            return to_block(value)
        return value

    @classmethod
    def user(cls, text: str) -> PromptMessage:
        return cls(role="user", content=TextContent(text=text))

    @classmethod
    def assistant(cls, text: str) -> PromptMessage:
        return cls(role="assistant", content=TextContent(text=text))


class PromptResult(BaseModel):
    """The ``prompts/get`` payload: a description plus ordered messages."""

    description: str = ""
    messages: list[PromptMessage] = []

    def to_result(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "messages": [message.model_dump() for message in self.messages],
        }


class Prompt(BaseModel):
    """A named prompt template bound to its handler."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    description: str = ""
    arguments: list[PromptArgument] = []
    handler: PromptHandler = Field(exclude=True, repr=False)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not value.strip():
            raise DefinitionError("prompt name must not be empty")
        return value

    @field_validator("arguments")
    @classmethod
    def _check_arguments(cls, value: list[PromptArgument]) -> list[PromptArgument]:
        seen: set[str] = set()
        for argument in value:
            if argument.name in seen:
                raise DefinitionError(f"Duplicate prompt argument: {argument.name}")
            seen.add(argument.name)
        return value

    @classmethod
    def define(
        cls,
        handler: PromptHandler,
        *,
        name: str | None = None,
        description: str | None = None,
        arguments: Iterable[PromptArgument | dict[str, Any]] = (),
    ) -> Prompt:
        """Build a prompt around a plain function or callable object."""
        return cls(
            name=name or handle_from_identifier(identifier_of(handler)),
            description=description if description is not None else inspect.getdoc(handler) or "",
            arguments=list(arguments),
            handler=handler,
        )

    def definition(self) -> dict[str, Any]:
        """The ``prompts/list`` entry for this prompt."""
        return {
            "name": self.name,
            "description": self.description,
            "arguments": [argument.model_dump() for argument in self.arguments],
        }

    def validate_arguments(self, arguments: Mapping[str, Any]) -> None:
        missing = [a.name for a in self.arguments if a.required and a.name not in arguments]
        if missing:
            raise InvalidParamsError(
                f"Missing required arguments: {', '.join(missing)}",
                data={"prompt": self.name, "missing": missing},
                error_type="missing_required_arguments",
            )

    def render(self, arguments: dict[str, Any], context: Mapping[str, Any]) -> PromptResult:
        """Invoke the handler.  Faults propagate to the caller unchanged."""
        result = self.handler(arguments, context)
        if isinstance(result, PromptResult):
            return result
        return PromptResult.model_validate(result)


def prompt(
    func: PromptHandler | None = None,
    /,
    *,
    name: str | None = None,
    description: str | None = None,
    arguments: Iterable[PromptArgument | dict[str, Any]] = (),
) -> Any:
    """Decorator form of :meth:`Prompt.define`; usable bare or with arguments."""

    def decorate(handler: PromptHandler) -> Prompt:
        return Prompt.define(handler, name=name, description=description, arguments=arguments)

    if func is not None:
        return decorate(func)
    return decorate


class PromptRegistry:
    """Ordered, read-only name-to-prompt map fixed at construction."""

    def __init__(self, prompts: Iterable[Prompt] = ()) -> None:
        self._prompts: dict[str, Prompt] = {}
        for item in prompts:
            if item.name in self._prompts:
                raise DefinitionError(f"Duplicate prompt name: {item.name}")
            self._prompts[item.name] = item

    def get(self, name: str) -> Prompt | None:
        return self._prompts.get(name)

    def names(self) -> list[str]:
        return list(self._prompts)

    def definitions(self) -> list[dict[str, Any]]:
        """``prompts/list`` entries in registration order."""
        return [item.definition() for item in self._prompts.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._prompts

    def __iter__(self) -> Iterator[Prompt]:
        return iter(self._prompts.values())

    def __len__(self) -> int:
        return len(self._prompts)
