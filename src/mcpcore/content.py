"""Content blocks — the building blocks of tool results and prompt messages.

Handlers may return these models or plain ``{"type": ...}`` dicts; both are
normalized to dicts by :func:`to_block` before they reach the wire.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class TextContent(BaseModel):
    """Plain text content block."""

    type: Literal["text"] = "text"
    text: str


class ImageContent(BaseModel):
    """Inline base64 image content block."""

    model_config = {"populate_by_name": True}

    type: Literal["image"] = "image"
    data: str
    mime_type: str = Field(alias="mimeType")


class AudioContent(BaseModel):
    """Inline base64 audio content block."""

    model_config = {"populate_by_name": True}

    type: Literal["audio"] = "audio"
    data: str
    mime_type: str = Field(alias="mimeType")


ContentBlock = TextContent | ImageContent | AudioContent | dict[str, Any]


def to_block(part: ContentBlock) -> dict[str, Any]:
    """Return the wire form of a content block."""
    if isinstance(part, BaseModel):
        return part.model_dump(by_alias=True)
    if isinstance(part, dict) and "type" in part:
        return dict(part)
    msg = f"content block must be a content model or a dict with a 'type' key, got {part!r}"
    raise TypeError(msg)
