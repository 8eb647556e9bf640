"""Identifier normalization for Tool and Prompt names."""

from __future__ import annotations

import re

from mcpcore.errors import DefinitionError

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_SEPARATORS = re.compile(r"[\s\-]+")


def handle_from_identifier(identifier: str) -> str:
    """Convert a function or class identifier into a snake_case handle.

    ``SummarizeText`` → ``summarize_text``, ``HTTPFetch`` → ``http_fetch``,
    ``echo_tool`` is returned unchanged.  A dotted path keeps its last segment.
    """
    name = identifier.rsplit(".", 1)[-1]
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return _SEPARATORS.sub("_", name).strip("_").lower()


def identifier_of(obj: object) -> str:
    """Return the defining identifier of a function, class, or callable instance.

    Raises:
        DefinitionError: *obj* is anonymous (a lambda), so no name can be derived.
    """
    name = getattr(obj, "__name__", None)
    if name is None:
        return type(obj).__name__
    if not isinstance(name, str) or not name.isidentifier():
        raise DefinitionError("name is required for anonymous handlers")
    return name
