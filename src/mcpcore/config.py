"""Server configuration — reporter and instrumentation hooks, protocol version.

The primary path is explicit injection::

    server = Server("demo", tools=[...], configuration=Configuration(
        exception_reporter=sentry_report,
        instrumentation_callback=statsd_emit,
    ))

:func:`configure` sets a process-wide default that servers built without a
``configuration`` pick up at construction time.  Likewise
:func:`set_protocol_version` pins the protocol version for servers built
afterwards; each server captures the value once and never re-reads it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DEFAULT_PROTOCOL_VERSION = "2024-11-05"


@runtime_checkable
class ExceptionReporter(Protocol):
    """Receives unexpected faults together with a small context mapping."""

    def __call__(self, fault: BaseException, context: dict[str, Any]) -> None: ...


@runtime_checkable
class InstrumentationCallback(Protocol):
    """Receives one event mapping per handled request."""

    def __call__(self, event: dict[str, Any]) -> None: ...


def _noop_reporter(fault: BaseException, context: dict[str, Any]) -> None:
    return None


def _noop_callback(event: dict[str, Any]) -> None:
    return None


class Configuration(BaseModel):
    """Hooks and switches for one :class:`~mcpcore.server.Server`."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    exception_reporter: ExceptionReporter = _noop_reporter
    instrumentation_callback: InstrumentationCallback = _noop_callback
    validate_tool_call_arguments: bool = True

    def merge(self, other: Configuration | None) -> Configuration:
        """Return a copy overridden by the fields *other* set explicitly."""
        if other is None:
            return self
        return self.model_copy(update={key: getattr(other, key) for key in other.model_fields_set})

    def report_exception(self, fault: BaseException, context: Mapping[str, Any]) -> None:
        """Call the reporter; a failing reporter is logged, never raised."""
        try:
            self.exception_reporter(fault, dict(context))
        except Exception:
            logger.exception("Exception reporter failed while reporting %r", fault)

    def instrument(self, event: dict[str, Any]) -> None:
        """Call the instrumentation hook; a failing hook is logged, never raised."""
        try:
            self.instrumentation_callback(event)
        except Exception:
            logger.exception("Instrumentation callback failed for method %s", event.get("method"))


# ---------------------------------------------------------------------------
# Process-wide defaults
# ---------------------------------------------------------------------------

_default_configuration = Configuration()
_protocol_version_override: str | None = None


def configure(**fields: Any) -> Configuration:
    """Replace the process-wide default configuration and return it."""
    global _default_configuration
    _default_configuration = Configuration(**fields)
    return _default_configuration


def get_default_configuration() -> Configuration:
    return _default_configuration


def reset_configuration() -> None:
    """Restore the no-op default configuration."""
    global _default_configuration
    _default_configuration = Configuration()


def set_protocol_version(version: str | None) -> None:
    """Override the protocol version for servers built from now on.

    ``None`` or an empty string clears the override.
    """
    global _protocol_version_override
    _protocol_version_override = version or None


def get_protocol_version() -> str:
    """The protocol version new servers will capture."""
    return _protocol_version_override or DEFAULT_PROTOCOL_VERSION
