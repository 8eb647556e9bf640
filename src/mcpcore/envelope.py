"""ExecutionEnvelope — times, traces, and guards every routed request.

Same wrapper pattern as the router it wraps: the envelope owns no protocol
logic, it only decides what happens around a handler call.

1. **Timing** — ``time.perf_counter()`` around the handler.
2. **Instrumentation** — one :class:`InstrumentationEvent` per request,
   delivered to the configured callback and mirrored onto an OpenTelemetry
   span.
3. **Fault reporting** — RPC-level faults pass through untouched; any other
   fault is reported with the original request and re-raised.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from opentelemetry.trace import Status, StatusCode
from pydantic import BaseModel

from mcpcore.errors import RpcFault
from mcpcore.utils.telemetry import ATTR_REQUEST_ID, event_attributes, get_tracer

if TYPE_CHECKING:
    from mcpcore.config import Configuration
    from mcpcore.messages import JsonRpcRequest
    from mcpcore.router import MethodRouter

logger = logging.getLogger(__name__)

_tracer = get_tracer(__name__)


class InstrumentationEvent(BaseModel):
    """Per-request instrumentation record, filled in as the request runs.

    Optional fields stay unset unless a matching handler ran, which keeps
    metric cardinality bounded when clients send arbitrary names.
    """

    method: str | None = None
    tool_name: str | None = None
    prompt_name: str | None = None
    resource_uri: str | None = None
    error: str | None = None
    duration: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ExecutionEnvelope:
    """Wraps a :class:`MethodRouter` with timing, tracing, and fault reporting."""

    def __init__(self, router: MethodRouter, configuration: Configuration) -> None:
        self._router = router
        self._configuration = configuration

    def run(self, request: JsonRpcRequest) -> dict[str, Any]:
        """Route *request* and return its ``result`` payload.

        Raises:
            RpcFault: the request is answered with a JSON-RPC error.
            Exception: any unexpected fault, after it has been reported.
        """
        event = InstrumentationEvent()
        started = time.perf_counter()
        with _tracer.start_as_current_span(
            "mcp.request", record_exception=False, set_status_on_exception=False
        ) as span:
            if not request.is_notification and request.id is not None:
                span.set_attribute(ATTR_REQUEST_ID, str(request.id))
            try:
                return self._router.dispatch(request, event)
            except RpcFault as fault:
                if event.error is None:
                    event.error = fault.error_type
                logger.debug("RPC fault for %s: %s", request.method, fault.message)
                raise
            except Exception as exc:
                event.error = "internal_error"
                span.record_exception(exc)
                span.set_status(Status(StatusCode.ERROR, type(exc).__name__))
                self._configuration.report_exception(exc, {"request": request.to_dict()})
                raise
            finally:
                event.duration = max(0.0, time.perf_counter() - started)
                payload = event.to_dict()
                span.set_attributes(event_attributes(payload))
                self._configuration.instrument(payload)
