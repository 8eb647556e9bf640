"""StdioTransport — serves a :class:`~mcpcore.server.Server` over stdin/stdout.

Reads newline-delimited JSON, one message per line, and writes one line per
response.  stdout carries nothing but protocol messages; logs go to stderr.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

from mcpcore.errors import INTERNAL_ERROR
from mcpcore.messages import JsonRpcError, error_response, serialize_response

if TYPE_CHECKING:
    from mcpcore.server import Server

logger = logging.getLogger(__name__)


class StdioTransport:
    """Line-oriented stdio loop around a server.

    A fault that propagates out of the server (a failing prompt handler, a bug)
    fails only the request that raised it: it is logged, answered with a
    ``-32603 Internal error`` response when the request carried an id, and the
    loop moves on to the next line.
    """

    def __init__(
        self,
        server: Server,
        *,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._server = server
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout

    def serve_forever(self) -> None:
        """Process lines until EOF or until stdout goes away."""
        logger.info("Serving %s over stdio", self._server.name)
        for line in self._stdin:
            line = line.strip()
            if not line:
                continue
            reply = self.handle_line(line)
            if reply is not None and not self._write(reply):
                break
        logger.info("stdio transport closed")

    def handle_line(self, line: str) -> str | None:
        """Handle a single line and return the reply line, if any."""
        try:
            return self._server.handle_json(line)
        except Exception:
            logger.exception("Unhandled fault while handling request")
            return _internal_error_reply(line)

    def _write(self, reply: str) -> bool:
        try:
            self._stdout.write(reply + "\n")
            self._stdout.flush()
        except (BrokenPipeError, OSError) as exc:
            logger.warning("stdio transport closed while sending: %s", exc)
            return False
        return True


def _internal_error_reply(line: str) -> str | None:
    # The server only raises after the line parsed as a request object.
    try:
        message: Any = json.loads(line)
    except ValueError:
        return None
    if not isinstance(message, dict) or "id" not in message:
        return None
    error = JsonRpcError(code=INTERNAL_ERROR, message="Internal error")
    return serialize_response(error_response(message["id"], error))
