"""StdioTransport — pumps the dispatcher over newline-delimited streams.

One line in, at most one line out, strictly in order. End of input is a
normal shutdown; a broken output stream is not recoverable.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

from gitmcp.protocol.errors import TransportClosedError

if TYPE_CHECKING:
    from gitmcp.protocol.dispatcher import Dispatcher
    from gitmcp.protocol.models import JsonRpcResponse

logger = logging.getLogger(__name__)


class StdioTransport:
    """Reads requests from *stdin* and writes responses to *stdout*.

    Both streams default to the process streams at construction time, so
    tests can hand in :class:`io.StringIO` objects instead.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout

    def serve(self) -> int:
        """Run until end of input. Return the number of responses written.

        A line whose handling fails unexpectedly is logged and dropped;
        the loop goes on with the next one.

        Raises:
            TransportClosedError: If a response cannot be written.
        """
        written = 0
        while True:
            line = self._read_line()
            if line is None:
                break
            if not line.strip():
                continue
            try:
                response = self._dispatcher.dispatch_line(line)
                encoded = None if response is None else response.to_line()
            except Exception:
                logger.exception("Dropping line after unexpected failure")
                continue
            if encoded is not None and self._write_line(encoded):
                written += 1
        logger.info("Input closed after %d response(s), shutting down.", written)
        return written

    def write(self, response: JsonRpcResponse) -> None:
        """Write one response line and flush it."""
        self._write_line(response.to_line())

    def _write_line(self, encoded: str) -> bool:
        """Write *encoded* plus a newline. Return ``False`` if it could not be encoded."""
        try:
            self._stdout.write(encoded + "\n")
            self._stdout.flush()
        except UnicodeEncodeError as exc:
            logger.error("Cannot encode response, dropping it: %s", exc)
            return False
        except (OSError, ValueError) as exc:
            logger.error("Cannot write response: %s", exc)
            raise TransportClosedError(str(exc)) from exc
        return True

    def _read_line(self) -> str | None:
        """Next line from the input, or ``None`` at end of input or on a read error."""
        try:
            line = self._stdin.readline()
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            logger.error("Cannot read input, stopping: %s", exc)
            return None
        return line or None
