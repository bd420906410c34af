"""Shared error types for the protocol layer."""


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""


class ParseError(ProtocolError):
    """An inbound line could not be turned into a request."""


class ToolNotFoundError(ProtocolError):
    """Requested tool does not exist in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool '{name}' not found")


class ToolExecutionError(ProtocolError):
    """A tool invocation failed inside its provider.

    ``detail`` is the reason reported to the peer, unchanged.
    """

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Tool execution failed: {name}" + (f": {detail}" if detail else ""))


class UpstreamError(ProtocolError):
    """A git or GitHub request failed.

    Raised below the provider layer; providers convert it into
    :class:`ToolExecutionError` for the tool that was called.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class TransportClosedError(ProtocolError):
    """The output stream can no longer be written to."""
