"""Diagnostic logging setup.

Log records go to stderr through rich; stdout belongs to the protocol.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

stderr_console = Console(stderr=True)


def configure_logging(level: str = "INFO") -> None:
    """Install a stderr :class:`RichHandler` on the root logger."""
    handler = RichHandler(console=stderr_console, show_path=False, rich_tracebacks=True)
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
