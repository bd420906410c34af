"""Tests for diagnostic logging setup."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from gitmcp.utils.logs import configure_logging, stderr_console


def test_handler_writes_to_stderr() -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging("debug")
        handlers = [h for h in root.handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1
        assert handlers[0].console is stderr_console
        assert stderr_console.stderr is True
        assert root.level == logging.DEBUG
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
