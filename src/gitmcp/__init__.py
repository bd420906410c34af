"""git-mcp — repository inspection tools served over stdio JSON-RPC."""

from __future__ import annotations

__version__ = "0.1.0"

SERVER_NAME = "git-mcp"
