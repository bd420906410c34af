"""Shared CLI output formatters."""

from __future__ import annotations

import json

from rich.console import Console
from rich.table import Table

from gitmcp.protocol.models import CallToolResult, ToolDescriptor  # noqa: TC001

console = Console()
err_console = Console(stderr=True)


def print_tools_table(tools: list[ToolDescriptor]) -> None:
    """Pretty-print tool descriptors as a table."""
    table = Table(title="git-mcp Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Required")
    table.add_column("Optional")
    table.add_column("Description")

    for tool in tools:
        required = tool.required
        optional = [p.name for p in tool.properties if p.name not in required]
        table.add_row(
            tool.name,
            ", ".join(required) or "-",
            ", ".join(optional) or "-",
            _truncate(tool.description),
        )

    console.print(table)


def print_tool_result(result: CallToolResult) -> None:
    """Print a tool result; JSON payloads are pretty-printed."""
    if result.is_error:
        err_console.print(f"[red]Tool error:[/red] {result.text}")
        return
    try:
        json.loads(result.text)
    except json.JSONDecodeError:
        console.print(result.text, markup=False)
        return
    console.print_json(result.text)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
