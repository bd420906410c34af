"""``git-mcp tools`` — inspect the catalog and run single tool calls."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click

from gitmcp.catalog import default_registry
from gitmcp.cli_commands._config import build_config, config_options
from gitmcp.cli_commands._output import console, print_tool_result, print_tools_table
from gitmcp.server import build_dispatcher
from gitmcp.utils.logs import configure_logging


@click.group()
def tools() -> None:
    """Inspect and try out the advertised tools."""


@tools.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print the tools/list payload as JSON.")
def list_tools(as_json: bool) -> None:
    """List the tools in the order clients receive them."""
    descriptors = default_registry().list_tools()
    if as_json:
        console.print_json(json.dumps({"tools": [d.to_wire() for d in descriptors]}))
        return
    print_tools_table(descriptors)


@tools.command("call")
@click.argument("name")
@click.option(
    "-a",
    "--arg",
    "args",
    multiple=True,
    metavar="KEY=VALUE",
    help="Tool argument; VALUE is parsed as JSON when possible.",
)
@config_options
def call(
    name: str,
    args: tuple[str, ...],
    config_path: Path | None,
    github_token: str | None,
    api_base: str | None,
) -> None:
    """Run tool NAME once and print its result."""
    configure_logging("WARNING")
    arguments = _parse_arguments(args)
    dispatcher = build_dispatcher(build_config(config_path, github_token, api_base))
    result = dispatcher.call_tool(name, arguments)
    print_tool_result(result)
    if result.is_error:
        click.get_current_context().exit(1)


def _parse_arguments(pairs: tuple[str, ...]) -> dict[str, Any]:
    arguments: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--arg")
        try:
            arguments[key] = json.loads(raw)
        except json.JSONDecodeError:
            arguments[key] = raw
    return arguments
