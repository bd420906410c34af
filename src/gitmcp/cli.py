"""git-mcp CLI entrypoint."""

from __future__ import annotations

import click

from gitmcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="git-mcp")
def main() -> None:
    """git-mcp — repository inspection tools for coding agents."""


# Register subcommands
from gitmcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
