"""``git-mcp serve`` — run the JSON-RPC server on stdin/stdout."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from gitmcp.cli_commands._config import build_config, config_options
from gitmcp.protocol.errors import TransportClosedError
from gitmcp.server import serve_stdio
from gitmcp.utils.logs import configure_logging
from gitmcp.utils.telemetry import configure_telemetry, shutdown_telemetry

logger = logging.getLogger(__name__)


@click.command()
@config_options
@click.option(
    "--log-level",
    envvar="GIT_MCP_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
    help="Diagnostic log level (logs go to stderr).",
)
@click.option("--otel-console", is_flag=True, help="Export trace spans to stderr.")
@click.option("--otlp-endpoint", default=None, help="Export trace spans via OTLP/gRPC.")
def serve(
    config_path: Path | None,
    github_token: str | None,
    api_base: str | None,
    log_level: str,
    otel_console: bool,
    otlp_endpoint: str | None,
) -> None:
    """Serve repository tools over newline-delimited JSON-RPC on stdio."""
    configure_logging(log_level)
    config = build_config(config_path, github_token, api_base)

    if otel_console or otlp_endpoint:
        try:
            configure_telemetry(export_to_console=otel_console, otlp_endpoint=otlp_endpoint)
        except ImportError as exc:
            raise click.ClickException(str(exc)) from exc

    stdin = click.get_text_stream("stdin", encoding="utf-8")
    stdout = click.get_text_stream("stdout", encoding="utf-8")
    logger.info("git-mcp listening on stdio (api: %s)", config.api_base)
    try:
        serve_stdio(config, stdin=stdin, stdout=stdout)
    except TransportClosedError as exc:
        raise click.ClickException(f"Output stream closed: {exc}") from exc
    finally:
        shutdown_telemetry()
