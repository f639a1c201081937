"""CLI serve command: run the HTTP JSON API."""

from __future__ import annotations

import asyncio
import logging
import sys

import click
from aiohttp import web

from mkvprops.cli.context import get_service
from mkvprops.cli.exit_codes import ExitCode
from mkvprops.server import create_app
from mkvprops.service import MkvService

logger = logging.getLogger(__name__)


async def run_server(service: MkvService, bind: str, port: int) -> int:
    """Run the HTTP server until cancelled.

    Args:
        service: Service backing the API handlers.
        bind: Address to bind to.
        port: Port to bind to.

    Returns:
        SUCCESS for a clean shutdown, GENERAL_ERROR when the socket cannot
        be bound.
    """
    app = create_app(service)
    runner = web.AppRunner(app)
    await runner.setup()

    try:
        site = web.TCPSite(runner, bind, port)
        await site.start()

        logger.info("mkvprops API listening on http://%s:%d", bind, port)
        logger.info("Health endpoint: http://%s:%d/health", bind, port)
        logger.info("Press Ctrl+C to stop")

        await asyncio.Event().wait()
    except OSError as e:
        if "Address already in use" in str(e) or e.errno == 98:
            logger.error("Port %d is already in use", port)
            return ExitCode.GENERAL_ERROR
        if "Cannot assign requested address" in str(e) or e.errno == 99:
            logger.error("Cannot bind to address %s", bind)
            return ExitCode.GENERAL_ERROR
        logger.error("Server error: %s", e)
        return ExitCode.GENERAL_ERROR
    finally:
        await runner.cleanup()
        logger.info("mkvprops API stopped")

    return ExitCode.SUCCESS


@click.command("serve")
@click.option(
    "--bind",
    type=str,
    default=None,
    help="Address to bind to (default: 127.0.0.1).",
)
@click.option(
    "--port",
    "-p",
    type=click.IntRange(1, 65535),
    default=None,
    help="Port to bind to (default: 8331).",
)
@click.pass_context
def serve_command(ctx: click.Context, bind: str | None, port: int | None) -> None:
    """Serve the JSON API over HTTP.

    The server binds to localhost by default. Override with --bind to expose
    it on other interfaces.

    \b
    Examples:
        mkvprops serve                  # Start with defaults
        mkvprops serve --port 9000      # Custom port
    """
    config = ctx.obj["config"]
    server_bind = bind if bind is not None else config.server.bind
    server_port = port if port is not None else config.server.port

    service = get_service(ctx)

    if server_port < 1024:
        logger.warning("Port %d is privileged and may require root", server_port)

    try:
        exit_code = asyncio.run(run_server(service, server_bind, server_port))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        sys.exit(ExitCode.SUCCESS)
    sys.exit(exit_code)
