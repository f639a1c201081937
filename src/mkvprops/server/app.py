"""HTTP application for the JSON API.

This module provides the aiohttp Application with the health check endpoint
and the property/file API routes.
"""

from __future__ import annotations

import logging

from aiohttp import web

from mkvprops import __version__
from mkvprops.server.api import SERVICE_KEY, setup_api_routes
from mkvprops.service import MkvService

logger = logging.getLogger(__name__)


def create_app(service: MkvService) -> web.Application:
    """Create the aiohttp Application.

    Args:
        service: Service used by every API handler.

    Returns:
        Configured aiohttp Application.
    """
    app = web.Application()
    app[SERVICE_KEY] = service

    app.router.add_get("/health", health_handler)
    setup_api_routes(app)

    logger.debug("Created HTTP application with %d routes", len(app.router.routes()))
    return app


async def health_handler(request: web.Request) -> web.Response:
    """Handle GET /health requests."""
    return web.json_response({"status": "ok", "version": __version__})
