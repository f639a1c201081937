"""JSON API routes for the mkvprops server.

API Versioning:
    All endpoints are available under both ``/api/`` (unversioned) and
    ``/api/v1/`` (versioned). Both prefixes resolve to the same handler.
"""

from aiohttp import web

from mkvprops.server.api.files import SERVICE_KEY, get_file_routes, setup_file_routes

__all__ = [
    "SERVICE_KEY",
    "setup_api_routes",
]


def setup_api_routes(app: web.Application) -> None:
    """Register all API routes under ``/api/`` and ``/api/v1/``.

    Args:
        app: aiohttp Application to configure.
    """
    setup_file_routes(app)

    for method, suffix, handler in get_file_routes():
        app.router.add_route(method, f"/api/v1{suffix}", handler)
