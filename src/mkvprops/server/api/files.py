"""API handlers for property catalog and file endpoints.

Endpoints:
    GET /api/properties - List editable properties
    POST /api/files/validate - Check that a path is a valid container
    POST /api/files/read - Read tracks and boolean properties
    POST /api/files/apply - Apply a batch of property changes
    POST /api/files/flag - Toggle a boolean flag on one track

Operation outcomes, including invalid files and failed edits, are returned
with status 200. Only malformed requests produce an error response.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, TypeVar

from aiohttp import web
from pydantic import BaseModel, ValidationError

from mkvprops.server.api.errors import (
    INVALID_JSON,
    INVALID_REQUEST,
    VALIDATION_FAILED,
    api_error,
)
from mkvprops.server.api.models import (
    ApplyChangesRequest,
    FilePathRequest,
    TrackFlagRequest,
)
from mkvprops.service import MkvService

logger = logging.getLogger(__name__)

SERVICE_KEY = web.AppKey("service", MkvService)

RequestModelT = TypeVar("RequestModelT", bound=BaseModel)


def _validation_details(error: ValidationError) -> list[dict[str, str]]:
    return [
        {
            "field": ".".join(str(part) for part in item["loc"]),
            "message": item["msg"],
        }
        for item in error.errors()
    ]


async def _parse_body(
    request: web.Request, model: type[RequestModelT]
) -> RequestModelT | web.Response:
    """Decode and validate a JSON request body.

    Returns:
        The validated model, or an error response to return as-is.
    """
    try:
        body: Any = await request.json()
    except Exception:
        return api_error("Invalid JSON body", code=INVALID_JSON)

    if not isinstance(body, dict):
        return api_error("Request body must be a JSON object", code=INVALID_REQUEST)

    try:
        return model.model_validate(body)
    except ValidationError as e:
        return api_error(
            "Request validation failed",
            code=VALIDATION_FAILED,
            details=_validation_details(e),
        )


async def api_properties_handler(request: web.Request) -> web.Response:
    """Handle GET /api/properties."""
    service = request.app[SERVICE_KEY]
    properties = await service.get_available_properties()
    return web.json_response({"properties": [p.to_dict() for p in properties]})


async def api_validate_file_handler(request: web.Request) -> web.Response:
    """Handle POST /api/files/validate."""
    parsed = await _parse_body(request, FilePathRequest)
    if isinstance(parsed, web.Response):
        return parsed

    service = request.app[SERVICE_KEY]
    is_valid = await service.is_valid_file(Path(parsed.path))
    return web.json_response({"path": parsed.path, "valid": is_valid})


async def api_read_file_handler(request: web.Request) -> web.Response:
    """Handle POST /api/files/read."""
    parsed = await _parse_body(request, FilePathRequest)
    if isinstance(parsed, web.Response):
        return parsed

    service = request.app[SERVICE_KEY]
    info = await service.read_file_properties(Path(parsed.path))
    return web.json_response(info.to_dict())


async def api_apply_changes_handler(request: web.Request) -> web.Response:
    """Handle POST /api/files/apply."""
    parsed = await _parse_body(request, ApplyChangesRequest)
    if isinstance(parsed, web.Response):
        return parsed

    try:
        changes = [change.to_change() for change in parsed.changes]
    except ValueError as e:
        return api_error(str(e), code=VALIDATION_FAILED)

    service = request.app[SERVICE_KEY]
    result = await service.apply_changes(Path(parsed.path), changes)
    return web.json_response(result.to_dict())


async def api_track_flag_handler(request: web.Request) -> web.Response:
    """Handle POST /api/files/flag."""
    parsed = await _parse_body(request, TrackFlagRequest)
    if isinstance(parsed, web.Response):
        return parsed

    service = request.app[SERVICE_KEY]
    result = await service.set_track_flag(
        Path(parsed.path), parsed.ordinal, parsed.property, parsed.value
    )
    return web.json_response(result.to_dict())


def get_file_routes() -> list[tuple[str, str, Any]]:
    """Return route definitions as (method, path_suffix, handler) tuples.

    Path suffixes omit the ``/api`` prefix.
    """
    return [
        ("GET", "/properties", api_properties_handler),
        ("POST", "/files/validate", api_validate_file_handler),
        ("POST", "/files/read", api_read_file_handler),
        ("POST", "/files/apply", api_apply_changes_handler),
        ("POST", "/files/flag", api_track_flag_handler),
    ]


def setup_file_routes(app: web.Application) -> None:
    """Register property and file API routes with the application.

    Args:
        app: aiohttp Application to configure.
    """
    for method, suffix, handler in get_file_routes():
        app.router.add_route(method, f"/api{suffix}", handler)
