"""Standardized API error response helper.

All error responses include:
- ``error``: Human-readable error message
- ``code``: Machine-readable error code string
- ``details`` (optional): Additional context for the error

Usage:
    from mkvprops.server.api.errors import api_error, INVALID_REQUEST

    return api_error("path is required", code=INVALID_REQUEST)
"""

from __future__ import annotations

from typing import Any

from aiohttp import web

INVALID_REQUEST = "INVALID_REQUEST"
INVALID_JSON = "INVALID_JSON"
VALIDATION_FAILED = "VALIDATION_FAILED"


def api_error(
    message: str,
    *,
    code: str,
    status: int = 400,
    details: Any = None,
) -> web.Response:
    """Create a standardized JSON error response.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (use constants from this module).
        status: HTTP status code (default 400).
        details: Optional additional context (string, list, or dict).

    Returns:
        aiohttp JSON response with ``{"error": ..., "code": ...}`` body.
    """
    body: dict[str, Any] = {"error": message, "code": code}
    if details is not None:
        body["details"] = details
    return web.json_response(body, status=status)
