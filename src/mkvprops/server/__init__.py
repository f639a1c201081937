"""HTTP JSON boundary over MkvService."""

from mkvprops.server.app import create_app

__all__ = ["create_app"]
