"""HTTP surface for a deployed status page."""

from statuspage.server.app import StatusPageHandler, StatusPageServer, create_server


__all__ = [
    "StatusPageHandler",
    "StatusPageServer",
    "create_server",
]
