"""
Middleware package.

WHY: Middleware provides cross-cutting concerns that apply to all requests.
"""

from records_api.middleware.request_context import (
    RequestContextMiddleware,
    get_request_context,
    get_client_ip,
    RequestContext,
    REQUEST_ID_HEADER,
)

__all__ = [
    "RequestContextMiddleware",
    "get_request_context",
    "get_client_ip",
    "RequestContext",
    "REQUEST_ID_HEADER",
]
