"""HTTP middleware: request ids, access logging and error mapping."""

from .error_handler import error_handler_middleware
from .logging import LoggingMiddleware
from .request_context import RequestContextMiddleware, get_request_id

__all__ = [
    "LoggingMiddleware",
    "RequestContextMiddleware",
    "error_handler_middleware",
    "get_request_id",
]
