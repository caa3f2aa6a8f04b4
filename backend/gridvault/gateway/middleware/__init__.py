"""
Gateway Middleware Module

Custom middleware for request tracing, logging, and error handling.
"""
from .request_logging import RequestLoggingMiddleware
from .error_handler import ErrorHandlingMiddleware
from .request_id import RequestIDMiddleware, REQUEST_ID_HEADER

__all__ = [
    "RequestLoggingMiddleware",
    "ErrorHandlingMiddleware",
    "RequestIDMiddleware",
    "REQUEST_ID_HEADER",
]
