"""
Error Handling Middleware

Last-resort handler for exceptions no registered handler dealt with.
Business errors are converted by the gateway's exception handlers before
they reach this middleware.
"""
import traceback

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from ...core.logging_config import get_logger

logger = get_logger(__name__)

GENERIC_ERROR = "Internal server error"


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Converts unexpected exceptions to a generic 500 plain-text response.

    The exception is only logged; the client never sees its text.
    Outside production the traceback is logged as well.
    """

    def __init__(self, app, is_production: bool = False):
        super().__init__(app)
        self.is_production = is_production

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            request_id = getattr(request.state, "request_id", None)
            logger.error(f"Unexpected error for {request.method} {request.url.path} [{request_id}]: {e}")
            if not self.is_production:
                logger.debug(f"Traceback:\n{traceback.format_exc()}")
            return PlainTextResponse(GENERIC_ERROR, status_code=500)
