"""Unhandled error middleware - last-resort 500 inside the middleware stack.

Learn: Starlette sends handlers for bare `Exception` to its outermost
ServerErrorMiddleware, which sits outside every middleware we add, so
those responses would lose X-Request-ID and the security headers.
Catching here, innermost, lets the 500 travel back out through
RequestId → Security → CORS like any other response.
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from devsocial.errors import UnexpectedError

logger = structlog.get_logger(__name__)


def render_unexpected(exc: Exception) -> JSONResponse:
    """Generic 500 body; the detail only goes to the log."""
    logger.error(
        "app.unhandled_error",
        error_type=type(exc).__name__,
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    error = UnexpectedError()
    return JSONResponse(status_code=error.status_code, content=error.to_body())


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return render_unexpected(exc)
