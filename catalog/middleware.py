# catalog/middleware.py
import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from .core import server_error

logger = structlog.get_logger()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method and path of every request. Never rejects."""

    async def dispatch(self, request: Request, call_next):
        log_data = {
            "method": request.method,
            "path": request.url.path,
        }
        if request.url.query:
            log_data["query"] = request.url.query
        logger.info("Request", **log_data)
        return await call_next(request)


class ErrorBoundaryMiddleware(BaseHTTPMiddleware):
    """
    Last line of defence: any exception raised while handling a request is
    logged with its traceback and turned into a bare 500 for the client.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(
                "Unhandled Exception",
                error=str(e),
                path=request.url.path,
                method=request.method,
                exc_info=True,
            )
            return server_error()
