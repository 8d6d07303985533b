# backend/app/middleware/request_logger.py
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from app.logger import get_logger

log = get_logger(__name__)


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """One line per request: method, path, status and latency. Never bodies or headers."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            ms = (time.perf_counter() - start) * 1000
            client = request.client.host if request.client else "-"
            log.info("%s %s -> %s %.1fms (%s)", request.method, request.url.path, status, ms, client)
