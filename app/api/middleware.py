"""
Custom middleware for the FastAPI application
"""
import time
import logging
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Callable

logger = logging.getLogger(__name__)

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log request details and timing
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"
        request_id = getattr(request.state, "request_id", None)

        try:
            response = await call_next(request)

            process_time = time.time() - start_time
            logger.info(
                f"{method} {path} - {response.status_code} - "
                f"{process_time:.3f}s - IP: {client_ip}",
                extra={"request_id": request_id}
            )

            response.headers["X-Process-Time"] = f"{process_time:.3f}"
            return response

        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"{method} {path} - ERROR: {str(e)} - "
                f"{process_time:.3f}s - IP: {client_ip}",
                extra={"request_id": request_id}
            )
            raise

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add security headers
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response
