"""
Request ID middleware for request correlation.

- Accepts an incoming X-Request-ID header or generates one
- Exposes it on request.state, the response headers and the logging context
- Logs each catalog call with its status and duration
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from catalog.logging_config import get_logger, request_id_var

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
SLOW_REQUEST_MS = 500


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Assign a request ID to each call so kernel log lines (rejections,
    mutations) can be tied back to the HTTP request that caused them.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        try:
            start = time.perf_counter()
            response = await call_next(request)
            duration_ms = round((time.perf_counter() - start) * 1000, 1)
            response.headers[REQUEST_ID_HEADER] = request_id

            fields = {
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            }
            if duration_ms > SLOW_REQUEST_MS:
                logger.warning("Slow request", extra=fields)
            else:
                logger.debug("Request handled", extra=fields)
            return response
        finally:
            request_id_var.reset(token)
