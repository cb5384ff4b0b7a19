"""
Request middleware: access logging, timing, and request ID tracking.

Records which authenticated controller (if any) accessed which path. The
bearer token is only decoded here for logging; authorization happens in the
route dependencies.
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from artcc.core.logging import bind_request_context, get_logger
from artcc.core.metrics import request_latency
from artcc.core.security import decode_cid

logger = get_logger("artcc.access")


def _request_cid(request: Request):
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return decode_cid(token)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """
    Middleware that:
    1. Assigns a unique request ID to each request
    2. Binds request ID, method, path and acting CID to structlog
    3. Logs status code and duration, and records request latency
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = str(uuid.uuid4())[:8]
        start_time = time.perf_counter()

        bind_request_context(request_id, request.method, request.url.path, _request_cid(request))

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
            logger.error("request_failed", error=str(e), duration_ms=duration_ms)
            raise

        elapsed = time.perf_counter() - start_time
        duration_ms = round(elapsed * 1000, 2)
        request_latency.labels(method=request.method, status=response.status_code).observe(elapsed)
        logger.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms}ms"
        return response
