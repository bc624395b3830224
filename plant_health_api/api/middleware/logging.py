# 📄 File: plant_health_api/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Keeps a diary line for every request: what was asked for, how it ended and how long it
# took, tagged with a request number the app can quote when reporting a problem.
# 🧪 Purpose (Technical Summary):
# Request logging middleware assigning/propagating X-Request-ID through the logging context
# variables and emitting one structured line per request with status and duration.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, plant_health_api.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# plant_health_api.main (middleware registration)

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from plant_health_api.shared.utils.logging import log_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
EXCLUDED_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware.

    Features:
    - Request id from the incoming X-Request-ID header or a new UUID
    - Request id echoed on the response
    - Method, path, status and duration logged per request
    - Slow request warnings
    """

    def __init__(self, app: ASGIApp, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        with log_context(request_id=request_id):
            start_time = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception:
                duration = time.perf_counter() - start_time
                logger.exception(f"{request.method} {request.url.path} failed after {duration:.3f}s")
                raise

            duration = time.perf_counter() - start_time
            response.headers[REQUEST_ID_HEADER] = request_id

            if request.url.path not in EXCLUDED_PATHS:
                extra = {
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round(duration * 1000, 2),
                }
                message = f"{request.method} {request.url.path} -> {response.status_code} ({duration:.3f}s)"
                if duration > self.slow_request_threshold:
                    logger.warning(f"Slow request: {message}", extra=extra)
                elif response.status_code >= 500:
                    logger.error(message, extra=extra)
                else:
                    logger.info(message, extra=extra)

        return response
