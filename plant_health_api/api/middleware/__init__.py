# 📄 File: plant_health_api/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# Gathers the helpers that sit in front of every endpoint: request logging, per-user rate
# limits and uniform error replies.
# 🧪 Purpose (Technical Summary):
# Package exports for the request logging middleware, slowapi limiter and exception handlers.
# 🔗 Dependencies:
# starlette, slowapi, plant_health_api.shared
# 🔄 Connected Modules / Calls From:
# plant_health_api.main

"""
API Middleware Package

Stack order (outermost first):
    1. CORS
    2. GZip
    3. RequestLoggingMiddleware (request id + access log)
    4. Exception handlers (uniform error envelope)
    5. slowapi limits on the analyze and chat endpoints
"""

from .error_handling import register_exception_handlers
from .logging import RequestLoggingMiddleware
from .rate_limiting import limiter, rate_limit_exceeded_handler

__all__ = [
    "RequestLoggingMiddleware",
    "limiter",
    "rate_limit_exceeded_handler",
    "register_exception_handlers",
]
