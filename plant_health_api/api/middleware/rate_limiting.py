# 📄 File: plant_health_api/api/middleware/rate_limiting.py
# 🧭 Purpose (Layman Explanation):
# Stops any one user from firing too many photo analyses or chat messages in a short time,
# since each of those costs a call to a paid partner service.
# 🧪 Purpose (Technical Summary):
# slowapi Limiter keyed by authenticated user id (falling back to client IP), with the
# 429 handler rendering the shared error envelope.
# 🔗 Dependencies:
# slowapi, plant_health_api.shared.utils.logging (user context), settings
# 🔄 Connected Modules / Calls From:
# plant_health_api.main (state + handler), detection analyze and chat endpoints (decorators)

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from plant_health_api.shared.config.settings import get_settings
from plant_health_api.shared.core.exceptions import RateLimitError
from plant_health_api.shared.utils.logging import get_request_id, user_id_var

logger = logging.getLogger(__name__)


def rate_limit_key(request: Request) -> str:
    """Authenticated user id when known, otherwise the client address."""
    user_id = user_id_var.get("")
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_remote_address(request)}"


def analyze_limit() -> str:
    return get_settings().RATE_LIMIT_ANALYZE


def chat_limit() -> str:
    return get_settings().RATE_LIMIT_CHAT


limiter = Limiter(
    key_func=rate_limit_key,
    enabled=get_settings().RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning(f"Rate limit exceeded for {rate_limit_key(request)} on {request.url.path}: {exc.detail}")
    error = RateLimitError(f"Rate limit exceeded: {exc.detail}")
    body = error.to_dict()
    body["error"]["request_id"] = get_request_id() or None
    return JSONResponse(status_code=error.status_code, content=body)
