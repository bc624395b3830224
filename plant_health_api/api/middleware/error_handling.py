# 📄 File: plant_health_api/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation):
# Makes sure every failure reaches the app in the same shape, with a clear code saying whether
# the input was wrong, the scan belongs to someone else, or a partner service was slow or broken.
# 🧪 Purpose (Technical Summary):
# FastAPI exception handlers mapping PlantHealthException subclasses, request validation
# errors, HTTP errors and unexpected exceptions onto one JSON error envelope.
# 🔗 Dependencies:
# FastAPI, starlette, plant_health_api.shared.core.exceptions, logging context
# 🔄 Connected Modules / Calls From:
# plant_health_api.main (register_exception_handlers)

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from plant_health_api.shared.config.settings import get_settings
from plant_health_api.shared.core.exceptions import PlantHealthException
from plant_health_api.shared.utils.logging import get_request_id

logger = logging.getLogger(__name__)


def error_body(
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "request_id": get_request_id() or None,
        }
    }


async def plant_health_exception_handler(request: Request, exc: PlantHealthException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")

    headers = None
    retry_after = exc.details.get("retry_after")
    if exc.status_code == status.HTTP_429_TOO_MANY_REQUESTS and retry_after:
        headers = {"Retry-After": str(retry_after)}

    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(error_body(exc.error_code, exc.message, exc.details)),
        headers=headers,
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg"),
            "type": error.get("type"),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder(error_body("VALIDATION_ERROR", "Request validation failed", {"errors": errors})),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = "NOT_FOUND" if exc.status_code == status.HTTP_404_NOT_FOUND else "HTTP_ERROR"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    message = str(exc) if get_settings().DEBUG else "An unexpected error occurred"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_ERROR", message),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PlantHealthException, plant_health_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
