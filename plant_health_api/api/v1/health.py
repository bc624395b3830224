# 📄 File: plant_health_api/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# Tells load balancers and monitoring whether the service is up, and whether its database
# and cache are reachable enough to serve requests.
# 🧪 Purpose (Technical Summary):
# Liveness (/health) and readiness (/health/ready) endpoints. Readiness requires a healthy
# database; Redis is reported but only degrades the status since caching is optional.
# 🔗 Dependencies:
# FastAPI, database connection manager, Redis health check, settings
# 🔄 Connected Modules / Calls From:
# plant_health_api.main, monitoring systems, load balancers

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from plant_health_api.shared.config.redis import check_redis_health
from plant_health_api.shared.config.settings import get_settings
from plant_health_api.shared.infrastructure.database.connection import db_manager

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get("/health", summary="Liveness probe")
async def health_check() -> JSONResponse:
    """Always 200 while the process is serving requests."""
    settings = get_settings()
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


@health_router.get("/health/ready", summary="Readiness probe")
async def readiness_probe() -> JSONResponse:
    """
    200 when the database answers, 503 otherwise.

    An unreachable Redis marks the service as degraded without failing readiness.
    """
    database = await db_manager.health_check()
    cache = await check_redis_health()

    if database["status"] != "healthy":
        logger.error(f"Readiness check failed: database {database.get('error')}")
        overall, code = "not_ready", status.HTTP_503_SERVICE_UNAVAILABLE
    elif cache["status"] == "unhealthy":
        logger.warning(f"Readiness degraded: redis {cache.get('error')}")
        overall, code = "degraded", status.HTTP_200_OK
    else:
        overall, code = "ready", status.HTTP_200_OK

    return JSONResponse(
        status_code=code,
        content={
            "status": overall,
            "checks": {"database": database, "redis": cache},
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )
