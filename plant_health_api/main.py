# 📄 File: plant_health_api/main.py
#
# 🧭 Purpose (Layman Explanation):
# The control center that starts the plant disease service, connects the database, cache and
# partner services, and makes sure everything is ready to answer the mobile app.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point: lifespan startup/shutdown of database,
# sessions, cache and external clients; middleware stack; exception handlers; routers.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn, slowapi
# - plant_health_api.shared.config.settings
# - plant_health_api.shared.infrastructure (database, external_apis)
# - api.v1 routers and middleware
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup
# - Docker container entry point
# - Tests (TestClient)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from slowapi.errors import RateLimitExceeded

from plant_health_api.api.middleware import (
    RequestLoggingMiddleware,
    limiter,
    rate_limit_exceeded_handler,
    register_exception_handlers,
)
from plant_health_api.api.v1 import API_TAGS, API_V1_PREFIX
from plant_health_api.api.v1.health import health_router
from plant_health_api.api.v1.router import api_v1_router
from plant_health_api.shared.config.redis import close_cache
from plant_health_api.shared.config.settings import get_settings
from plant_health_api.shared.infrastructure.database.connection import close_database, init_database
from plant_health_api.shared.infrastructure.database.session import initialize_sessions
from plant_health_api.shared.infrastructure.external_apis import cleanup_api_clients, init_api_clients
from plant_health_api.shared.utils.logging import setup_logging

settings = get_settings()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Tables are created at startup only outside production; production
    schemas are managed by Alembic.
    """
    setup_logging()
    logger.info(f"🌱 {settings.APP_NAME} starting up ({settings.ENVIRONMENT})...")

    await init_database(create_tables=not settings.is_production)
    logger.info("✅ Database connection initialized")

    initialize_sessions()
    logger.info("✅ Session manager initialized")

    await init_api_clients()
    logger.info("✅ Startup complete")

    try:
        yield
    finally:
        logger.info("🔄 Shutting down...")
        await cleanup_api_clients()
        await close_cache()
        await close_database()
        logger.info("✅ Shutdown complete")


def create_application() -> FastAPI:
    """
    Application factory function.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_tags=API_TAGS,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    # =========================================================================
    # MIDDLEWARE CONFIGURATION (last added runs first)
    # =========================================================================

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # =========================================================================
    # ERROR HANDLING AND RATE LIMITS
    # =========================================================================

    register_exception_handlers(app)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # =========================================================================
    # ROUTERS
    # =========================================================================

    app.include_router(health_router, tags=["Health Check"])
    app.include_router(api_v1_router, prefix=API_V1_PREFIX)

    return app


app = create_application()


def main() -> None:
    uvicorn.run(
        "plant_health_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
