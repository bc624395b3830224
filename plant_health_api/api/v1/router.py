# 📄 File: plant_health_api/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The traffic director for version 1: sends scan requests to the detection code, chat
# requests to the assistant, and so on.
# 🧪 Purpose (Technical Summary):
# Aggregates the module routers under their v1 prefixes and serves the API info endpoint.
# 🔗 Dependencies:
# FastAPI, module presentation routers
# 🔄 Connected Modules / Calls From:
# plant_health_api.main

import logging
from typing import Any, Dict

from fastapi import APIRouter

from plant_health_api.modules.ai_assistant.presentation.api.v1 import chat_router
from plant_health_api.modules.plant_detection.presentation.api.v1 import (
    analytics_router,
    detections_router,
    history_router,
)
from plant_health_api.modules.user_management.presentation.api.v1 import users_router
from plant_health_api.modules.weather.presentation.api.v1 import weather_router

from . import ROUTE_PREFIXES, get_api_info

logger = logging.getLogger(__name__)

api_v1_router = APIRouter()

# users_router first so /users/me/stats is not captured by /users/{user_id}/history
api_v1_router.include_router(users_router, prefix=ROUTE_PREFIXES["users"], tags=["Users"])
api_v1_router.include_router(history_router, prefix=ROUTE_PREFIXES["users"], tags=["History"])
api_v1_router.include_router(detections_router, prefix=ROUTE_PREFIXES["detections"], tags=["Detections"])
api_v1_router.include_router(analytics_router, prefix=ROUTE_PREFIXES["analytics"], tags=["Analytics"])
api_v1_router.include_router(chat_router, prefix=ROUTE_PREFIXES["chat"], tags=["Chat"])
api_v1_router.include_router(weather_router, prefix=ROUTE_PREFIXES["weather"], tags=["Weather"])


@api_v1_router.get("/", summary="API v1 information", tags=["Health Check"])
async def api_v1_info() -> Dict[str, Any]:
    return get_api_info()
