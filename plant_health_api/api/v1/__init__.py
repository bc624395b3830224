# 📄 File: plant_health_api/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 of the API: where each feature area lives under /api/v1.
# 🧪 Purpose (Technical Summary):
# API v1 metadata, route prefixes and OpenAPI tags shared by router.py and main.py.
# 🔗 Dependencies:
# plant_health_api.shared.config.settings
# 🔄 Connected Modules / Calls From:
# api.v1.router, plant_health_api.main

from typing import Any, Dict

from plant_health_api.shared.config.settings import get_settings

__version__ = "1.0.0"
__api_version__ = "v1"

API_V1_PREFIX = "/api/v1"

ROUTE_PREFIXES = {
    "detections": "/detections",
    "users": "/users",
    "analytics": "/analytics",
    "chat": "/chat",
    "weather": "/weather",
}

API_TAGS = [
    {"name": "Health Check", "description": "Liveness and readiness probes"},
    {"name": "Detections", "description": "Analyze photos and manage saved detections"},
    {"name": "History", "description": "Paginated detection history and period statistics"},
    {"name": "Users", "description": "Running statistics and preferences of the caller"},
    {"name": "Analytics", "description": "Personal and community analytics"},
    {"name": "Chat", "description": "Plant assistant conversations"},
    {"name": "Weather", "description": "Current conditions and forecast with agricultural insights"},
]


def get_api_info() -> Dict[str, Any]:
    settings = get_settings()
    return {
        "name": settings.APP_NAME,
        "version": __version__,
        "api_version": __api_version__,
        "environment": settings.ENVIRONMENT,
        "route_prefixes": ROUTE_PREFIXES,
    }


__all__ = ["API_TAGS", "API_V1_PREFIX", "ROUTE_PREFIXES", "get_api_info"]
