# 📄 File: plant_health_api/shared/infrastructure/external_apis/__init__.py

# 🧭 Purpose (Layman Explanation):
# Keeps one ready-to-use messenger per partner service (plant identification, AI text, weather)
# and closes them all when the service shuts down.

# 🧪 Purpose (Technical Summary):
# Process wide registry for the external API clients with lazy construction, startup
# initialization, shutdown cleanup and FastAPI dependency accessors.

# 🔗 Dependencies:
# - api_client: Generic HTTP client with retry logic
# - plant_id_client, gemini_client, weather_client

# 🔄 Connected Modules / Calls From:
# plant_health_api.main (lifespan), module presentation dependencies

"""
External APIs Infrastructure Module

Key Features:
- One shared aiohttp session per upstream service
- Explicit per-service timeouts
- Centralized error mapping (timeout vs. upstream error)
"""

import logging
from typing import Dict

from plant_health_api.shared.config.settings import get_settings

from .api_client import APIClient
from .gemini_client import GeminiClient
from .plant_id_client import IdentificationResult, PlantIdentificationClient
from .weather_client import WeatherClient

logger = logging.getLogger(__name__)

_clients: Dict[str, APIClient] = {}


def get_plant_id_client() -> PlantIdentificationClient:
    if "kindwise" not in _clients:
        _clients["kindwise"] = PlantIdentificationClient(get_settings())
    return _clients["kindwise"]


def get_gemini_client() -> GeminiClient:
    if "gemini" not in _clients:
        _clients["gemini"] = GeminiClient(get_settings())
    return _clients["gemini"]


def get_weather_client() -> WeatherClient:
    if "openweather" not in _clients:
        _clients["openweather"] = WeatherClient(get_settings())
    return _clients["openweather"]


async def init_api_clients() -> None:
    """Create and open every external API client."""
    logger.info("Initializing external API clients...")
    for client in (get_plant_id_client(), get_gemini_client(), get_weather_client()):
        await client.initialize()
    logger.info("✅ External API clients initialized successfully")


async def cleanup_api_clients() -> None:
    """Close every external API client session."""
    logger.info("Cleaning up external API clients...")
    for client in list(_clients.values()):
        await client.close()
    _clients.clear()


__all__ = [
    "APIClient",
    "GeminiClient",
    "IdentificationResult",
    "PlantIdentificationClient",
    "WeatherClient",
    "get_plant_id_client",
    "get_gemini_client",
    "get_weather_client",
    "init_api_clients",
    "cleanup_api_clients",
]
