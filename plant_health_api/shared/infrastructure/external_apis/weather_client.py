# 📄 File: plant_health_api/shared/infrastructure/external_apis/weather_client.py

# 🧭 Purpose (Layman Explanation):
# Fetches the current weather and the coming days' forecast for a spot on the map
# from OpenWeatherMap, in metric units.

# 🧪 Purpose (Technical Summary):
# OpenWeatherMap client built on APIClient exposing the /weather and /forecast
# endpoints; payloads are returned raw for the weather module to interpret.

# 🔗 Dependencies:
# - APIClient (aiohttp + tenacity)

# 🔄 Connected Modules / Calls From:
# - weather presentation endpoints (current conditions, forecast)

from typing import Any, Dict

from plant_health_api.shared.config.settings import Settings

from .api_client import APIClient


class WeatherClient(APIClient):
    """Client for OpenWeatherMap current conditions and 5 day forecast."""

    def __init__(self, settings: Settings):
        super().__init__(
            base_url=settings.OPENWEATHER_API_URL,
            api_name="openweather",
            timeout=settings.OPENWEATHER_TIMEOUT,
            max_retries=settings.EXTERNAL_API_MAX_RETRIES,
            default_params={"appid": settings.OPENWEATHER_API_KEY, "units": "metric"},
        )

    async def get_current(self, latitude: float, longitude: float) -> Dict[str, Any]:
        return await self.get("weather", params={"lat": latitude, "lon": longitude})

    async def get_forecast(self, latitude: float, longitude: float) -> Dict[str, Any]:
        return await self.get("forecast", params={"lat": latitude, "lon": longitude})
