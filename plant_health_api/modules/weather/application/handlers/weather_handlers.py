# 📄 File: plant_health_api/modules/weather/application/handlers/weather_handlers.py
# 🧭 Purpose (Layman Explanation):
# Fetches the weather for a spot on the map, adds farming advice, and remembers the answer
# for a few minutes so repeated screens do not call the weather service again.
# 🧪 Purpose (Technical Summary):
# Query handlers for currentWeather and forecast: coordinate validation, OpenWeatherMap
# payload mapping, insight rules and Redis caching through CacheManager.
# 🔗 Dependencies:
# FastAPI Depends, WeatherClient, CacheManager, weather insight functions
# 🔄 Connected Modules / Calls From:
# presentation.api.v1.weather

import logging
from typing import Any, Dict

from fastapi import Depends

from plant_health_api.modules.weather.application.queries.weather_queries import CurrentWeatherQuery, ForecastQuery
from plant_health_api.modules.weather.domain.models.weather import (
    CurrentConditions,
    CurrentWeather,
    Forecast,
    WeatherLocation,
)
from plant_health_api.modules.weather.domain.services.insights import (
    agricultural_insights,
    daily_forecast,
    forecast_recommendations,
)
from plant_health_api.shared.config.redis import CacheConfig, CacheManager, get_cache_manager
from plant_health_api.shared.core.exceptions import ExternalAPIError
from plant_health_api.shared.infrastructure.external_apis import get_weather_client
from plant_health_api.shared.infrastructure.external_apis.weather_client import WeatherClient
from plant_health_api.shared.utils.helpers import utc_now
from plant_health_api.shared.utils.validators import validate_coordinates

logger = logging.getLogger(__name__)


def _coordinate_key(latitude: float, longitude: float) -> Dict[str, str]:
    return {"lat": f"{latitude:.2f}", "lon": f"{longitude:.2f}"}


def _current_from_payload(payload: Dict[str, Any]) -> CurrentConditions:
    main = payload["main"]
    wind = payload.get("wind", {})
    weather = (payload.get("weather") or [{}])[0]
    return CurrentConditions(
        temperature=main["temp"],
        feels_like=main.get("feels_like"),
        humidity=main["humidity"],
        pressure=main.get("pressure"),
        wind_speed=wind.get("speed", 0.0),
        wind_direction=wind.get("deg"),
        description=weather.get("description", ""),
        icon=weather.get("icon"),
        visibility=payload.get("visibility"),
        clouds=payload.get("clouds", {}).get("all"),
    )


class CurrentWeatherQueryHandler:
    def __init__(
        self,
        weather_client: WeatherClient = Depends(get_weather_client),
        cache: CacheManager = Depends(get_cache_manager),
    ):
        self._client = weather_client
        self._cache = cache

    async def handle(self, query: CurrentWeatherQuery) -> CurrentWeather:
        validate_coordinates(query.latitude, query.longitude)
        cache_key = CacheConfig.get_cache_key(
            "weather_current", **_coordinate_key(query.latitude, query.longitude)
        )

        cached = await self._cache.get_json(cache_key)
        if cached is not None:
            return CurrentWeather.model_validate(cached)

        payload = await self._client.get_current(query.latitude, query.longitude)
        try:
            conditions = _current_from_payload(payload)
            coord = payload.get("coord", {})
            location = WeatherLocation(
                name=payload.get("name"),
                country=payload.get("sys", {}).get("country"),
                latitude=coord.get("lat", query.latitude),
                longitude=coord.get("lon", query.longitude),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Unexpected current weather payload: {e}")
            raise ExternalAPIError("Unexpected weather service response", api_name="openweather") from e

        weather = CurrentWeather(
            current=conditions,
            location=location,
            agricultural_insights=agricultural_insights(conditions),
            timestamp=utc_now(),
        )
        await self._cache.set_json(
            cache_key, weather.model_dump(mode="json"), ttl=CacheConfig.get_ttl("weather_current")
        )
        return weather


class ForecastQueryHandler:
    """Up to five UTC days with per-day agricultural recommendations."""

    def __init__(
        self,
        weather_client: WeatherClient = Depends(get_weather_client),
        cache: CacheManager = Depends(get_cache_manager),
    ):
        self._client = weather_client
        self._cache = cache

    async def handle(self, query: ForecastQuery) -> Forecast:
        validate_coordinates(query.latitude, query.longitude)
        cache_key = CacheConfig.get_cache_key(
            "weather_forecast", **_coordinate_key(query.latitude, query.longitude)
        )

        cached = await self._cache.get_json(cache_key)
        if cached is not None:
            return Forecast.model_validate(cached)

        payload = await self._client.get_forecast(query.latitude, query.longitude)
        try:
            days = daily_forecast(payload.get("list", []))
            city = payload.get("city", {})
            coord = city.get("coord", {})
            location = WeatherLocation(
                name=city.get("name"),
                country=city.get("country"),
                latitude=coord.get("lat", query.latitude),
                longitude=coord.get("lon", query.longitude),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Unexpected forecast payload: {e}")
            raise ExternalAPIError("Unexpected weather service response", api_name="openweather") from e

        forecast = Forecast(
            location=location,
            forecast=days,
            agricultural_recommendations=forecast_recommendations(days),
            timestamp=utc_now(),
        )
        await self._cache.set_json(
            cache_key, forecast.model_dump(mode="json"), ttl=CacheConfig.get_ttl("weather_forecast")
        )
        return forecast
