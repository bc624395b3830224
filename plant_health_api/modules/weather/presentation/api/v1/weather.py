# 📄 File: plant_health_api/modules/weather/presentation/api/v1/weather.py
# 🧭 Purpose (Layman Explanation):
# Web endpoints behind the weather screen.
# 🧪 Purpose (Technical Summary):
# FastAPI routes for currentWeather and forecast. Coordinates are range checked by the
# handlers so out-of-range values produce the shared VALIDATION_ERROR envelope.
# 🔗 Dependencies:
# FastAPI router, weather handlers and schemas, auth dependency
# 🔄 Connected Modules / Calls From:
# api.v1.router

import logging

from fastapi import APIRouter, Depends, Query

from plant_health_api.modules.weather.application.handlers.weather_handlers import (
    CurrentWeatherQueryHandler,
    ForecastQueryHandler,
)
from plant_health_api.modules.weather.application.queries.weather_queries import CurrentWeatherQuery, ForecastQuery
from plant_health_api.modules.weather.presentation.api.schemas.weather_schemas import (
    CurrentWeatherResponse,
    ForecastResponse,
)
from plant_health_api.shared.core.dependencies import CurrentUser, get_current_user

logger = logging.getLogger(__name__)

weather_router = APIRouter()

_RESPONSES = {
    422: {"description": "Latitude or longitude out of range"},
    502: {"description": "Weather service error"},
    504: {"description": "Weather service timed out, retry later"},
}


@weather_router.get("/current", response_model=CurrentWeatherResponse, summary="Current weather", responses=_RESPONSES)
async def get_current_weather(
    lat: float = Query(..., description="Latitude in [-90, 90]"),
    lon: float = Query(..., description="Longitude in [-180, 180]"),
    current_user: CurrentUser = Depends(get_current_user),
    handler: CurrentWeatherQueryHandler = Depends(CurrentWeatherQueryHandler),
) -> CurrentWeatherResponse:
    weather = await handler.handle(CurrentWeatherQuery(latitude=lat, longitude=lon))
    return CurrentWeatherResponse.from_domain(weather)


@weather_router.get("/forecast", response_model=ForecastResponse, summary="Five day forecast", responses=_RESPONSES)
async def get_forecast(
    lat: float = Query(..., description="Latitude in [-90, 90]"),
    lon: float = Query(..., description="Longitude in [-180, 180]"),
    current_user: CurrentUser = Depends(get_current_user),
    handler: ForecastQueryHandler = Depends(ForecastQueryHandler),
) -> ForecastResponse:
    forecast = await handler.handle(ForecastQuery(latitude=lat, longitude=lon))
    return ForecastResponse.from_domain(forecast)
