from .weather import (
    AgriculturalInsights,
    CurrentConditions,
    CurrentWeather,
    DailyForecast,
    Forecast,
    ForecastRecommendations,
    WeatherLocation,
)

__all__ = [
    "AgriculturalInsights",
    "CurrentConditions",
    "CurrentWeather",
    "DailyForecast",
    "Forecast",
    "ForecastRecommendations",
    "WeatherLocation",
]
