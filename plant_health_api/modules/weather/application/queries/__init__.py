from .weather_queries import CurrentWeatherQuery, ForecastQuery

__all__ = ["CurrentWeatherQuery", "ForecastQuery"]
