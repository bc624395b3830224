from .weather_schemas import CurrentWeatherResponse, ForecastResponse

__all__ = ["CurrentWeatherResponse", "ForecastResponse"]
