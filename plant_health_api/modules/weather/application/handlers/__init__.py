from .weather_handlers import CurrentWeatherQueryHandler, ForecastQueryHandler

__all__ = ["CurrentWeatherQueryHandler", "ForecastQueryHandler"]
