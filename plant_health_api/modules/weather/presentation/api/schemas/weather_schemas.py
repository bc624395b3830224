# 📄 File: plant_health_api/modules/weather/presentation/api/schemas/weather_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shape of the weather data sent to the app.
# 🧪 Purpose (Technical Summary):
# Response schemas for the /weather endpoints. They reuse the domain models directly since
# the domain shape is already the wire shape.
# 🔗 Dependencies:
# pydantic, weather domain models
# 🔄 Connected Modules / Calls From:
# presentation.api.v1.weather

from plant_health_api.modules.weather.domain.models.weather import CurrentWeather, Forecast


class CurrentWeatherResponse(CurrentWeather):
    @classmethod
    def from_domain(cls, weather: CurrentWeather) -> "CurrentWeatherResponse":
        return cls.model_validate(weather.model_dump())


class ForecastResponse(Forecast):
    @classmethod
    def from_domain(cls, forecast: Forecast) -> "ForecastResponse":
        return cls.model_validate(forecast.model_dump())
