from pydantic import BaseModel


class CurrentWeatherQuery(BaseModel):
    latitude: float
    longitude: float


class ForecastQuery(BaseModel):
    latitude: float
    longitude: float
