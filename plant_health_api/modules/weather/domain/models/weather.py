# 📄 File: plant_health_api/modules/weather/domain/models/weather.py
# 🧭 Purpose (Layman Explanation):
# Describes the weather right now, each forecast day, and the farming advice derived from them.
# 🧪 Purpose (Technical Summary):
# Pydantic domain models for current conditions, daily forecast entries and agricultural
# insights/recommendations.
# 🔗 Dependencies:
# pydantic, datetime, typing
# 🔄 Connected Modules / Calls From:
# weather insights service, weather handlers, weather schemas

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

RiskLevel = Literal["low", "medium", "high"]


class WeatherLocation(BaseModel):
    name: Optional[str] = None
    country: Optional[str] = None
    latitude: float
    longitude: float


class CurrentConditions(BaseModel):
    temperature: float
    feels_like: Optional[float] = None
    humidity: float
    pressure: Optional[float] = None
    wind_speed: float = 0.0
    wind_direction: Optional[float] = None
    description: str = ""
    icon: Optional[str] = None
    visibility: Optional[float] = None
    clouds: Optional[float] = None


class AgriculturalInsights(BaseModel):
    risk_level: RiskLevel = "low"
    recommendations: List[str] = Field(default_factory=list)
    plant_health: Literal["good", "at_risk", "stressed"] = "good"
    irrigation_needed: bool = False
    pest_risk: RiskLevel = "low"


class CurrentWeather(BaseModel):
    current: CurrentConditions
    location: WeatherLocation
    agricultural_insights: AgriculturalInsights
    timestamp: datetime


class DailyForecast(BaseModel):
    """One UTC day; humidity, wind and description come from the day's first entry."""

    date: str
    temp_min: float
    temp_max: float
    humidity: float
    wind_speed: float = 0.0
    description: str = ""
    icon: Optional[str] = None
    rain_probability: float = Field(0.0, ge=0.0, le=100.0)


class ForecastRecommendations(BaseModel):
    irrigation_planning: List[str] = Field(default_factory=list)
    pest_management: List[str] = Field(default_factory=list)
    crop_protection: List[str] = Field(default_factory=list)
    general_advice: List[str] = Field(default_factory=list)


class Forecast(BaseModel):
    location: WeatherLocation
    forecast: List[DailyForecast]
    agricultural_recommendations: ForecastRecommendations
    timestamp: datetime
