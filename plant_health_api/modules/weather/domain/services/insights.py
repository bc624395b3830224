# 📄 File: plant_health_api/modules/weather/domain/services/insights.py
# 🧭 Purpose (Layman Explanation):
# Turns raw weather numbers into gardening advice: frost or heat warnings, fungus risk in
# humid air, watering hints, and a tidy day-by-day forecast.
# 🧪 Purpose (Technical Summary):
# Pure functions: threshold based insights for current conditions, grouping of the 3-hourly
# forecast into UTC days (max 5) and per-day recommendations.
# 🔗 Dependencies:
# weather domain models, shared helpers
# 🔄 Connected Modules / Calls From:
# weather query handlers

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

from plant_health_api.modules.weather.domain.models.weather import (
    AgriculturalInsights,
    CurrentConditions,
    DailyForecast,
    ForecastRecommendations,
)
from plant_health_api.shared.utils.helpers import clamp, day_key

FROST_TEMPERATURE = 5.0
HEAT_TEMPERATURE = 35.0
WARM_TEMPERATURE = 25.0
HIGH_HUMIDITY = 80.0
LOW_HUMIDITY = 30.0
STRONG_WIND = 20.0
FORECAST_DAYS = 5

_RISK_ORDER = {"low": 0, "medium": 1, "high": 2}


def _raise_risk(current: str, level: str) -> str:
    return level if _RISK_ORDER[level] > _RISK_ORDER[current] else current


def agricultural_insights(conditions: CurrentConditions) -> AgriculturalInsights:
    """
    Apply the temperature, humidity, wind and precipitation rules in that order.

    The risk level only ever rises; rain cancels the irrigation hint from low humidity.
    """
    insights = AgriculturalInsights()
    temp = conditions.temperature
    description = conditions.description.lower()

    if temp < FROST_TEMPERATURE:
        insights.risk_level = _raise_risk(insights.risk_level, "high")
        insights.plant_health = "at_risk"
        insights.recommendations.append("Protect sensitive plants from frost")
    elif temp > HEAT_TEMPERATURE:
        insights.risk_level = _raise_risk(insights.risk_level, "high")
        insights.plant_health = "stressed"
        insights.recommendations.append("Provide shade and extra watering")
    elif temp > WARM_TEMPERATURE:
        insights.risk_level = _raise_risk(insights.risk_level, "medium")
        insights.recommendations.append("Monitor for heat stress")

    if conditions.humidity > HIGH_HUMIDITY:
        insights.pest_risk = "high"
        insights.recommendations.append("High humidity - watch for fungal diseases")
    elif conditions.humidity < LOW_HUMIDITY:
        insights.irrigation_needed = True
        insights.recommendations.append("Low humidity - increase watering frequency")

    if conditions.wind_speed > STRONG_WIND:
        insights.risk_level = _raise_risk(insights.risk_level, "medium")
        insights.recommendations.append("Strong winds - protect tall plants")

    if "rain" in description:
        insights.irrigation_needed = False
        insights.recommendations.append("Natural irrigation from rain")
    elif "snow" in description:
        insights.risk_level = _raise_risk(insights.risk_level, "high")
        insights.recommendations.append("Protect plants from snow damage")

    return insights


def daily_forecast(entries: Iterable[Dict[str, Any]], days: int = FORECAST_DAYS) -> List[DailyForecast]:
    """
    Group OpenWeatherMap 3-hourly entries by UTC day.

    Keeps the lowest minimum, the highest maximum and the highest
    precipitation probability of each day, in chronological order.
    """
    grouped: Dict[str, DailyForecast] = {}
    for entry in entries:
        moment = datetime.fromtimestamp(entry["dt"], tz=timezone.utc)
        key = day_key(moment)
        main = entry.get("main", {})
        weather = (entry.get("weather") or [{}])[0]
        rain_probability = float(clamp(float(entry.get("pop", 0.0)) * 100, 0.0, 100.0))

        day = grouped.get(key)
        if day is None:
            grouped[key] = DailyForecast(
                date=key,
                temp_min=main["temp_min"],
                temp_max=main["temp_max"],
                humidity=main.get("humidity", 0.0),
                wind_speed=entry.get("wind", {}).get("speed", 0.0),
                description=weather.get("description", ""),
                icon=weather.get("icon"),
                rain_probability=rain_probability,
            )
            continue

        day.temp_min = min(day.temp_min, main["temp_min"])
        day.temp_max = max(day.temp_max, main["temp_max"])
        day.rain_probability = max(day.rain_probability, rain_probability)

    return [grouped[key] for key in sorted(grouped)][:days]


def forecast_recommendations(days: Iterable[DailyForecast]) -> ForecastRecommendations:
    recommendations = ForecastRecommendations()
    for day in days:
        if day.rain_probability < 30 and day.humidity < 50:
            recommendations.irrigation_planning.append(
                f"{day.date}: Plan for irrigation due to low humidity and low rain probability"
            )
        if day.humidity > 75:
            recommendations.pest_management.append(f"{day.date}: Monitor for fungal diseases due to high humidity")
        if day.temp_min < FROST_TEMPERATURE:
            recommendations.crop_protection.append(f"{day.date}: Protect sensitive crops from low temperatures")
        elif day.temp_max > 30:
            recommendations.crop_protection.append(f"{day.date}: Provide shade for heat-sensitive plants")
        if day.rain_probability > 70:
            recommendations.general_advice.append(
                f"{day.date}: Good day for natural irrigation, reduce manual watering"
            )
    return recommendations
