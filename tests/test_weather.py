# tests/test_weather.py
import json
import unittest
from datetime import datetime, timezone

from plant_health_api.modules.weather.application.handlers.weather_handlers import (
    CurrentWeatherQueryHandler,
    ForecastQueryHandler,
)
from plant_health_api.modules.weather.application.queries.weather_queries import CurrentWeatherQuery, ForecastQuery
from plant_health_api.modules.weather.domain.models.weather import CurrentConditions
from plant_health_api.modules.weather.domain.services.insights import (
    agricultural_insights,
    daily_forecast,
    forecast_recommendations,
)
from plant_health_api.shared.config.redis import CacheConfig, CacheManager
from plant_health_api.shared.core.exceptions import ExternalAPIError, ValidationError
from tests.utils import FakeWeatherClient

CURRENT_PAYLOAD = {
    "coord": {"lat": 49.2, "lon": 16.61},
    "name": "Brno",
    "sys": {"country": "CZ"},
    "main": {"temp": 18.5, "feels_like": 18.0, "humidity": 85, "pressure": 1012},
    "wind": {"speed": 3.2, "deg": 200},
    "weather": [{"description": "light rain", "icon": "10d"}],
    "visibility": 10000,
    "clouds": {"all": 75},
}


def _ts(day: int, hour: int) -> int:
    return int(datetime(2024, 6, day, hour, tzinfo=timezone.utc).timestamp())


def _entry(day, hour, tmin, tmax, humidity=60, pop=0.0, description="clear sky"):
    return {
        "dt": _ts(day, hour),
        "main": {"temp_min": tmin, "temp_max": tmax, "humidity": humidity},
        "wind": {"speed": 4.0},
        "weather": [{"description": description, "icon": "01d"}],
        "pop": pop,
    }


class FakeRedis:
    def __init__(self):
        self.values = {}
        self.ttls = {}

    async def get(self, key):
        return self.values.get(key)

    async def set(self, key, value, ex=None):
        self.values[key] = value
        self.ttls[key] = ex

    async def delete(self, key):
        self.values.pop(key, None)


class TestAgriculturalInsights(unittest.TestCase):
    def test_mild_weather_is_low_risk(self):
        insights = agricultural_insights(CurrentConditions(temperature=18, humidity=60, description="clear sky"))
        self.assertEqual(insights.risk_level, "low")
        self.assertEqual(insights.plant_health, "good")
        self.assertEqual(insights.recommendations, [])

    def test_frost(self):
        insights = agricultural_insights(CurrentConditions(temperature=2, humidity=60))
        self.assertEqual(insights.risk_level, "high")
        self.assertEqual(insights.plant_health, "at_risk")

    def test_heat(self):
        insights = agricultural_insights(CurrentConditions(temperature=36, humidity=60))
        self.assertEqual(insights.risk_level, "high")
        self.assertEqual(insights.plant_health, "stressed")

    def test_wind_never_lowers_risk(self):
        insights = agricultural_insights(CurrentConditions(temperature=2, humidity=60, wind_speed=25))
        self.assertEqual(insights.risk_level, "high")

        windy = agricultural_insights(CurrentConditions(temperature=18, humidity=60, wind_speed=25))
        self.assertEqual(windy.risk_level, "medium")

    def test_humidity_rules(self):
        humid = agricultural_insights(CurrentConditions(temperature=18, humidity=90))
        self.assertEqual(humid.pest_risk, "high")

        dry = agricultural_insights(CurrentConditions(temperature=18, humidity=20))
        self.assertTrue(dry.irrigation_needed)

    def test_rain_cancels_irrigation(self):
        insights = agricultural_insights(CurrentConditions(temperature=18, humidity=20, description="Light Rain"))
        self.assertFalse(insights.irrigation_needed)
        self.assertIn("Natural irrigation from rain", insights.recommendations)


class TestDailyForecast(unittest.TestCase):
    def test_groups_by_utc_day(self):
        entries = [
            _entry(1, 21, 14, 18, pop=0.2),
            _entry(2, 0, 10, 13, pop=0.9),
            _entry(1, 9, 12, 24, humidity=40, pop=0.1),
            _entry(2, 12, 15, 26, pop=0.3),
        ]
        days = daily_forecast(entries)

        self.assertEqual([d.date for d in days], ["2024-06-01", "2024-06-02"])
        self.assertEqual((days[0].temp_min, days[0].temp_max), (12, 24))
        self.assertAlmostEqual(days[0].rain_probability, 20.0)
        self.assertAlmostEqual(days[1].rain_probability, 90.0)
        self.assertEqual(days[1].temp_min, 10)

    def test_caps_at_five_days(self):
        entries = [_entry(day, 12, 10, 20) for day in range(1, 9)]
        days = daily_forecast(entries)
        self.assertEqual(len(days), 5)
        self.assertEqual(days[-1].date, "2024-06-05")

    def test_recommendations(self):
        days = daily_forecast([
            _entry(1, 12, 3, 12, humidity=40, pop=0.1),
            _entry(2, 12, 20, 33, humidity=80, pop=0.8),
        ])
        recommendations = forecast_recommendations(days)

        self.assertEqual(len(recommendations.irrigation_planning), 1)
        self.assertTrue(recommendations.irrigation_planning[0].startswith("2024-06-01"))
        self.assertEqual(len(recommendations.pest_management), 1)
        self.assertEqual(len(recommendations.crop_protection), 2)
        self.assertEqual(len(recommendations.general_advice), 1)


class TestWeatherHandlers(unittest.IsolatedAsyncioTestCase):
    async def test_current_weather(self):
        client = FakeWeatherClient(current=CURRENT_PAYLOAD)
        weather = await CurrentWeatherQueryHandler(client, CacheManager(None)).handle(
            CurrentWeatherQuery(latitude=49.2, longitude=16.61)
        )

        self.assertEqual(weather.location.name, "Brno")
        self.assertEqual(weather.current.humidity, 85)
        self.assertEqual(weather.agricultural_insights.pest_risk, "high")

    async def test_current_weather_is_cached(self):
        redis = FakeRedis()
        client = FakeWeatherClient(current=CURRENT_PAYLOAD)
        handler = CurrentWeatherQueryHandler(client, CacheManager(redis))

        first = await handler.handle(CurrentWeatherQuery(latitude=49.2001, longitude=16.6101))
        second = await handler.handle(CurrentWeatherQuery(latitude=49.2, longitude=16.61))

        self.assertEqual(client.calls, 1)
        self.assertEqual(first.current, second.current)
        self.assertIn("weather:current:49.20:16.61", redis.values)
        self.assertEqual(json.loads(redis.values["weather:current:49.20:16.61"])["location"]["name"], "Brno")

    async def test_invalid_coordinates(self):
        handler = CurrentWeatherQueryHandler(FakeWeatherClient(), CacheManager(None))
        with self.assertRaises(ValidationError):
            await handler.handle(CurrentWeatherQuery(latitude=91, longitude=0))

    async def test_malformed_payload(self):
        handler = CurrentWeatherQueryHandler(FakeWeatherClient(current={"name": "Nowhere"}), CacheManager(None))
        with self.assertRaises(ExternalAPIError):
            await handler.handle(CurrentWeatherQuery(latitude=10, longitude=10))

    async def test_forecast(self):
        payload = {
            "city": {"name": "Brno", "country": "CZ", "coord": {"lat": 49.2, "lon": 16.61}},
            "list": [_entry(1, 9, 12, 24), _entry(1, 15, 14, 27), _entry(2, 9, 11, 20, pop=0.75)],
        }
        redis = FakeRedis()
        forecast = await ForecastQueryHandler(FakeWeatherClient(forecast=payload), CacheManager(redis)).handle(
            ForecastQuery(latitude=49.2, longitude=16.61)
        )

        self.assertEqual(len(forecast.forecast), 2)
        self.assertEqual(forecast.forecast[0].temp_max, 27)
        self.assertEqual(len(forecast.agricultural_recommendations.general_advice), 1)
        key = "weather:forecast:49.20:16.61"
        self.assertIn(key, redis.values)
        self.assertEqual(redis.ttls[key], 2 * CacheConfig.get_ttl("weather_current"))


if __name__ == "__main__":
    unittest.main()
