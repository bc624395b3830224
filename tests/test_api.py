# tests/test_api.py
import json
import unittest
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from plant_health_api.main import app
from plant_health_api.shared.core.exceptions import APITimeoutError
from plant_health_api.shared.infrastructure.external_apis import (
    get_gemini_client,
    get_plant_id_client,
    get_weather_client,
)
from plant_health_api.shared.infrastructure.external_apis.plant_id_client import IdentificationResult
from tests.test_weather import CURRENT_PAYLOAD
from tests.utils import (
    FakeGeminiClient,
    FakePlantIdClient,
    FakeWeatherClient,
    close_test_database,
    gemini_timeout,
    get_auth_headers,
    open_test_database,
    run,
)

API = "/api/v1"

DISEASE_INFO = {
    "symptoms": ["Brown rings on lower leaves"],
    "diagnosis": ["Concentric lesions"],
    "treatment": ["Remove infected leaves"],
    "prevention": ["Mulch the soil"],
}


class ApiTestCase(unittest.TestCase):
    def setUp(self):
        self.db_url = run(open_test_database())
        self.plant_id = FakePlantIdClient()
        self.gemini = FakeGeminiClient(text=json.dumps(DISEASE_INFO))
        self.weather = FakeWeatherClient(current=CURRENT_PAYLOAD)
        app.dependency_overrides[get_plant_id_client] = lambda: self.plant_id
        app.dependency_overrides[get_gemini_client] = lambda: self.gemini
        app.dependency_overrides[get_weather_client] = lambda: self.weather
        self.client = TestClient(app)
        self.headers = get_auth_headers("user-1")

    def tearDown(self):
        app.dependency_overrides.clear()
        run(close_test_database(self.db_url))

    def create_detection(self, plant="Tomato", disease="Early Blight", confidence=0.9, headers=None):
        response = self.client.post(
            f"{API}/detections",
            json={"plant_name": plant, "disease_name": disease, "confidence": confidence},
            headers=headers or self.headers,
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()


class TestAuthentication(ApiTestCase):
    def test_missing_token_gives_error_envelope(self):
        response = self.client.get(f"{API}/users/me/stats")

        self.assertEqual(response.status_code, 401)
        error = response.json()["error"]
        self.assertEqual(error["code"], "AUTHENTICATION_ERROR")
        self.assertIn("timestamp", error)

    def test_invalid_token(self):
        response = self.client.get(f"{API}/users/me/stats", headers={"Authorization": "Bearer not-a-jwt"})
        self.assertEqual(response.status_code, 401)


class TestDetectionEndpoints(ApiTestCase):
    def test_create_and_read_stats(self):
        for plant, disease, confidence in (
            ("Tomato", "Early Blight", 0.9),
            ("Tomato", "Early Blight", 0.85),
            ("Potato", "Late Blight", 0.4),
        ):
            self.create_detection(plant, disease, confidence)

        stats = self.client.get(f"{API}/users/me/stats", headers=self.headers).json()
        self.assertEqual(stats["total_detections"], 3)
        self.assertEqual(stats["successful_detections"], 2)
        self.assertAlmostEqual(stats["average_confidence"], 0.7167, places=4)
        self.assertAlmostEqual(stats["success_rate"], 66.67, places=2)

    def test_invalid_confidence_is_rejected(self):
        response = self.client.post(
            f"{API}/detections",
            json={"plant_name": "Tomato", "disease_name": "Early Blight", "confidence": 1.5},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["error"]["code"], "VALIDATION_ERROR")

    def test_get_update_and_delete(self):
        detection = self.create_detection()
        url = f"{API}/detections/{detection['id']}"

        self.assertEqual(self.client.get(url, headers=self.headers).json()["plant_name"], "Tomato")

        patched = self.client.patch(url, json={"notes": "lower leaves only"}, headers=self.headers)
        self.assertEqual(patched.status_code, 200)
        self.assertEqual(patched.json()["notes"], "lower leaves only")

        other = get_auth_headers("user-2")
        self.assertEqual(self.client.get(url, headers=other).status_code, 403)
        self.assertEqual(self.client.delete(url, headers=other).status_code, 403)

        self.assertEqual(self.client.delete(url, headers=self.headers).status_code, 204)
        missing = self.client.delete(url, headers=self.headers)
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json()["error"]["code"], "NOT_FOUND")

        stats = self.client.get(f"{API}/users/me/stats", headers=self.headers).json()
        self.assertEqual(stats["total_detections"], 0)

    def test_analyze_saves_result_with_disease_info(self):
        response = self.client.post(f"{API}/detections/analyze", json={"image": "aGVsbG8="}, headers=self.headers)

        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(body["plant"]["name"], "Tomato")
        self.assertEqual(body["disease"]["info_source"], "ai")
        self.assertEqual(body["disease"]["treatment"], DISEASE_INFO["treatment"])
        self.assertTrue(body["saved"])
        self.assertEqual(body["detection"]["confidence"], 0.82)

    def test_analyze_with_text_service_timeout_still_saves(self):
        self.gemini.error = gemini_timeout()

        response = self.client.post(f"{API}/detections/analyze", json={"image": "aGVsbG8="}, headers=self.headers)

        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(body["disease"]["info_source"], "placeholder")
        self.assertTrue(body["disease"]["treatment"])
        self.assertTrue(body["saved"])

        stats = self.client.get(f"{API}/users/me/stats", headers=self.headers).json()
        self.assertEqual(stats["total_detections"], 1)

    def test_analyze_without_saving(self):
        self.plant_id.result = IdentificationResult(plant_name="Apple", disease_name="Scab", confidence=0.3)
        response = self.client.post(
            f"{API}/detections/analyze",
            json={"image": "aGVsbG8=", "save": False, "latitude": 10, "longitude": 20},
            headers=self.headers,
        )

        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.json()["saved"])
        self.assertEqual(self.plant_id.calls, [{"latitude": 10, "longitude": 20}])
        stats = self.client.get(f"{API}/users/me/stats", headers=self.headers).json()
        self.assertEqual(stats["total_detections"], 0)

    def test_analyze_identification_timeout(self):
        self.plant_id.error = APITimeoutError("kindwise", timeout_seconds=30)

        response = self.client.post(f"{API}/detections/analyze", json={"image": "aGVsbG8="}, headers=self.headers)

        self.assertEqual(response.status_code, 504)
        error = response.json()["error"]
        self.assertEqual(error["code"], "EXTERNAL_API_TIMEOUT")
        self.assertTrue(error["details"]["retryable"])


class TestHistoryEndpoints(ApiTestCase):
    def test_history_pages_and_filters(self):
        for _ in range(3):
            self.create_detection("Tomato", "Early Blight", 0.7)
        self.create_detection("Potato", "Late Blight", 0.6)

        page = self.client.get(f"{API}/users/me/history?page=1&limit=2", headers=self.headers).json()
        self.assertEqual(page["pagination"], {"page": 1, "limit": 2, "total": 4, "pages": 2})
        self.assertEqual(page["detections"][0]["plant_name"], "Potato")

        filtered = self.client.get(f"{API}/users/user-1/history?disease=Early Blight", headers=self.headers).json()
        self.assertEqual(filtered["pagination"]["total"], 3)

    def test_other_users_history_is_forbidden(self):
        response = self.client.get(f"{API}/users/user-2/history", headers=self.headers)
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["error"]["code"], "AUTHORIZATION_ERROR")

    def test_invalid_page(self):
        response = self.client.get(f"{API}/users/me/history?page=0", headers=self.headers)
        self.assertEqual(response.status_code, 422)

    def test_inverted_date_range(self):
        response = self.client.get(
            f"{API}/users/me/history/stats?start_date=2024-02-01T00:00:00Z&end_date=2024-01-01T00:00:00Z",
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 422)

    def test_history_stats(self):
        self.create_detection("Tomato", "Early Blight", 0.9)
        self.create_detection("Potato", "Late Blight", 0.4)

        overview = self.client.get(f"{API}/users/me/history/stats", headers=self.headers).json()
        self.assertEqual(overview["total_detections"], 2)
        self.assertEqual(overview["success_rate"], 50.0)
        self.assertEqual(overview["average_confidence"], 65.0)


class TestAnalyticsEndpoints(ApiTestCase):
    def test_personal_analytics(self):
        self.create_detection("Tomato", "Early Blight", 0.9)
        self.create_detection("Tomato", "Early Blight", 0.85)
        self.create_detection("Potato", "Late Blight", 0.4)

        body = self.client.get(f"{API}/analytics/personal", headers=self.headers).json()

        self.assertEqual(body["overview"]["total_detections"], 3)
        self.assertEqual(body["overview"]["success_rate"], 66.67)
        self.assertEqual(body["overview"]["top_diseases"][0], {"name": "Early Blight", "count": 2, "percentage": 66.67})
        self.assertEqual(len(body["recent_activity"]), 3)
        self.assertEqual(sum(bucket["count"] for bucket in body["monthly_activity"]), 3)

    def test_global_overview(self):
        self.create_detection("Tomato", "Early Blight", 0.9)
        self.create_detection("Potato", "Late Blight", 0.5, headers=get_auth_headers("user-2"))

        body = self.client.get(f"{API}/analytics/global", headers=self.headers).json()

        self.assertEqual(body["total_users"], 2)
        self.assertEqual(body["total_detections"], 2)
        self.assertEqual(body["average_detections_per_user"], 1.0)


class TestUserEndpoints(ApiTestCase):
    def test_preferences_round_trip(self):
        defaults = self.client.get(f"{API}/users/me/preferences", headers=self.headers).json()
        self.assertEqual(defaults["language"], "en")

        updated = self.client.put(
            f"{API}/users/me/preferences", json={"language": "cs", "dark_mode": True}, headers=self.headers
        )
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["language"], "cs")
        self.assertEqual(updated.json()["units"], "metric")

        again = self.client.get(f"{API}/users/me/preferences", headers=self.headers).json()
        self.assertTrue(again["dark_mode"])

    def test_unsupported_language(self):
        response = self.client.put(f"{API}/users/me/preferences", json={"language": "xx"}, headers=self.headers)
        self.assertEqual(response.status_code, 422)

    def test_new_user_has_zero_stats(self):
        stats = self.client.get(f"{API}/users/me/stats", headers=get_auth_headers("fresh-user")).json()
        self.assertEqual(stats["total_detections"], 0)
        self.assertEqual(stats["average_confidence"], 0.0)


class TestChatEndpoints(ApiTestCase):
    def test_send_history_and_suggestions(self):
        self.gemini.text = "Water at the base of the plant."
        self.create_detection("Tomato", "Early Blight", 0.9)

        sent = self.client.post(f"{API}/chat/messages", json={"message": "How do I water?"}, headers=self.headers)
        self.assertEqual(sent.status_code, 200, sent.text)
        self.assertEqual(sent.json()["ai_response"], "Water at the base of the plant.")
        self.assertIn("Tomato - Early Blight", self.gemini.prompts[-1])

        history = self.client.get(f"{API}/chat/history", headers=self.headers).json()
        self.assertEqual(history["pagination"]["total"], 1)
        self.assertEqual(history["messages"][0]["user_message"], "How do I water?")

        suggestions = self.client.get(f"{API}/chat/suggestions", headers=self.headers).json()["suggestions"]
        self.assertEqual(len(suggestions), 5)

    def test_overlong_message(self):
        response = self.client.post(f"{API}/chat/messages", json={"message": "x" * 1001}, headers=self.headers)
        self.assertEqual(response.status_code, 422)

    def test_text_service_timeout(self):
        self.gemini.error = gemini_timeout()
        response = self.client.post(f"{API}/chat/messages", json={"message": "Hello"}, headers=self.headers)
        self.assertEqual(response.status_code, 504)


class TestWeatherAndHealth(ApiTestCase):
    def test_current_weather(self):
        response = self.client.get(f"{API}/weather/current?lat=49.2&lon=16.61", headers=self.headers)

        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(body["location"]["name"], "Brno")
        self.assertEqual(body["agricultural_insights"]["pest_risk"], "high")

    def test_weather_coordinates_out_of_range(self):
        response = self.client.get(f"{API}/weather/current?lat=95&lon=16.61", headers=self.headers)
        self.assertEqual(response.status_code, 422)

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

    def test_readiness(self):
        response = self.client.get("/health/ready")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["checks"]["redis"]["status"], "disabled")


class TestReadinessProbe(ApiTestCase):
    def test_database_down_is_not_ready(self):
        unhealthy = AsyncMock(return_value={"status": "unhealthy", "error": "connection refused"})
        with patch("plant_health_api.api.v1.health.db_manager.health_check", unhealthy):
            response = self.client.get("/health/ready")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["status"], "not_ready")

    def test_redis_down_is_degraded(self):
        redis_down = AsyncMock(return_value={"status": "unhealthy", "error": "timeout"})
        with patch("plant_health_api.api.v1.health.check_redis_health", redis_down):
            response = self.client.get("/health/ready")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "degraded")


if __name__ == "__main__":
    unittest.main()
