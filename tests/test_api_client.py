# tests/test_api_client.py
import asyncio
import unittest
from typing import Any, Dict, List, Optional

from plant_health_api.shared.config.settings import get_settings
from plant_health_api.shared.core.exceptions import (
    APIAuthenticationError,
    APIRateLimitError,
    APITimeoutError,
    ExternalAPIError,
)
from plant_health_api.shared.infrastructure.external_apis.api_client import APIClient
from plant_health_api.shared.infrastructure.external_apis.gemini_client import GeminiClient
from plant_health_api.shared.infrastructure.external_apis.plant_id_client import PlantIdentificationClient


class FakeResponse:
    def __init__(self, status: int = 200, payload: Any = None, headers: Optional[Dict[str, str]] = None):
        self.status = status
        self.payload = payload
        self.headers = headers or {}

    async def json(self, content_type=None):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload

    async def text(self):
        return str(self.payload)


class FakeRequest:
    def __init__(self, response: Optional[FakeResponse], error: Optional[BaseException]):
        self.response = response
        self.error = error

    async def __aenter__(self):
        if self.error is not None:
            raise self.error
        return self.response

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:
    """Stands in for aiohttp.ClientSession.request()."""

    closed = False

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[BaseException] = None):
        self.response = response
        self.error = error
        self.requests: List[Dict[str, Any]] = []

    def request(self, method, url, params=None, json=None, headers=None):
        self.requests.append({"method": method, "url": url, "params": params, "json": json})
        return FakeRequest(self.response, self.error)

    async def close(self):
        self.closed = True


def make_client(session: FakeSession) -> APIClient:
    client = APIClient(base_url="https://api.example.com/v1/", api_name="example", timeout=5, max_retries=1)
    client.session = session
    return client


class TestAPIClient(unittest.IsolatedAsyncioTestCase):
    async def test_successful_json_response(self):
        session = FakeSession(FakeResponse(payload={"ok": True}))
        client = make_client(session)

        data = await client.get("/status", params={"q": "1"})

        self.assertEqual(data, {"ok": True})
        self.assertEqual(session.requests[0]["url"], "https://api.example.com/v1/status")
        self.assertEqual(client.get_stats()["successful_requests"], 1)

    async def test_timeout_becomes_api_timeout(self):
        client = make_client(FakeSession(error=asyncio.TimeoutError()))

        with self.assertRaises(APITimeoutError) as ctx:
            await client.get("slow")

        self.assertEqual(ctx.exception.status_code, 504)
        self.assertEqual(ctx.exception.error_code, "EXTERNAL_API_TIMEOUT")
        self.assertEqual(client.get_stats()["timeouts"], 1)

    async def test_server_error_becomes_bad_gateway(self):
        client = make_client(FakeSession(FakeResponse(status=500, payload="internal error")))

        with self.assertRaises(ExternalAPIError) as ctx:
            await client.get("broken")

        self.assertEqual(ctx.exception.status_code, 502)
        self.assertEqual(ctx.exception.details["api_status_code"], 500)

    async def test_rejected_credentials(self):
        client = make_client(FakeSession(FakeResponse(status=401, payload="unauthorized")))
        with self.assertRaises(APIAuthenticationError):
            await client.get("secret")

    async def test_rate_limited(self):
        client = make_client(FakeSession(FakeResponse(status=429, headers={"Retry-After": "30"})))
        with self.assertRaises(APIRateLimitError):
            await client.get("busy")

    async def test_non_json_body(self):
        client = make_client(FakeSession(FakeResponse(payload=ValueError("not json"))))
        with self.assertRaises(ExternalAPIError):
            await client.get("html")


class TestPlantIdentificationClient(unittest.IsolatedAsyncioTestCase):
    async def test_top_suggestions_are_used(self):
        payload = {
            "result": {
                "crop": {"suggestions": [{"name": "Tomato", "probability": 0.97}]},
                "disease": {
                    "suggestions": [
                        {
                            "name": "Early Blight",
                            "probability": 0.82,
                            "similar_images": [{"url": "https://img/1.jpg"}, {"url": None}],
                        },
                        {"name": "Late Blight", "probability": 0.1},
                    ]
                },
            }
        }
        session = FakeSession(FakeResponse(payload=payload))
        client = PlantIdentificationClient(get_settings())
        client.session = session

        result = await client.identify("aGVsbG8=", 49.2, 16.6)

        self.assertEqual(result.plant_name, "Tomato")
        self.assertEqual(result.disease_name, "Early Blight")
        self.assertAlmostEqual(result.confidence, 0.82)
        self.assertEqual(result.similar_images, ["https://img/1.jpg"])
        self.assertTrue(session.requests[0]["json"]["images"][0].startswith("data:image/jpeg;base64,"))

    async def test_missing_result_is_an_error(self):
        client = PlantIdentificationClient(get_settings())
        client.session = FakeSession(FakeResponse(payload={"result": None}))
        with self.assertRaises(ExternalAPIError):
            await client.identify("aGVsbG8=", 49.2, 16.6)


class TestGeminiClient(unittest.IsolatedAsyncioTestCase):
    async def test_joins_candidate_parts(self):
        payload = {"candidates": [{"content": {"parts": [{"text": "Hello "}, {"text": "grower"}]}}]}
        session = FakeSession(FakeResponse(payload=payload))
        client = GeminiClient(get_settings())
        client.session = session

        text = await client.generate_text("Hi", json_output=True, temperature=0.2)

        self.assertEqual(text, "Hello grower")
        config = session.requests[0]["json"]["generationConfig"]
        self.assertEqual(config["responseMimeType"], "application/json")

    async def test_empty_candidates_are_an_error(self):
        client = GeminiClient(get_settings())
        client.session = FakeSession(FakeResponse(payload={"candidates": []}))
        with self.assertRaises(ExternalAPIError):
            await client.generate_text("Hi")


if __name__ == "__main__":
    unittest.main()
