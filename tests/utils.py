# tests/utils.py
import asyncio
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from plant_health_api.modules.plant_detection.domain.models.detection import DetectionEvent
from plant_health_api.shared.core.exceptions import APITimeoutError
from plant_health_api.shared.core.security import create_access_token
from plant_health_api.shared.infrastructure.database.connection import db_manager
from plant_health_api.shared.infrastructure.database.session import session_manager
from plant_health_api.shared.infrastructure.external_apis.plant_id_client import IdentificationResult


def get_auth_headers(user_id: str = "user-1", roles: Optional[List[str]] = None) -> Dict[str, str]:
    token = create_access_token({"sub": user_id, "email": f"{user_id}@example.com", "roles": roles or ["user"]})
    return {"Authorization": f"Bearer {token}"}


def new_database_url() -> str:
    path = os.path.join(os.environ["TEST_DB_DIR"], f"{uuid4().hex}.db")
    return f"sqlite+aiosqlite:///{path}"


async def open_test_database() -> str:
    """Point the global engine and session manager at a fresh SQLite file."""
    url = new_database_url()
    await db_manager.close()
    await db_manager.initialize(create_async_engine(url, poolclass=NullPool))
    await db_manager.create_tables()
    session_manager.initialize()
    return url


async def close_test_database(url: str) -> None:
    await db_manager.close()
    session_manager.reset()
    path = url.split(":///", 1)[1]
    if os.path.exists(path):
        os.remove(path)


def run(coro):
    return asyncio.run(coro)


def make_event(
    plant: str,
    disease: str,
    confidence: float,
    created_at: Optional[datetime] = None,
    user_id: str = "user-1",
) -> DetectionEvent:
    return DetectionEvent(
        id=str(uuid4()),
        user_id=user_id,
        plant_name=plant,
        disease_name=disease,
        confidence=confidence,
        created_at=created_at or datetime(2024, 3, 1, tzinfo=timezone.utc),
    )


def days_ago(days: int) -> datetime:
    return datetime.now(timezone.utc) - timedelta(days=days)


class FakeGeminiClient:
    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.prompts: List[str] = []

    async def generate_text(self, prompt: str, json_output: bool = False, temperature: Optional[float] = None) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


class FakePlantIdClient:
    def __init__(self, result: Optional[IdentificationResult] = None, error: Optional[Exception] = None):
        self.result = result or IdentificationResult(
            plant_name="Tomato",
            plant_confidence=0.97,
            disease_name="Early Blight",
            confidence=0.82,
        )
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def identify(self, image_base64: str, latitude: float, longitude: float) -> IdentificationResult:
        self.calls.append({"latitude": latitude, "longitude": longitude})
        if self.error is not None:
            raise self.error
        return self.result


class FakeWeatherClient:
    def __init__(self, current: Optional[Dict[str, Any]] = None, forecast: Optional[Dict[str, Any]] = None):
        self.current = current
        self.forecast = forecast
        self.calls = 0

    async def get_current(self, latitude: float, longitude: float) -> Dict[str, Any]:
        self.calls += 1
        return self.current

    async def get_forecast(self, latitude: float, longitude: float) -> Dict[str, Any]:
        self.calls += 1
        return self.forecast


def gemini_timeout() -> APITimeoutError:
    return APITimeoutError("gemini", timeout_seconds=60)
