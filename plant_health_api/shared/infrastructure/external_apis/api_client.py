# 📄 File: plant_health_api/shared/infrastructure/external_apis/api_client.py

# 🧭 Purpose (Layman Explanation):
# A careful messenger for talking to partner services (plant identification, AI text, weather):
# it gives up after a set time, tries again when the line drops, and explains clearly
# whether the partner was slow, refused our key, or simply failed.

# 🧪 Purpose (Technical Summary):
# Generic async HTTP client on aiohttp with per-request timeouts, tenacity retries for
# connection failures, HTTP status to exception mapping and lightweight request statistics.

# 🔗 Dependencies:
# - aiohttp: Async HTTP client
# - tenacity: Retry logic and backoff strategies
# - plant_health_api.shared.core.exceptions

# 🔄 Connected Modules / Calls From:
# Used by: PlantIdentificationClient, GeminiClient, WeatherClient

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import aiohttp
from aiohttp import ClientSession, ClientTimeout
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from plant_health_api.shared.core.exceptions import (
    APIAuthenticationError,
    APIRateLimitError,
    APITimeoutError,
    ExternalAPIError,
)

logger = logging.getLogger(__name__)

# Failures to reach the host at all; a slow answer is not retried here
RETRYABLE_ERRORS = (aiohttp.ClientConnectorError, aiohttp.ServerDisconnectedError)


class APIClient:
    """
    Generic async HTTP client for external API integrations.

    Features:
    - Explicit total timeout per request
    - Retry with exponential backoff on connection failures
    - Status code to exception mapping (auth / rate limit / error)
    - Request statistics
    """

    def __init__(
        self,
        base_url: str,
        api_name: str,
        timeout: float = 30,
        max_retries: int = 3,
        default_headers: Optional[Dict[str, str]] = None,
        default_params: Optional[Dict[str, str]] = None,
    ):
        """Initialize API client with configuration."""
        self.base_url = base_url.rstrip("/")
        self.api_name = api_name
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.default_headers = default_headers or {}
        self.default_params = default_params or {}

        self.session: Optional[ClientSession] = None

        self.stats = {
            "total_requests": 0,
            "successful_requests": 0,
            "failed_requests": 0,
            "timeouts": 0,
            "average_response_time": 0.0,
            "last_request_time": None,
        }

    async def initialize(self) -> None:
        """Create the aiohttp session."""
        if self.session is not None and not self.session.closed:
            return

        self.session = ClientSession(
            timeout=ClientTimeout(total=self.timeout),
            headers={
                "User-Agent": f"PlantHealthAPI/1.0 ({self.api_name}-client)",
                "Accept": "application/json",
                **self.default_headers,
            },
        )
        logger.info(f"API client initialized for {self.api_name}")

    def _build_url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """Make HTTP request, translating transport failures into API exceptions."""
        if self.session is None or self.session.closed:
            await self.initialize()

        url = self._build_url(endpoint)
        request_params = {**self.default_params, **(params or {})}
        start_time = time.monotonic()
        self.stats["total_requests"] += 1
        self.stats["last_request_time"] = datetime.now(timezone.utc).isoformat()

        try:
            retrying = retry(
                stop=stop_after_attempt(self.max_retries),
                wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
                retry=retry_if_exception_type(RETRYABLE_ERRORS),
                before_sleep=before_sleep_log(logger, logging.WARNING),
                reraise=True,
            )
            data = await retrying(self._send)(method, url, request_params, json_body, headers)
        except Exception as e:
            self.stats["failed_requests"] += 1
            raise self._transform_exception(e, method, url)

        response_time = time.monotonic() - start_time
        self.stats["successful_requests"] += 1
        self._record_response_time(response_time)
        logger.info(f"{self.api_name} API request successful: {method} {endpoint} - {response_time:.2f}s")
        return data

    async def _send(
        self,
        method: str,
        url: str,
        params: Dict[str, Any],
        json_body: Optional[Dict[str, Any]],
        headers: Optional[Dict[str, str]],
    ) -> Dict[str, Any]:
        async with self.session.request(
            method,
            url,
            params=params or None,
            json=json_body,
            headers=headers,
        ) as response:
            await self._handle_response_status(response)
            try:
                return await response.json(content_type=None)
            except ValueError:
                text = await response.text()
                raise ExternalAPIError(
                    f"{self.api_name} returned a non-JSON response",
                    api_name=self.api_name,
                    api_status_code=response.status,
                    details={"body": text[:200]},
                )

    async def _handle_response_status(self, response: aiohttp.ClientResponse) -> None:
        """Handle HTTP response status codes."""
        if response.status < 400:
            return
        if response.status in (401, 403):
            raise APIAuthenticationError(self.api_name, api_status_code=response.status)
        if response.status == 429:
            raise APIRateLimitError(self.api_name, retry_after=response.headers.get("Retry-After"))

        response_text = await response.text()
        kind = "Client" if response.status < 500 else "Server"
        raise ExternalAPIError(
            f"{kind} error from {self.api_name} ({response.status})",
            api_name=self.api_name,
            api_status_code=response.status,
            details={"body": response_text[:200]},
        )

    def _transform_exception(self, exception: Exception, method: str, url: str) -> Exception:
        """Transform exceptions to appropriate API exceptions."""
        if isinstance(exception, ExternalAPIError):
            logger.warning(f"{self.api_name} API error for {method} {url}: {exception.message}")
            return exception
        if isinstance(exception, asyncio.TimeoutError):
            self.stats["timeouts"] += 1
            logger.warning(f"{self.api_name} API timed out after {self.timeout}s: {method} {url}")
            return APITimeoutError(self.api_name, timeout_seconds=self.timeout)
        if isinstance(exception, aiohttp.ClientError):
            logger.error(f"{self.api_name} API transport error for {method} {url}: {exception}")
            return ExternalAPIError(
                f"Could not reach {self.api_name}: {exception}",
                api_name=self.api_name,
            )
        return exception

    def _record_response_time(self, response_time: float) -> None:
        if self.stats["average_response_time"] == 0:
            self.stats["average_response_time"] = response_time
        else:
            self.stats["average_response_time"] = (
                self.stats["average_response_time"] * 0.7 + response_time * 0.3
            )

    async def get(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """Make GET request."""
        return await self._make_request("GET", endpoint, params=params, headers=headers)

    async def post(
        self,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """Make POST request with a JSON body."""
        return await self._make_request("POST", endpoint, params=params, json_body=data, headers=headers)

    def get_stats(self) -> Dict[str, Any]:
        """Get client performance statistics."""
        return {
            **self.stats,
            "api_name": self.api_name,
            "error_rate": (
                self.stats["failed_requests"] / max(self.stats["total_requests"], 1)
            ) * 100,
        }

    async def close(self) -> None:
        """Close the client session and cleanup resources."""
        if self.session is not None:
            await self.session.close()
            self.session = None
        logger.info(f"API client closed for {self.api_name}")
