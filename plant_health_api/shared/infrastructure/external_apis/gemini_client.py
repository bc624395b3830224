# 📄 File: plant_health_api/shared/infrastructure/external_apis/gemini_client.py

# 🧭 Purpose (Layman Explanation):
# Asks Google's Gemini model to write text for us, such as advice about a plant disease
# or an answer to a gardener's chat question.

# 🧪 Purpose (Technical Summary):
# Gemini generateContent client built on APIClient, with an optional JSON response mode
# and extraction of the first candidate's text.

# 🔗 Dependencies:
# - APIClient (aiohttp + tenacity)

# 🔄 Connected Modules / Calls From:
# - plant_detection DiseaseInfoService (symptom/treatment enrichment)
# - ai_assistant ChatService (chat replies)

import logging
from typing import Optional

from plant_health_api.shared.config.settings import Settings
from plant_health_api.shared.core.exceptions import ExternalAPIError

from .api_client import APIClient

logger = logging.getLogger(__name__)


class GeminiClient(APIClient):
    """Client for the Gemini text generation endpoint."""

    def __init__(self, settings: Settings):
        super().__init__(
            base_url=settings.GOOGLE_GEMINI_API_URL,
            api_name="gemini",
            timeout=settings.GOOGLE_GEMINI_TIMEOUT,
            max_retries=settings.EXTERNAL_API_MAX_RETRIES,
            default_headers={"x-goog-api-key": settings.GOOGLE_GEMINI_API_KEY},
        )
        self.model = settings.GOOGLE_GEMINI_MODEL

    async def generate_text(
        self,
        prompt: str,
        json_output: bool = False,
        temperature: Optional[float] = None,
    ) -> str:
        """
        Generate text for a prompt.

        Args:
            prompt: Full prompt text
            json_output: Ask the model to answer with application/json
            temperature: Optional sampling temperature

        Returns:
            str: Text of the first candidate

        Raises:
            APITimeoutError: If the model exceeds its deadline
            ExternalAPIError: If the call fails or the answer has no text
        """
        body = {"contents": [{"parts": [{"text": prompt}]}]}
        generation_config = {}
        if json_output:
            generation_config["responseMimeType"] = "application/json"
        if temperature is not None:
            generation_config["temperature"] = temperature
        if generation_config:
            body["generationConfig"] = generation_config

        response = await self.post(f"models/{self.model}:generateContent", data=body)

        try:
            parts = response["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError):
            raise ExternalAPIError("Generative text service returned no candidates", api_name=self.api_name)

        if not text.strip():
            raise ExternalAPIError("Generative text service returned empty text", api_name=self.api_name)
        return text
