# 📄 File: plant_health_api/shared/infrastructure/external_apis/plant_id_client.py

# 🧭 Purpose (Layman Explanation):
# Sends a photo of a plant to the crop health identification service and reads back
# which plant it is, which disease it most likely has, and how sure the service is.

# 🧪 Purpose (Technical Summary):
# Kindwise crop.health client built on APIClient: posts a base64 data URI with coordinates
# and maps the top crop and disease suggestions into an IdentificationResult.

# 🔗 Dependencies:
# - APIClient (aiohttp + tenacity)
# - pydantic for the result model

# 🔄 Connected Modules / Calls From:
# - plant_detection AnalyzeImageHandler

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from plant_health_api.shared.config.settings import Settings
from plant_health_api.shared.core.exceptions import ExternalAPIError

from .api_client import APIClient

logger = logging.getLogger(__name__)

UNKNOWN_PLANT = "Unknown Plant"
NO_DISEASE = "No Disease Detected"


class IdentificationResult(BaseModel):
    """Top suggestions returned by the identification service."""
    plant_name: str = UNKNOWN_PLANT
    plant_confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    disease_name: str = NO_DISEASE
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    similar_images: List[str] = Field(default_factory=list)


def _top_suggestion(section: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    suggestions = (section or {}).get("suggestions") or []
    return suggestions[0] if suggestions else {}


def _clamp_probability(value: Any) -> float:
    try:
        probability = float(value or 0.0)
    except (TypeError, ValueError):
        return 0.0
    return min(max(probability, 0.0), 1.0)


class PlantIdentificationClient(APIClient):
    """Client for the Kindwise crop health identification endpoint."""

    def __init__(self, settings: Settings):
        super().__init__(
            base_url=settings.KINDWISE_API_URL,
            api_name="kindwise",
            timeout=settings.KINDWISE_TIMEOUT,
            max_retries=settings.EXTERNAL_API_MAX_RETRIES,
            default_headers={"Api-Key": settings.KINDWISE_API_KEY},
        )

    async def identify(
        self,
        image_base64: str,
        latitude: float,
        longitude: float,
    ) -> IdentificationResult:
        """
        Identify the crop and its most likely disease from an image.

        Args:
            image_base64: Raw base64 image or a complete data URI
            latitude: Capture latitude
            longitude: Capture longitude

        Returns:
            IdentificationResult: Top crop and disease suggestions

        Raises:
            APITimeoutError: If the service exceeds its deadline
            ExternalAPIError: If the service fails or returns no result
        """
        image = image_base64
        if not image.startswith("data:"):
            image = f"data:image/jpeg;base64,{image}"

        payload = {
            "images": [image],
            "latitude": latitude,
            "longitude": longitude,
            "similar_images": True,
        }
        response = await self.post("identification", data=payload)

        result = response.get("result")
        if not result:
            raise ExternalAPIError(
                "No identification result from plant identification service",
                api_name=self.api_name,
            )

        crop = _top_suggestion(result.get("crop"))
        disease = _top_suggestion(result.get("disease"))
        similar = [
            image_info.get("url")
            for image_info in disease.get("similar_images") or []
            if image_info.get("url")
        ]

        identification = IdentificationResult(
            plant_name=crop.get("name") or UNKNOWN_PLANT,
            plant_confidence=_clamp_probability(crop.get("probability")),
            disease_name=disease.get("name") or NO_DISEASE,
            confidence=_clamp_probability(disease.get("probability")),
            similar_images=similar,
        )
        logger.info(
            f"Identified {identification.plant_name} / {identification.disease_name} "
            f"({identification.confidence:.2f})"
        )
        return identification
