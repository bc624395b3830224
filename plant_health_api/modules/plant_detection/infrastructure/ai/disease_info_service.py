# 📄 File: plant_health_api/modules/plant_detection/infrastructure/ai/disease_info_service.py
# 🧭 Purpose (Layman Explanation):
# Asks the AI for advice about a detected disease. If the AI is slow, broken or rambles,
# the scan is still saved, just with general advice instead.
# 🧪 Purpose (Technical Summary):
# Best-effort enrichment of a detection with symptom/diagnosis/treatment/prevention lists via
# Gemini JSON mode and DiseaseInfoParser. Upstream failures never propagate.
# 🔗 Dependencies:
# GeminiClient, DiseaseInfoParser, shared exceptions
# 🔄 Connected Modules / Calls From:
# plant_detection AnalyzeImageCommandHandler

import logging
from typing import Optional

from fastapi import Depends

from plant_health_api.modules.plant_detection.domain.models.detection import DiseaseInfo
from plant_health_api.modules.plant_detection.infrastructure.ai.disease_info_parser import (
    DiseaseInfoParser,
    placeholder_info,
)
from plant_health_api.shared.core.exceptions import APITimeoutError, ExternalAPIError
from plant_health_api.shared.infrastructure.external_apis import get_gemini_client
from plant_health_api.shared.infrastructure.external_apis.gemini_client import GeminiClient

logger = logging.getLogger(__name__)

DISEASE_INFO_PROMPT = """You are a plant pathologist helping gardeners and farmers.
Describe the disease "{disease}" affecting the plant "{plant}".

Answer with a JSON object with exactly these keys, each a list of short practical strings:
- "symptoms": 3 to 5 key symptoms
- "diagnosis": 2 to 3 diagnostic points
- "treatment": 3 to 4 treatment methods
- "prevention": 3 to 4 prevention strategies
"""


class DiseaseInfoService:
    """Fetches care guidance for a plant/disease pair, falling back to placeholders."""

    def __init__(self, gemini_client: GeminiClient, parser: Optional[DiseaseInfoParser] = None):
        self._gemini = gemini_client
        self._parser = parser or DiseaseInfoParser()

    async def get_disease_info(self, plant_name: str, disease_name: str) -> DiseaseInfo:
        prompt = DISEASE_INFO_PROMPT.format(plant=plant_name, disease=disease_name)

        try:
            text = await self._gemini.generate_text(prompt, json_output=True, temperature=0.2)
        except APITimeoutError as e:
            logger.warning(f"Disease info timed out for {plant_name}/{disease_name}: {e.message}")
            return placeholder_info()
        except ExternalAPIError as e:
            logger.warning(f"Disease info unavailable for {plant_name}/{disease_name}: {e.message}")
            return placeholder_info()

        info = self._parser.parse(text)
        if info is None:
            logger.warning(f"Unparseable disease info for {plant_name}/{disease_name}, using placeholders")
            return placeholder_info()
        return info


def get_disease_info_service(
    gemini_client: GeminiClient = Depends(get_gemini_client),
) -> DiseaseInfoService:
    return DiseaseInfoService(gemini_client)
