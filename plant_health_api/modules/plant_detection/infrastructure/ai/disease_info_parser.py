# 📄 File: plant_health_api/modules/plant_detection/infrastructure/ai/disease_info_parser.py
# 🧭 Purpose (Layman Explanation):
# Reads the AI's write-up about a plant disease and pulls out four tidy lists: symptoms,
# how to diagnose it, how to treat it and how to prevent it.
# 🧪 Purpose (Technical Summary):
# Tolerant parser for generative model output. Tries a JSON object first, then header based
# section splitting with bullet detection, and reports an unparseable result as None so the
# caller can fall back to placeholders.
# 🔗 Dependencies:
# json, re, DiseaseInfo domain model
# 🔄 Connected Modules / Calls From:
# disease_info_service.DiseaseInfoService

import json
import logging
import re
from typing import Dict, List, Optional

from plant_health_api.modules.plant_detection.domain.models.detection import DiseaseInfo

logger = logging.getLogger(__name__)

SECTIONS = ("symptoms", "diagnosis", "treatment", "prevention")
MAX_ITEMS_PER_SECTION = 8
MAX_ITEM_LENGTH = 300

PLACEHOLDER_INFO = DiseaseInfo(
    symptoms=["Visual symptoms may vary", "Check for common disease signs"],
    diagnosis=["Consult with a local expert", "Compare with known disease patterns"],
    treatment=["Remove affected parts", "Apply appropriate fungicide", "Improve growing conditions"],
    prevention=["Maintain good hygiene", "Ensure proper spacing", "Monitor regularly"],
    source="placeholder",
)

# "Symptoms:", "## Treatment", "**Prevention:**", "3. Diagnosis"
_HEADER_RE = re.compile(
    r"^\s*(?:#+\s*|\d+[.)]\s*)?\**\s*(symptoms|diagnosis|treatment|prevention)\s*\**\s*(?::\s*\**\s*(.*?)|)\s*$",
    re.IGNORECASE,
)
_BULLET_RE = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+(.*\S)\s*$")
_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def placeholder_info() -> DiseaseInfo:
    return PLACEHOLDER_INFO.model_copy(deep=True)


class DiseaseInfoParser:
    """
    Turns model text into DiseaseInfo.

    parse() returns None when neither strategy finds any usable list.
    """

    def parse(self, text: Optional[str]) -> Optional[DiseaseInfo]:
        if not text or not text.strip():
            return None

        sections = self._parse_json(text)
        if sections is None:
            sections = self._parse_sections(text)

        if not any(sections.get(name) for name in SECTIONS):
            logger.debug("Disease info text had no recognisable sections")
            return None

        return DiseaseInfo(**{name: sections.get(name, []) for name in SECTIONS}, source="ai")

    def _parse_json(self, text: str) -> Optional[Dict[str, List[str]]]:
        cleaned = _FENCE_RE.sub("", text.strip())
        try:
            payload = json.loads(cleaned)
        except ValueError:
            return None
        if not isinstance(payload, dict):
            return None

        lowered = {str(key).lower(): value for key, value in payload.items()}
        return {name: self._clean_items(lowered.get(name)) for name in SECTIONS}

    def _parse_sections(self, text: str) -> Dict[str, List[str]]:
        sections: Dict[str, List[str]] = {name: [] for name in SECTIONS}
        current: Optional[str] = None

        for line in text.splitlines():
            header = _HEADER_RE.match(line)
            if header:
                current = header.group(1).lower()
                inline = (header.group(2) or "").strip(" *")
                if inline:
                    sections[current].append(inline)
                continue

            if current is None:
                continue
            bullet = _BULLET_RE.match(line)
            if bullet:
                sections[current].append(bullet.group(1))

        return {name: self._clean_items(items) for name, items in sections.items()}

    @staticmethod
    def _clean_items(value) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list):
            return []

        items = []
        for item in value:
            if not isinstance(item, (str, int, float)) or isinstance(item, bool):
                continue
            cleaned = str(item).strip().strip("*").strip()
            if cleaned:
                items.append(cleaned[:MAX_ITEM_LENGTH])
        return items[:MAX_ITEMS_PER_SECTION]
