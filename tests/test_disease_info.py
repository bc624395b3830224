# tests/test_disease_info.py
import json
import unittest

from plant_health_api.modules.plant_detection.infrastructure.ai.disease_info_parser import (
    DiseaseInfoParser,
    placeholder_info,
)
from plant_health_api.modules.plant_detection.infrastructure.ai.disease_info_service import DiseaseInfoService
from plant_health_api.shared.core.exceptions import ExternalAPIError
from tests.utils import FakeGeminiClient, gemini_timeout

JSON_ANSWER = {
    "symptoms": ["Dark concentric spots on older leaves", "Yellowing around lesions"],
    "diagnosis": ["Target-like rings on lesions"],
    "treatment": ["Remove infected leaves", "Apply copper fungicide"],
    "prevention": ["Rotate crops", "Water at the base"],
}

MARKDOWN_ANSWER = """Here is what you should know.

**Symptoms:**
- Dark concentric spots on older leaves
- Yellowing around lesions

## Diagnosis
1. Target-like rings on lesions

Treatment: Remove infected leaves
* Apply copper fungicide

### Prevention
- Rotate crops
"""


class TestDiseaseInfoParser(unittest.TestCase):
    def setUp(self):
        self.parser = DiseaseInfoParser()

    def test_parses_json_object(self):
        info = self.parser.parse(json.dumps(JSON_ANSWER))
        self.assertEqual(info.source, "ai")
        self.assertEqual(info.treatment, JSON_ANSWER["treatment"])

    def test_parses_fenced_json(self):
        info = self.parser.parse("```json\n" + json.dumps(JSON_ANSWER) + "\n```")
        self.assertEqual(info.symptoms, JSON_ANSWER["symptoms"])

    def test_parses_markdown_sections(self):
        info = self.parser.parse(MARKDOWN_ANSWER)

        self.assertEqual(info.symptoms, ["Dark concentric spots on older leaves", "Yellowing around lesions"])
        self.assertEqual(info.diagnosis, ["Target-like rings on lesions"])
        self.assertEqual(info.treatment, ["Remove infected leaves", "Apply copper fungicide"])
        self.assertEqual(info.prevention, ["Rotate crops"])

    def test_json_keys_are_case_insensitive_and_strings_are_wrapped(self):
        info = self.parser.parse(json.dumps({"Symptoms": "Wilting", "Treatment": ["Prune", 3, None, True]}))
        self.assertEqual(info.symptoms, ["Wilting"])
        self.assertEqual(info.treatment, ["Prune", "3"])
        self.assertEqual(info.prevention, [])

    def test_section_lists_are_capped(self):
        info = self.parser.parse(json.dumps({"symptoms": [f"sign {i}" for i in range(20)]}))
        self.assertEqual(len(info.symptoms), 8)

    def test_unusable_text_gives_none(self):
        self.assertIsNone(self.parser.parse(None))
        self.assertIsNone(self.parser.parse("   "))
        self.assertIsNone(self.parser.parse("I am not sure what this plant has."))
        self.assertIsNone(self.parser.parse('{"symptoms": []}'))
        self.assertIsNone(self.parser.parse("[1, 2, 3]"))


class TestDiseaseInfoService(unittest.IsolatedAsyncioTestCase):
    async def test_successful_answer_is_used(self):
        gemini = FakeGeminiClient(text=json.dumps(JSON_ANSWER))
        info = await DiseaseInfoService(gemini).get_disease_info("Tomato", "Early Blight")

        self.assertEqual(info.source, "ai")
        self.assertEqual(info.prevention, JSON_ANSWER["prevention"])
        self.assertIn("Early Blight", gemini.prompts[0])
        self.assertIn("Tomato", gemini.prompts[0])

    async def test_timeout_falls_back_to_placeholders(self):
        info = await DiseaseInfoService(FakeGeminiClient(error=gemini_timeout())).get_disease_info("Tomato", "Early Blight")
        self.assertEqual(info, placeholder_info())
        self.assertEqual(info.source, "placeholder")

    async def test_upstream_error_falls_back_to_placeholders(self):
        gemini = FakeGeminiClient(error=ExternalAPIError("boom", api_name="gemini"))
        info = await DiseaseInfoService(gemini).get_disease_info("Tomato", "Early Blight")
        self.assertEqual(info.source, "placeholder")

    async def test_garbage_answer_falls_back_to_placeholders(self):
        gemini = FakeGeminiClient(text="no idea, sorry")
        info = await DiseaseInfoService(gemini).get_disease_info("Tomato", "Early Blight")
        self.assertEqual(info.source, "placeholder")
        self.assertTrue(info.treatment)

    def test_placeholder_copies_are_independent(self):
        first = placeholder_info()
        first.symptoms.append("changed")
        self.assertNotIn("changed", placeholder_info().symptoms)


if __name__ == "__main__":
    unittest.main()
