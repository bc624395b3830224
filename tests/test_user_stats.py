# tests/test_user_stats.py
import unittest

from pydantic import ValidationError as PydanticValidationError

from plant_health_api.modules.user_management.domain.models.user import (
    UserPreferences,
    UserStats,
    is_successful_detection,
)


class TestUserStats(unittest.TestCase):
    def test_zero_stats(self):
        stats = UserStats()
        self.assertEqual(stats.average_confidence, 0.0)
        self.assertEqual(stats.success_rate, 0.0)

    def test_derived_values(self):
        stats = UserStats(total_detections=3, successful_detections=2, sum_confidence=2.15)
        self.assertAlmostEqual(stats.average_confidence, 0.716667, places=5)
        self.assertAlmostEqual(stats.success_rate, 66.6667, places=3)

    def test_successful_cannot_exceed_total(self):
        with self.assertRaises(PydanticValidationError):
            UserStats(total_detections=1, successful_detections=2)

    def test_counts_cannot_be_negative(self):
        with self.assertRaises(PydanticValidationError):
            UserStats(total_detections=-1)

    def test_success_threshold_is_strict(self):
        self.assertFalse(is_successful_detection(0.5))
        self.assertTrue(is_successful_detection(0.51))


class TestUserPreferences(unittest.TestCase):
    def test_defaults(self):
        prefs = UserPreferences()
        self.assertEqual(prefs.language, "en")
        self.assertEqual(prefs.units, "metric")
        self.assertTrue(prefs.notifications)

    def test_unknown_language_rejected(self):
        with self.assertRaises(PydanticValidationError):
            UserPreferences(language="xx")


if __name__ == "__main__":
    unittest.main()
