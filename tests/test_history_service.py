# tests/test_history_service.py
import unittest
from datetime import datetime, timezone

from plant_health_api.modules.plant_detection.domain.services.history_service import (
    build_filters,
    normalize_page,
)
from plant_health_api.shared.core.exceptions import ValidationError


class TestNormalizePage(unittest.TestCase):
    def test_limit_is_capped(self):
        page = normalize_page(1, 500)
        self.assertEqual(page.limit, 100)

    def test_rejects_page_below_one(self):
        with self.assertRaises(ValidationError) as ctx:
            normalize_page(0, 20)
        self.assertEqual(ctx.exception.details["field"], "page")

    def test_rejects_limit_below_one(self):
        with self.assertRaises(ValidationError):
            normalize_page(1, 0)

    def test_offset_and_page_count(self):
        page = normalize_page(3, 20)
        self.assertEqual(page.offset, 40)
        self.assertEqual(page.pages_for(41), 3)
        self.assertEqual(page.pages_for(40), 2)
        self.assertEqual(page.pages_for(0), 0)


class TestBuildFilters(unittest.TestCase):
    def test_blank_names_are_dropped(self):
        filters = build_filters("user-1", plant_name="  ", disease_name=" Early Blight ")
        self.assertIsNone(filters.plant_name)
        self.assertEqual(filters.disease_name, "Early Blight")

    def test_naive_dates_are_taken_as_utc(self):
        filters = build_filters("user-1", start_date=datetime(2024, 1, 1))
        self.assertEqual(filters.start_date, datetime(2024, 1, 1, tzinfo=timezone.utc))

    def test_inverted_range_rejected(self):
        with self.assertRaises(ValidationError):
            build_filters(
                "user-1",
                start_date=datetime(2024, 2, 1, tzinfo=timezone.utc),
                end_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            )


if __name__ == "__main__":
    unittest.main()
