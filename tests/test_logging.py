# tests/test_logging.py
import json
import logging
import unittest

from pythonjsonlogger.json import JsonFormatter

from plant_health_api.shared.utils.logging import (
    JSONFormatter,
    RequestContextFilter,
    SERVICE_NAME,
    log_context,
)


def _record(message):
    return logging.LogRecord(
        name="plant_health_api.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestJSONFormatter(unittest.TestCase):
    def setUp(self):
        self.formatter = JSONFormatter("%(message)s %(module)s %(funcName)s %(lineno)d")
        self.context_filter = RequestContextFilter()

    def test_builds_on_current_json_formatter(self):
        self.assertIsInstance(self.formatter, JsonFormatter)

    def test_includes_request_context(self):
        record = _record("Recorded detection")
        with log_context(request_id="req-1", user_id="user-1"):
            self.context_filter.filter(record)

        payload = json.loads(self.formatter.format(record))
        self.assertEqual(payload["message"], "Recorded detection")
        self.assertEqual(payload["level"], "INFO")
        self.assertEqual(payload["logger"], "plant_health_api.test")
        self.assertEqual(payload["service"], SERVICE_NAME)
        self.assertEqual(payload["request_id"], "req-1")
        self.assertEqual(payload["user_id"], "user-1")
        self.assertIn("timestamp", payload)

    def test_omits_empty_context(self):
        record = _record("Startup")
        self.context_filter.filter(record)

        payload = json.loads(self.formatter.format(record))
        self.assertNotIn("request_id", payload)
        self.assertNotIn("user_id", payload)
