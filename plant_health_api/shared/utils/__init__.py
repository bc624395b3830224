# 📄 File: plant_health_api/shared/utils/__init__.py

# 🧭 Purpose (Layman Explanation):
# A collection of small tools the rest of the service uses: logging, input checks and
# date/paging helpers.

# 🧪 Purpose (Technical Summary):
# Utilities package exporting the logging setup, validators and helpers.

# 🔄 Connected Modules / Calls From:
# All application modules

from .helpers import ensure_utc, generate_id, page_count, utc_now
from .logging import get_request_id, log_context, setup_logging
from .validators import validate_confidence, validate_coordinates, validate_page, validate_required_text

__all__ = [
    "ensure_utc",
    "generate_id",
    "get_request_id",
    "log_context",
    "page_count",
    "setup_logging",
    "utc_now",
    "validate_confidence",
    "validate_coordinates",
    "validate_page",
    "validate_required_text",
]
