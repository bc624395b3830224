# 📄 File: plant_health_api/shared/utils/helpers.py

# 🧭 Purpose (Layman Explanation):
# Small shortcuts shared by the whole service: making new ids, reading "now" in one timezone,
# and turning dates into the month and week labels shown on activity charts.

# 🧪 Purpose (Technical Summary):
# General purpose helpers for id generation, UTC normalisation of datetimes (SQLite returns
# naive values), calendar bucket keys and pagination arithmetic.

# 🔗 Dependencies:
# - uuid: Unique identifier generation
# - datetime: Timezone handling

# 🔄 Connected Modules / Calls From:
# Used by: repositories (ids, timestamps), analytics service (bucket keys),
# history and chat queries (page counts)

import math
from datetime import datetime, timezone
from typing import Optional, Union
from uuid import uuid4


def generate_id() -> str:
    """Generate a random UUID4 string identifier."""
    return str(uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalise a datetime to an aware UTC value.

    Naive datetimes are taken to already be in UTC, which is how the
    store writes them.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def month_key(value: datetime) -> str:
    """Calendar month bucket in UTC, e.g. '2024-03'."""
    value = ensure_utc(value)
    return f"{value.year:04d}-{value.month:02d}"


def iso_week_key(value: datetime) -> str:
    """ISO week bucket in UTC, e.g. '2024-W09'."""
    iso_year, iso_week, _ = ensure_utc(value).isocalendar()
    return f"{iso_year:04d}-W{iso_week:02d}"


def day_key(value: datetime) -> str:
    return ensure_utc(value).date().isoformat()


def page_count(total: int, limit: int) -> int:
    """Number of pages needed for total items, zero when there are none."""
    if total <= 0:
        return 0
    return math.ceil(total / limit)


def clamp(value: Union[int, float], min_val: Union[int, float], max_val: Union[int, float]) -> Union[int, float]:
    return max(min_val, min(value, max_val))
