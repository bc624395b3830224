# 📄 File: plant_health_api/modules/plant_detection/domain/services/history_service.py
# 🧭 Purpose (Layman Explanation):
# Decides which slice of a user's scan history to show: checks the page number, keeps the
# page size reasonable, and tidies up the plant/disease/date filters.
# 🧪 Purpose (Technical Summary):
# Request normalisation for the History Query Engine: page/limit validation and capping,
# filter cleanup, offset and page count arithmetic.
# 🔗 Dependencies:
# detection domain models, shared validators/helpers, settings
# 🔄 Connected Modules / Calls From:
# plant_detection query handlers (history, history stats), ai_assistant chat history

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from plant_health_api.modules.plant_detection.domain.models.detection import HistoryFilters
from plant_health_api.shared.config.settings import get_settings
from plant_health_api.shared.core.exceptions import ValidationError
from plant_health_api.shared.utils.helpers import ensure_utc, page_count
from plant_health_api.shared.utils.validators import validate_page

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def pages_for(self, total: int) -> int:
        return page_count(total, self.limit)


def normalize_page(page: int, limit: int, max_limit: Optional[int] = None) -> PageRequest:
    """
    Validate paging input and cap the page size.

    Raises:
        ValidationError: If page or limit is below 1
    """
    validate_page(page, limit)
    max_limit = max_limit or get_settings().HISTORY_MAX_LIMIT
    if limit > max_limit:
        logger.debug(f"Capping page size {limit} to {max_limit}")
        limit = max_limit
    return PageRequest(page=page, limit=limit)


def validate_date_range(start_date: Optional[datetime], end_date: Optional[datetime]) -> None:
    if start_date and end_date and ensure_utc(start_date) > ensure_utc(end_date):
        raise ValidationError(
            "start_date must not be after end_date",
            field="start_date",
            value=start_date.isoformat(),
            constraint="start_date <= end_date",
        )


def build_filters(
    user_id: str,
    plant_name: Optional[str] = None,
    disease_name: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> HistoryFilters:
    """
    Build history filters with blank names dropped and dates in UTC.

    Name filters are exact matches; the date range is inclusive on both ends.
    """
    validate_date_range(start_date, end_date)
    return HistoryFilters(
        user_id=user_id,
        plant_name=plant_name.strip() if plant_name and plant_name.strip() else None,
        disease_name=disease_name.strip() if disease_name and disease_name.strip() else None,
        start_date=ensure_utc(start_date),
        end_date=ensure_utc(end_date),
    )
