# 📄 File: plant_health_api/modules/plant_detection/application/queries/detection_queries.py
# 🧭 Purpose (Layman Explanation):
# The "show me" requests: one scan, a page of my history, my statistics for a period, my
# analytics screen, and the community overview.
# 🧪 Purpose (Technical Summary):
# CQRS query definitions for the plant_detection module. Every user scoped query carries the
# requesting user so handlers can enforce ownership.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# application.handlers.query_handlers, presentation.api.v1 (detections, history, analytics)

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class GetDetectionQuery(BaseModel):
    requesting_user_id: str
    detection_id: str


class QueryHistoryQuery(BaseModel):
    requesting_user_id: str
    user_id: str
    page: int = 1
    limit: int = 20
    plant_name: Optional[str] = None
    disease_name: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class HistoryStatsQuery(BaseModel):
    requesting_user_id: str
    user_id: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class PersonalAnalyticsQuery(BaseModel):
    user_id: str


class GlobalOverviewQuery(BaseModel):
    refresh: bool = False
