# 📄 File: plant_health_api/modules/plant_detection/presentation/api/schemas/analytics_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of the analytics screen data: overview numbers, top lists and activity charts.
# 🧪 Purpose (Technical Summary):
# Pydantic response schemas for personal and global analytics. Percentages are rounded to
# two decimals here; the domain keeps full precision.
# 🔗 Dependencies:
# pydantic, plant_detection domain models
# 🔄 Connected Modules / Calls From:
# presentation.api.v1.analytics, presentation.api.v1.history (stats)

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from plant_health_api.modules.plant_detection.domain.models.detection import (
    ActivityBucket,
    DetectionSummary,
    GlobalOverview,
    MonthlyGrowth,
    PersonalAnalytics,
    PersonalOverview,
    RankedEntity,
)

PERCENT_DECIMALS = 2


def _pct(value: float) -> float:
    return round(value, PERCENT_DECIMALS)


class RankedEntityResponse(BaseModel):
    name: str
    count: int
    percentage: float

    @classmethod
    def from_domain(cls, entity: RankedEntity) -> "RankedEntityResponse":
        return cls(name=entity.name, count=entity.count, percentage=_pct(entity.percentage))


class PersonalOverviewResponse(BaseModel):
    total_detections: int
    successful_detections: int
    success_rate: float
    average_confidence: float
    top_diseases: List[RankedEntityResponse]
    top_plants: List[RankedEntityResponse]

    @classmethod
    def from_domain(cls, overview: PersonalOverview) -> "PersonalOverviewResponse":
        return cls(
            total_detections=overview.total_detections,
            successful_detections=overview.successful_detections,
            success_rate=_pct(overview.success_rate),
            average_confidence=_pct(overview.average_confidence),
            top_diseases=[RankedEntityResponse.from_domain(item) for item in overview.top_diseases],
            top_plants=[RankedEntityResponse.from_domain(item) for item in overview.top_plants],
        )


class PersonalAnalyticsResponse(BaseModel):
    overview: PersonalOverviewResponse
    monthly_activity: List[ActivityBucket]
    weekly_activity: List[ActivityBucket]
    recent_activity: List[DetectionSummary]

    @classmethod
    def from_domain(cls, analytics: PersonalAnalytics) -> "PersonalAnalyticsResponse":
        return cls(
            overview=PersonalOverviewResponse.from_domain(analytics.overview),
            monthly_activity=analytics.monthly_activity,
            weekly_activity=analytics.weekly_activity,
            recent_activity=analytics.recent_activity,
        )


class GlobalOverviewResponse(BaseModel):
    total_users: int
    active_users: int
    total_detections: int
    average_accuracy: float
    average_detections_per_user: float
    top_diseases: List[RankedEntityResponse]
    top_plants: List[RankedEntityResponse]
    monthly_growth: List[MonthlyGrowth]
    generated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, overview: GlobalOverview) -> "GlobalOverviewResponse":
        return cls(
            total_users=overview.total_users,
            active_users=overview.active_users,
            total_detections=overview.total_detections,
            average_accuracy=_pct(overview.average_accuracy),
            average_detections_per_user=_pct(overview.average_detections_per_user),
            top_diseases=[RankedEntityResponse.from_domain(item) for item in overview.top_diseases],
            top_plants=[RankedEntityResponse.from_domain(item) for item in overview.top_plants],
            monthly_growth=overview.monthly_growth,
            generated_at=overview.generated_at,
        )
