# 📄 File: plant_health_api/modules/plant_detection/presentation/api/v1/analytics.py
# 🧭 Purpose (Layman Explanation):
# Web endpoints behind the analytics screen: the user's own charts and the community numbers.
# 🧪 Purpose (Technical Summary):
# FastAPI routes for personalAnalytics and the cached globalOverview.
# 🔗 Dependencies:
# FastAPI router, plant_detection query handlers and analytics schemas
# 🔄 Connected Modules / Calls From:
# api.v1.router

import logging

from fastapi import APIRouter, Depends, Query

from plant_health_api.modules.plant_detection.application.handlers.query_handlers import (
    GlobalOverviewQueryHandler,
    PersonalAnalyticsQueryHandler,
)
from plant_health_api.modules.plant_detection.application.queries.detection_queries import (
    GlobalOverviewQuery,
    PersonalAnalyticsQuery,
)
from plant_health_api.modules.plant_detection.presentation.api.schemas.analytics_schemas import (
    GlobalOverviewResponse,
    PersonalAnalyticsResponse,
)
from plant_health_api.shared.core.dependencies import CurrentUser, get_current_user

logger = logging.getLogger(__name__)

analytics_router = APIRouter()


@analytics_router.get(
    "/personal",
    response_model=PersonalAnalyticsResponse,
    summary="Get my analytics",
)
async def get_personal_analytics(
    current_user: CurrentUser = Depends(get_current_user),
    handler: PersonalAnalyticsQueryHandler = Depends(PersonalAnalyticsQueryHandler),
) -> PersonalAnalyticsResponse:
    """
    Overview recomputed from the stored detections, top diseases and plants,
    monthly and weekly activity (UTC buckets) and the ten latest detections.
    """
    analytics = await handler.handle(PersonalAnalyticsQuery(user_id=current_user.user_id))
    return PersonalAnalyticsResponse.from_domain(analytics)


@analytics_router.get(
    "/global",
    response_model=GlobalOverviewResponse,
    summary="Get community analytics",
)
async def get_global_overview(
    refresh: bool = Query(False, description="Bypass the cached overview (admin only)"),
    current_user: CurrentUser = Depends(get_current_user),
    handler: GlobalOverviewQueryHandler = Depends(GlobalOverviewQueryHandler),
) -> GlobalOverviewResponse:
    query = GlobalOverviewQuery(refresh=refresh and current_user.is_admin())
    overview = await handler.handle(query)
    return GlobalOverviewResponse.from_domain(overview)
