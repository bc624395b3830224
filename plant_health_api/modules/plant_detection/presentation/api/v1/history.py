# 📄 File: plant_health_api/modules/plant_detection/presentation/api/v1/history.py
# 🧭 Purpose (Layman Explanation):
# Web endpoints behind the history screen: page through past scans with plant, disease and
# date filters, and see the statistics for a chosen period.
# 🧪 Purpose (Technical Summary):
# FastAPI routes for queryHistory and historyStats. The "me" path alias resolves to the
# caller; any other id must match the caller or the request is rejected.
# 🔗 Dependencies:
# FastAPI router, plant_detection query handlers and schemas, shared auth/pagination
# 🔄 Connected Modules / Calls From:
# api.v1.router

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from plant_health_api.modules.plant_detection.application.handlers.query_handlers import (
    HistoryStatsQueryHandler,
    QueryHistoryQueryHandler,
)
from plant_health_api.modules.plant_detection.application.queries.detection_queries import (
    HistoryStatsQuery,
    QueryHistoryQuery,
)
from plant_health_api.modules.plant_detection.presentation.api.schemas.analytics_schemas import (
    PersonalOverviewResponse,
)
from plant_health_api.modules.plant_detection.presentation.api.schemas.detection_schemas import HistoryResponse
from plant_health_api.shared.core.dependencies import (
    CurrentUser,
    PaginationParams,
    get_current_user,
    get_pagination_params,
)

logger = logging.getLogger(__name__)

history_router = APIRouter()


@history_router.get(
    "/{user_id}/history",
    response_model=HistoryResponse,
    summary="Get detection history",
    responses={
        403: {"description": "History of another user"},
        422: {"description": "Invalid page, limit or date range"},
    },
)
async def get_history(
    user_id: str,
    plant: Optional[str] = Query(None, description="Exact plant name"),
    disease: Optional[str] = Query(None, description="Exact disease name"),
    start_date: Optional[datetime] = Query(None, description="Inclusive lower bound (ISO 8601)"),
    end_date: Optional[datetime] = Query(None, description="Inclusive upper bound (ISO 8601)"),
    pagination: PaginationParams = Depends(get_pagination_params),
    current_user: CurrentUser = Depends(get_current_user),
    handler: QueryHistoryQueryHandler = Depends(QueryHistoryQueryHandler),
) -> HistoryResponse:
    """
    Newest first; ties on the timestamp are ordered by id.

    `limit` is capped at the configured maximum page size.
    """
    query = QueryHistoryQuery(
        requesting_user_id=current_user.user_id,
        user_id=current_user.resolve_user_id(user_id),
        page=pagination.page,
        limit=pagination.limit,
        plant_name=plant,
        disease_name=disease,
        start_date=start_date,
        end_date=end_date,
    )
    page = await handler.handle(query)
    return HistoryResponse.from_page(page)


@history_router.get(
    "/{user_id}/history/stats",
    response_model=PersonalOverviewResponse,
    summary="Get detection statistics for a period",
)
async def get_history_stats(
    user_id: str,
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    current_user: CurrentUser = Depends(get_current_user),
    handler: HistoryStatsQueryHandler = Depends(HistoryStatsQueryHandler),
) -> PersonalOverviewResponse:
    query = HistoryStatsQuery(
        requesting_user_id=current_user.user_id,
        user_id=current_user.resolve_user_id(user_id),
        start_date=start_date,
        end_date=end_date,
    )
    overview = await handler.handle(query)
    return PersonalOverviewResponse.from_domain(overview)
