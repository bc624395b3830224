# 📄 File: plant_health_api/modules/plant_detection/application/handlers/query_handlers.py
# 🧭 Purpose (Layman Explanation):
# Answers the read-only questions about scans: one scan, a page of history, statistics over
# a period, the personal analytics screen and the community overview.
# 🧪 Purpose (Technical Summary):
# CQRS query handlers for the History Query Engine and the Analytics Aggregator. Each opens
# one read session, loads events through the repository and hands them to the pure
# analytics functions. The global overview is cached in Redis.
# 🔗 Dependencies:
# FastAPI Depends, session manager, repositories, analytics and history services, CacheManager
# 🔄 Connected Modules / Calls From:
# presentation.api.v1 (detections, history, analytics), ai_assistant chat context

import logging
from datetime import timedelta

from fastapi import Depends

from plant_health_api.modules.plant_detection.application.queries.detection_queries import (
    GetDetectionQuery,
    GlobalOverviewQuery,
    HistoryStatsQuery,
    PersonalAnalyticsQuery,
    QueryHistoryQuery,
)
from plant_health_api.modules.plant_detection.domain.models.detection import (
    DetectionEvent,
    GlobalOverview,
    HistoryPage,
    PersonalAnalytics,
    PersonalOverview,
)
from plant_health_api.modules.plant_detection.domain.services import analytics_service
from plant_health_api.modules.plant_detection.domain.services.aggregate_updater import ensure_owner
from plant_health_api.modules.plant_detection.domain.services.history_service import (
    build_filters,
    normalize_page,
    validate_date_range,
)
from plant_health_api.modules.plant_detection.infrastructure.database.detection_repository_impl import (
    DetectionRepositoryImpl,
)
from plant_health_api.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
from plant_health_api.shared.config.redis import CacheConfig, CacheManager, get_cache_manager
from plant_health_api.shared.config.settings import get_settings
from plant_health_api.shared.core.exceptions import AuthorizationError, NotFoundError
from plant_health_api.shared.infrastructure.database.session import (
    DatabaseSessionManager,
    get_session_manager,
)
from plant_health_api.shared.utils.helpers import ensure_utc, utc_now

__all__ = [
    "GetDetectionQueryHandler",
    "QueryHistoryQueryHandler",
    "HistoryStatsQueryHandler",
    "PersonalAnalyticsQueryHandler",
    "GlobalOverviewQueryHandler",
]

logger = logging.getLogger(__name__)


def _ensure_same_user(requesting_user_id: str, user_id: str, resource_type: str) -> None:
    if requesting_user_id != user_id:
        logger.warning(f"User {requesting_user_id} denied access to {resource_type} of {user_id}")
        raise AuthorizationError(
            "You can only access your own data",
            resource_type=resource_type,
            resource_id=user_id,
            user_id=requesting_user_id,
        )


class GetDetectionQueryHandler:
    def __init__(self, session_manager: DatabaseSessionManager = Depends(get_session_manager)):
        self._sessions = session_manager

    async def handle(self, query: GetDetectionQuery) -> DetectionEvent:
        async with self._sessions.get_session() as session:
            event = await DetectionRepositoryImpl(session).get(query.detection_id)

        if event is None:
            raise NotFoundError("Detection not found", resource_type="detection", resource_id=query.detection_id)
        ensure_owner(event, query.requesting_user_id)
        return event


class QueryHistoryQueryHandler:
    """
    queryHistory: one page of a user's detections, newest first.

    The page and the total are read in the same session; the total uses the
    same filters as the page.
    """

    def __init__(self, session_manager: DatabaseSessionManager = Depends(get_session_manager)):
        self._sessions = session_manager

    async def handle(self, query: QueryHistoryQuery) -> HistoryPage:
        _ensure_same_user(query.requesting_user_id, query.user_id, "history")
        page = normalize_page(query.page, query.limit)
        filters = build_filters(
            query.user_id,
            plant_name=query.plant_name,
            disease_name=query.disease_name,
            start_date=query.start_date,
            end_date=query.end_date,
        )

        async with self._sessions.get_session() as session:
            repository = DetectionRepositoryImpl(session)
            events = await repository.query(filters, offset=page.offset, limit=page.limit)
            total = await repository.count(filters)

        return HistoryPage(
            events=events,
            total=total,
            page=page.page,
            limit=page.limit,
            pages=page.pages_for(total),
        )


class HistoryStatsQueryHandler:
    """historyStats: personalOverview restricted to an inclusive date range."""

    def __init__(self, session_manager: DatabaseSessionManager = Depends(get_session_manager)):
        self._sessions = session_manager

    async def handle(self, query: HistoryStatsQuery) -> PersonalOverview:
        _ensure_same_user(query.requesting_user_id, query.user_id, "history")
        validate_date_range(query.start_date, query.end_date)

        async with self._sessions.get_session() as session:
            events = await DetectionRepositoryImpl(session).list_for_user(
                query.user_id,
                start_date=ensure_utc(query.start_date),
                end_date=ensure_utc(query.end_date),
            )
        return analytics_service.personal_overview(events)


class PersonalAnalyticsQueryHandler:
    def __init__(self, session_manager: DatabaseSessionManager = Depends(get_session_manager)):
        self._sessions = session_manager

    async def handle(self, query: PersonalAnalyticsQuery) -> PersonalAnalytics:
        async with self._sessions.get_session() as session:
            events = await DetectionRepositoryImpl(session).list_for_user(query.user_id)
        return analytics_service.personal_analytics(events)


class GlobalOverviewQueryHandler:
    """
    globalOverview: community statistics, cached for GLOBAL_ANALYTICS_CACHE_TTL.

    When the cache is disabled or unreachable the overview is computed on
    every call.
    """

    def __init__(
        self,
        session_manager: DatabaseSessionManager = Depends(get_session_manager),
        cache: CacheManager = Depends(get_cache_manager),
    ):
        self._sessions = session_manager
        self._cache = cache

    async def handle(self, query: GlobalOverviewQuery) -> GlobalOverview:
        cache_key = CacheConfig.get_cache_key("global_overview")

        if not query.refresh:
            cached = await self._cache.get_json(cache_key)
            if cached is not None:
                logger.debug("Global overview served from cache")
                return GlobalOverview.model_validate(cached)

        if not self._cache.enabled:
            logger.warning("Cache disabled, computing global overview uncached")

        overview = await self._compute()
        await self._cache.set_json(
            cache_key,
            overview.model_dump(mode="json"),
            ttl=CacheConfig.get_ttl("global_overview"),
        )
        return overview

    async def _compute(self) -> GlobalOverview:
        now = utc_now()
        active_since = now - timedelta(days=get_settings().ACTIVE_USER_WINDOW_DAYS)

        async with self._sessions.get_session() as session:
            users = UserRepositoryImpl(session)
            total_users = await users.count_users()
            active_users = await users.count_active_users(active_since)
            summaries = await DetectionRepositoryImpl(session).list_summaries()

        logger.info(f"Computed global overview over {len(summaries)} detections and {total_users} users")
        return analytics_service.global_overview(
            summaries,
            total_users=total_users,
            active_users=active_users,
            generated_at=now,
        )
