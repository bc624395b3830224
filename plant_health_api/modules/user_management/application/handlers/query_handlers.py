# 📄 File: plant_health_api/modules/user_management/application/handlers/query_handlers.py
# 🧭 Purpose (Layman Explanation):
# Looks up a user's running detection numbers and saved settings.
# 🧪 Purpose (Technical Summary):
# CQRS query handlers for UserStats and UserPreferences. Unknown users read as zeroed
# stats and default preferences; rows are only created by command handlers.
# 🔗 Dependencies:
# FastAPI Depends, session manager, UserRepositoryImpl
# 🔄 Connected Modules / Calls From:
# presentation.api.v1.users

import logging

from fastapi import Depends

from plant_health_api.modules.user_management.application.queries.get_user_stats import (
    GetPreferencesQuery,
    GetUserStatsQuery,
)
from plant_health_api.modules.user_management.domain.models.user import UserPreferences, UserStats
from plant_health_api.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
from plant_health_api.shared.infrastructure.database.session import (
    DatabaseSessionManager,
    get_session_manager,
)

__all__ = [
    "GetUserStatsQueryHandler",
    "GetPreferencesQueryHandler",
]

logger = logging.getLogger(__name__)


class GetUserStatsQueryHandler:
    def __init__(self, session_manager: DatabaseSessionManager = Depends(get_session_manager)):
        self._sessions = session_manager

    async def handle(self, query: GetUserStatsQuery) -> UserStats:
        """
        Return the stored running aggregates for the user.

        Returns:
            UserStats, zeroed when the user has never been seen
        """
        async with self._sessions.get_session() as session:
            user = await UserRepositoryImpl(session).get_by_id(query.user_id)

        if user is None:
            logger.debug(f"No stats stored yet for user {query.user_id}")
            return UserStats()
        return user.stats


class GetPreferencesQueryHandler:
    def __init__(self, session_manager: DatabaseSessionManager = Depends(get_session_manager)):
        self._sessions = session_manager

    async def handle(self, query: GetPreferencesQuery) -> UserPreferences:
        async with self._sessions.get_session() as session:
            user = await UserRepositoryImpl(session).get_by_id(query.user_id)
        return user.preferences if user else UserPreferences()
