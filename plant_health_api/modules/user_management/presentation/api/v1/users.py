# 📄 File: plant_health_api/modules/user_management/presentation/api/v1/users.py
# 🧭 Purpose (Layman Explanation):
# Web endpoints behind the profile screen: the user's detection numbers and their settings.
# 🧪 Purpose (Technical Summary):
# FastAPI routes for UserStats and UserPreferences of the authenticated caller.
# 🔗 Dependencies:
# FastAPI router, user_management handlers and schemas, shared auth dependency
# 🔄 Connected Modules / Calls From:
# api.v1.router

"""
Users API Endpoints

- GET /users/me/stats: running detection aggregates
- GET /users/me/preferences: current settings
- PUT /users/me/preferences: partial settings update
"""

import logging

from fastapi import APIRouter, Depends

from plant_health_api.modules.user_management.application.commands.update_preferences import UpdatePreferencesCommand
from plant_health_api.modules.user_management.application.handlers.command_handlers import (
    UpdatePreferencesCommandHandler,
)
from plant_health_api.modules.user_management.application.handlers.query_handlers import (
    GetPreferencesQueryHandler,
    GetUserStatsQueryHandler,
)
from plant_health_api.modules.user_management.application.queries.get_user_stats import (
    GetPreferencesQuery,
    GetUserStatsQuery,
)
from plant_health_api.modules.user_management.presentation.api.schemas.user_schemas import (
    PreferencesResponse,
    PreferencesUpdateRequest,
    UserStatsResponse,
)
from plant_health_api.modules.user_management.presentation.dependencies import get_registered_user
from plant_health_api.shared.core.dependencies import CurrentUser, get_current_user

logger = logging.getLogger(__name__)

users_router = APIRouter()


@users_router.get(
    "/me/stats",
    response_model=UserStatsResponse,
    summary="Get my detection statistics",
    responses={401: {"description": "Authentication required"}},
)
async def get_my_stats(
    current_user: CurrentUser = Depends(get_current_user),
    handler: GetUserStatsQueryHandler = Depends(GetUserStatsQueryHandler),
) -> UserStatsResponse:
    stats = await handler.handle(GetUserStatsQuery(user_id=current_user.user_id))
    return UserStatsResponse.from_domain(stats)


@users_router.get(
    "/me/preferences",
    response_model=PreferencesResponse,
    summary="Get my preferences",
)
async def get_my_preferences(
    current_user: CurrentUser = Depends(get_current_user),
    handler: GetPreferencesQueryHandler = Depends(GetPreferencesQueryHandler),
) -> PreferencesResponse:
    preferences = await handler.handle(GetPreferencesQuery(user_id=current_user.user_id))
    return PreferencesResponse.from_domain(preferences)


@users_router.put(
    "/me/preferences",
    response_model=PreferencesResponse,
    summary="Update my preferences",
    responses={422: {"description": "Unsupported language or units"}},
)
async def update_my_preferences(
    request: PreferencesUpdateRequest,
    current_user: CurrentUser = Depends(get_registered_user),
    handler: UpdatePreferencesCommandHandler = Depends(UpdatePreferencesCommandHandler),
) -> PreferencesResponse:
    """
    Update the caller's preferences.

    Only the fields present in the body change.
    """
    command = UpdatePreferencesCommand(
        user_id=current_user.user_id,
        **request.model_dump(exclude_none=True),
    )
    preferences = await handler.handle(command)
    return PreferencesResponse.from_domain(preferences)
