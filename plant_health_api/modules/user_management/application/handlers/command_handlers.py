# 📄 File: plant_health_api/modules/user_management/application/handlers/command_handlers.py
# 🧭 Purpose (Layman Explanation):
# Carries out user changes: registering someone the first time they show up, and saving
# their updated app settings.
# 🧪 Purpose (Technical Summary):
# CQRS command handlers. Each handler opens one unit of work from the session manager,
# builds the repository on that session and commits when the block exits cleanly.
# 🔗 Dependencies:
# FastAPI Depends, session manager, UserRepositoryImpl
# 🔄 Connected Modules / Calls From:
# presentation.api.v1.users, presentation.dependencies (registration on first use)

import logging

from fastapi import Depends

from plant_health_api.modules.user_management.application.commands.update_preferences import (
    EnsureUserCommand,
    UpdatePreferencesCommand,
)
from plant_health_api.modules.user_management.domain.models.user import User, UserPreferences
from plant_health_api.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
from plant_health_api.shared.infrastructure.database.session import (
    DatabaseSessionManager,
    get_session_manager,
)

__all__ = [
    "EnsureUserCommandHandler",
    "UpdatePreferencesCommandHandler",
]

logger = logging.getLogger(__name__)


class EnsureUserCommandHandler:
    """Get-or-create for the authenticated caller."""

    def __init__(self, session_manager: DatabaseSessionManager = Depends(get_session_manager)):
        self._sessions = session_manager

    async def handle(self, command: EnsureUserCommand) -> User:
        async with self._sessions.get_session() as session:
            return await UserRepositoryImpl(session).get_or_create(command.user_id, command.email)


class UpdatePreferencesCommandHandler:
    """
    Merge a partial preference update into the stored preferences.

    The user row is created first when missing so a brand new account can
    save settings before its first detection.
    """

    def __init__(self, session_manager: DatabaseSessionManager = Depends(get_session_manager)):
        self._sessions = session_manager

    async def handle(self, command: UpdatePreferencesCommand) -> UserPreferences:
        async with self._sessions.get_session() as session:
            repository = UserRepositoryImpl(session)
            user = await repository.get_or_create(command.user_id)

            merged = user.preferences.model_copy(update=command.changes())
            # Re-validate the merged values through the model
            merged = UserPreferences.model_validate(merged.model_dump())

            updated = await repository.update_preferences(command.user_id, merged)

        logger.info(f"Preferences updated for user {command.user_id}: {sorted(command.changes())}")
        return updated.preferences
