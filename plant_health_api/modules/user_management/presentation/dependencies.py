# 📄 File: plant_health_api/modules/user_management/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Makes sure the person calling the API is known to the service, registering them with
# empty statistics the first time they appear.
# 🧪 Purpose (Technical Summary):
# Module-specific FastAPI dependencies layered on the shared bearer token dependency.
# 🔗 Dependencies:
# FastAPI, shared.core.dependencies, user_management command handlers
# 🔄 Connected Modules / Calls From:
# user_management endpoints, plant_detection endpoints that write detections

import logging

from fastapi import Depends

from plant_health_api.modules.user_management.application.commands.update_preferences import EnsureUserCommand
from plant_health_api.modules.user_management.application.handlers.command_handlers import EnsureUserCommandHandler
from plant_health_api.shared.core.dependencies import CurrentUser, get_current_user

logger = logging.getLogger(__name__)


async def get_registered_user(
    current_user: CurrentUser = Depends(get_current_user),
    handler: EnsureUserCommandHandler = Depends(EnsureUserCommandHandler),
) -> CurrentUser:
    """
    Authenticated caller whose users row is guaranteed to exist.

    Raises:
        AuthenticationError: If the bearer token is missing or invalid
    """
    await handler.handle(EnsureUserCommand(user_id=current_user.user_id, email=current_user.email))
    return current_user
