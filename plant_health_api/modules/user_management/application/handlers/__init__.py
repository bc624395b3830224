from .command_handlers import EnsureUserCommandHandler, UpdatePreferencesCommandHandler
from .query_handlers import GetPreferencesQueryHandler, GetUserStatsQueryHandler

__all__ = [
    "EnsureUserCommandHandler",
    "UpdatePreferencesCommandHandler",
    "GetPreferencesQueryHandler",
    "GetUserStatsQueryHandler",
]
