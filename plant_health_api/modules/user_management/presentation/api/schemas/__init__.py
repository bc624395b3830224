from .user_schemas import PreferencesResponse, PreferencesUpdateRequest, UserStatsResponse

__all__ = ["PreferencesResponse", "PreferencesUpdateRequest", "UserStatsResponse"]
