from .get_user_stats import GetPreferencesQuery, GetUserStatsQuery

__all__ = ["GetPreferencesQuery", "GetUserStatsQuery"]
