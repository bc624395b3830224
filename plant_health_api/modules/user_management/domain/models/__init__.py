from .user import SUCCESS_THRESHOLD, User, UserPreferences, UserStats, is_successful_detection

__all__ = [
    "SUCCESS_THRESHOLD",
    "User",
    "UserPreferences",
    "UserStats",
    "is_successful_detection",
]
