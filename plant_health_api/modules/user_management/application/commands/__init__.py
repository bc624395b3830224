from .update_preferences import EnsureUserCommand, UpdatePreferencesCommand

__all__ = ["EnsureUserCommand", "UpdatePreferencesCommand"]
