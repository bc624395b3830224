# 📄 File: plant_health_api/modules/user_management/application/commands/update_preferences.py
# 🧭 Purpose (Layman Explanation):
# The "change my settings" request: which language, which units, and which app switches
# the user flipped on the settings screen.
# 🧪 Purpose (Technical Summary):
# CQRS commands for user registration on first use and for partial preference updates.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# application.handlers.command_handlers, presentation.api.v1.users

from typing import Literal, Optional

from pydantic import BaseModel, Field


class EnsureUserCommand(BaseModel):
    """Register the caller with zeroed stats if this is their first request."""

    user_id: str = Field(..., min_length=1, max_length=128)
    email: Optional[str] = None


class UpdatePreferencesCommand(BaseModel):
    """
    Partial preference update.

    Only fields that are set are changed; the rest keep their stored value.
    """

    user_id: str = Field(..., min_length=1, max_length=128)
    language: Optional[Literal["en", "cs", "de", "es", "fr"]] = None
    units: Optional[Literal["metric", "imperial"]] = None
    notifications: Optional[bool] = None
    dark_mode: Optional[bool] = None
    auto_location: Optional[bool] = None

    def changes(self) -> dict:
        return self.model_dump(exclude={"user_id"}, exclude_none=True)
