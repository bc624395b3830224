# 📄 File: plant_health_api/modules/user_management/presentation/api/schemas/user_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of the user screens' data as sent over the wire: the stats card on the
# profile screen and the settings form.
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the user stats and preferences endpoints,
# with conversion from domain models.
# 🔗 Dependencies:
# pydantic, user_management domain models
# 🔄 Connected Modules / Calls From:
# presentation.api.v1.users

"""
User Management API Schemas

Request Schemas:
- PreferencesUpdateRequest: partial settings update

Response Schemas:
- UserStatsResponse: running detection aggregates
- PreferencesResponse: current settings
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from plant_health_api.modules.user_management.domain.models.user import UserPreferences, UserStats


class UserStatsResponse(BaseModel):
    """Running detection aggregates for the current user."""

    total_detections: int = Field(..., ge=0, description="Detections ever recorded and not removed")
    successful_detections: int = Field(..., ge=0, description="Detections with confidence above 0.5")
    average_confidence: float = Field(..., ge=0.0, le=1.0, description="Mean confidence in [0, 1]")
    success_rate: float = Field(..., ge=0.0, le=100.0, description="Successful share in percent")
    last_detection_at: Optional[datetime] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "total_detections": 3,
                "successful_detections": 2,
                "average_confidence": 0.7167,
                "success_rate": 66.67,
                "last_detection_at": "2024-05-02T09:15:00Z",
            }
        }
    )

    @classmethod
    def from_domain(cls, stats: UserStats) -> "UserStatsResponse":
        return cls(
            total_detections=stats.total_detections,
            successful_detections=stats.successful_detections,
            average_confidence=round(stats.average_confidence, 4),
            success_rate=round(stats.success_rate, 2),
            last_detection_at=stats.last_detection_at,
        )


class PreferencesResponse(BaseModel):
    language: str
    units: str
    notifications: bool
    dark_mode: bool
    auto_location: bool

    @classmethod
    def from_domain(cls, preferences: UserPreferences) -> "PreferencesResponse":
        return cls(**preferences.model_dump())


class PreferencesUpdateRequest(BaseModel):
    """
    Settings changes from the app. Omitted fields keep their current value.
    """

    language: Optional[Literal["en", "cs", "de", "es", "fr"]] = Field(
        default=None, description="Interface language"
    )
    units: Optional[Literal["metric", "imperial"]] = Field(default=None, description="Measurement units")
    notifications: Optional[bool] = None
    dark_mode: Optional[bool] = None
    auto_location: Optional[bool] = None

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"example": {"language": "cs", "dark_mode": True}},
    )
