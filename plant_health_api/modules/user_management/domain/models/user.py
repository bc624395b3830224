# 📄 File: plant_health_api/modules/user_management/domain/models/user.py
# 🧭 Purpose (Layman Explanation):
# Describes a user of the detection app as this service sees them: their running detection
# statistics (how many scans, how many confident ones, how sure on average) and their app preferences.
# 🧪 Purpose (Technical Summary):
# Pydantic domain models for User, UserStats and UserPreferences. UserStats keeps a running
# confidence sum so the average is derived on read and stays exact when detections are removed.
# 🔗 Dependencies:
# pydantic, datetime, typing
# 🔄 Connected Modules / Calls From:
# user_repository.py, plant_detection running aggregate updater, user API schemas

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# A detection counts as successful when its confidence is strictly above this value
SUCCESS_THRESHOLD = 0.5


def is_successful_detection(confidence: float) -> bool:
    return confidence > SUCCESS_THRESHOLD


class UserStats(BaseModel):
    """
    Running detection aggregates for one user.

    Stored fields are counters and a confidence sum; the mean is derived,
    so recording and removing a detection are both plain increments.
    """

    model_config = ConfigDict(validate_assignment=True)

    total_detections: int = Field(default=0, ge=0)
    successful_detections: int = Field(default=0, ge=0)
    sum_confidence: float = Field(default=0.0, ge=0.0)
    last_detection_at: Optional[datetime] = None

    @model_validator(mode="after")
    def check_counts(self) -> "UserStats":
        if self.successful_detections > self.total_detections:
            raise ValueError("successful_detections cannot exceed total_detections")
        return self

    @property
    def average_confidence(self) -> float:
        """Mean confidence in [0, 1], 0 when nothing has been recorded."""
        if self.total_detections == 0:
            return 0.0
        return min(self.sum_confidence / self.total_detections, 1.0)

    @property
    def success_rate(self) -> float:
        """Share of successful detections as a percentage."""
        if self.total_detections == 0:
            return 0.0
        return self.successful_detections / self.total_detections * 100


class UserPreferences(BaseModel):
    """App preferences mirrored from the mobile settings screen."""

    language: Literal["en", "cs", "de", "es", "fr"] = "en"
    units: Literal["metric", "imperial"] = "metric"
    notifications: bool = True
    dark_mode: bool = False
    auto_location: bool = True


class User(BaseModel):
    """
    User as known to this service.

    Accounts are created by the identity provider; a row appears here the
    first time an authenticated user calls the API.
    """

    user_id: str
    email: Optional[str] = None
    stats: UserStats = Field(default_factory=UserStats)
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
