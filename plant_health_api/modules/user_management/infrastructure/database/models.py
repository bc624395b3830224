# 📄 File: plant_health_api/modules/user_management/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Describes how a user and their detection counters are laid out in the database table.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model for the users table, holding the UserStats counters, the running
# confidence sum and JSON preferences, with check constraints guarding the counters.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM (Mapped / mapped_column)
# - plant_health_api.shared.config.database (DatabaseBase)
#
# 🔄 Connected Modules / Calls From:
# - user_repository_impl.py (CRUD and atomic stats updates)
# - migrations/versions (schema)

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import JSON, CheckConstraint, DateTime, Float, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from plant_health_api.shared.config.database import DatabaseBase


class UserModel(DatabaseBase):
    """
    SQLAlchemy model for users and their running detection statistics.
    """
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("total_detections >= 0", name="total_detections_non_negative"),
        CheckConstraint("successful_detections >= 0", name="successful_detections_non_negative"),
        CheckConstraint(
            "successful_detections <= total_detections",
            name="successful_within_total",
        ),
        CheckConstraint("sum_confidence >= 0", name="sum_confidence_non_negative"),
    )

    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Running aggregates
    total_detections: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    successful_detections: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    sum_confidence: Mapped[float] = mapped_column(Float, nullable=False, default=0.0, server_default="0")
    last_detection_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True, index=True)

    preferences: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<UserModel(user_id={self.user_id}, total_detections={self.total_detections})>"
