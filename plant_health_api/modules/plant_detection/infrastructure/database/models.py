# 📄 File: plant_health_api/modules/plant_detection/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Describes how each plant scan is laid out in the database table.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model for the detections table. Care lists are JSON arrays; the
# (user_id, created_at, id) index serves the newest-first history listing.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM (Mapped / mapped_column)
# - plant_health_api.shared.config.database (DatabaseBase)
#
# 🔄 Connected Modules / Calls From:
# - detection_repository_impl.py
# - migrations/versions (schema)

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, CheckConstraint, DateTime, Float, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from plant_health_api.shared.config.database import DatabaseBase


class DetectionModel(DatabaseBase):
    """
    SQLAlchemy model for detection events.
    """
    __tablename__ = "detections"
    __table_args__ = (
        CheckConstraint("confidence >= 0 AND confidence <= 1", name="confidence_range"),
        Index("ix_detections_user_created", "user_id", "created_at", "id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False
    )

    plant_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    disease_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    confidence: Mapped[float] = mapped_column(Float, nullable=False)

    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    symptoms: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    diagnosis: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    treatment: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    prevention: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    disease_info_source: Mapped[str] = mapped_column(String(20), nullable=False, default="placeholder")
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return (
            f"<DetectionModel(id={self.id}, user_id={self.user_id}, "
            f"disease_name={self.disease_name}, confidence={self.confidence})>"
        )
