# 📄 File: plant_health_api/modules/plant_detection/domain/services/aggregate_updater.py
# 🧭 Purpose (Layman Explanation):
# Saves or deletes a plant scan and, in the same step, adjusts the owner's running totals
# (number of scans, number of confident scans, and the confidence sum behind the average).
# 🧪 Purpose (Technical Summary):
# Running Aggregate Updater. Validates detection input, then writes the event and applies the
# matching atomic UserStats increment/decrement through the repositories it is given. The
# caller supplies repositories bound to one transaction and holds the per-user lock.
# 🔗 Dependencies:
# Detection and user repository interfaces, shared validators and exceptions
# 🔄 Connected Modules / Calls From:
# plant_detection command handlers (record, remove, analyze)

import logging
from typing import Optional, Tuple

from plant_health_api.modules.plant_detection.domain.models.detection import (
    DetectionEvent,
    DiseaseInfo,
    GeoLocation,
    NewDetection,
)
from plant_health_api.modules.plant_detection.domain.repositories.detection_repository import DetectionRepository
from plant_health_api.modules.user_management.domain.models.user import UserStats, is_successful_detection
from plant_health_api.modules.user_management.domain.repositories.user_repository import UserRepository
from plant_health_api.shared.core.exceptions import AuthorizationError, NotFoundError
from plant_health_api.shared.utils.validators import (
    validate_confidence,
    validate_coordinates,
    validate_required_text,
)

logger = logging.getLogger(__name__)

MAX_NOTES_LENGTH = 2000


def build_new_detection(
    user_id: str,
    plant_name: str,
    disease_name: str,
    confidence: float,
    image_url: Optional[str] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    disease_info: Optional[DiseaseInfo] = None,
    notes: Optional[str] = None,
) -> NewDetection:
    """
    Validate raw detection input.

    Raises:
        ValidationError: If confidence is outside [0, 1], a required name is
            blank or the coordinates are out of range
    """
    user_id = validate_required_text(user_id, "user_id", max_length=128)
    plant_name = validate_required_text(plant_name, "plant_name")
    disease_name = validate_required_text(disease_name, "disease_name")
    confidence = validate_confidence(confidence)

    location = None
    if latitude is not None and longitude is not None:
        validate_coordinates(latitude, longitude)
        location = GeoLocation(latitude=latitude, longitude=longitude)

    if notes is not None:
        notes = notes.strip()[:MAX_NOTES_LENGTH] or None

    return NewDetection(
        user_id=user_id,
        plant_name=plant_name,
        disease_name=disease_name,
        confidence=confidence,
        image_url=image_url or None,
        location=location,
        disease_info=disease_info or DiseaseInfo(),
        notes=notes,
    )


def ensure_owner(event: DetectionEvent, user_id: str) -> None:
    if event.user_id != user_id:
        logger.warning(f"User {user_id} denied access to detection {event.id}")
        raise AuthorizationError(
            "Detection belongs to another user",
            resource_type="detection",
            resource_id=event.id,
            user_id=user_id,
        )


class RunningAggregateUpdater:
    """
    Keeps UserStats in step with the stored detections.

    Both operations issue a single relative UPDATE on the user row, so no
    increment is lost even without the in-process lock; the lock only keeps
    per-user timestamps strictly increasing.
    """

    def __init__(self, detections: DetectionRepository, users: UserRepository):
        self._detections = detections
        self._users = users

    async def record_detection(self, detection: NewDetection) -> Tuple[DetectionEvent, UserStats]:
        """
        Store a detection and add it to the owner's stats.

        Returns:
            The stored event and the owner's stats after the update
        """
        await self._users.get_or_create(detection.user_id)
        event = await self._detections.add(detection)
        stats = await self._users.apply_detection(
            detection.user_id,
            confidence=event.confidence,
            successful=is_successful_detection(event.confidence),
            detected_at=event.created_at,
        )
        logger.info(
            f"Recorded detection {event.id} for user {event.user_id}: "
            f"{event.plant_name}/{event.disease_name} ({event.confidence:.2f}), "
            f"total={stats.total_detections}"
        )
        return event, stats

    async def remove_detection(self, user_id: str, detection_id: str) -> UserStats:
        """
        Delete a detection owned by user_id and subtract it from their stats.

        Raises:
            NotFoundError: If the detection does not exist
            AuthorizationError: If it belongs to someone else
        """
        event = await self._detections.get(detection_id)
        if event is None:
            raise NotFoundError("Detection not found", resource_type="detection", resource_id=detection_id)
        ensure_owner(event, user_id)

        if not await self._detections.delete(detection_id):
            raise NotFoundError("Detection not found", resource_type="detection", resource_id=detection_id)

        stats = await self._users.revert_detection(
            user_id,
            confidence=event.confidence,
            successful=is_successful_detection(event.confidence),
        )
        logger.info(f"Removed detection {detection_id} for user {user_id}, total={stats.total_detections}")
        return stats
