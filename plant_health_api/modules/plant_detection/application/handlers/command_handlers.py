# 📄 File: plant_health_api/modules/plant_detection/application/handlers/command_handlers.py
# 🧭 Purpose (Layman Explanation):
# Carries out scan changes: analyzing a photo with the identification service, saving a
# result, correcting its names or deleting it, always keeping the owner's totals in step.
# 🧪 Purpose (Technical Summary):
# CQRS command handlers. Writes that touch UserStats run under the per-user keyed lock and
# inside one database transaction, so the event and the stats change commit together.
# 🔗 Dependencies:
# FastAPI Depends, session manager, repositories, RunningAggregateUpdater, external clients
# 🔄 Connected Modules / Calls From:
# presentation.api.v1.detections

import logging
from typing import Optional

from fastapi import Depends
from pydantic import BaseModel

from plant_health_api.modules.plant_detection.application.commands.detection_commands import (
    AnalyzeImageCommand,
    RecordDetectionCommand,
    RemoveDetectionCommand,
    UpdateDetectionCommand,
)
from plant_health_api.modules.plant_detection.domain.models.detection import (
    DetectionEvent,
    DiseaseInfo,
    NewDetection,
)
from plant_health_api.modules.plant_detection.domain.services.aggregate_updater import (
    RunningAggregateUpdater,
    build_new_detection,
    ensure_owner,
)
from plant_health_api.modules.plant_detection.infrastructure.ai.disease_info_service import (
    DiseaseInfoService,
    get_disease_info_service,
)
from plant_health_api.modules.plant_detection.infrastructure.database.detection_repository_impl import (
    DetectionRepositoryImpl,
)
from plant_health_api.modules.user_management.domain.models.user import UserStats
from plant_health_api.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
from plant_health_api.shared.config.settings import get_settings
from plant_health_api.shared.core.exceptions import NotFoundError, ValidationError
from plant_health_api.shared.core.locks import user_stats_locks
from plant_health_api.shared.infrastructure.database.session import (
    DatabaseSessionManager,
    get_session_manager,
)
from plant_health_api.shared.infrastructure.external_apis import get_plant_id_client
from plant_health_api.shared.infrastructure.external_apis.plant_id_client import (
    IdentificationResult,
    PlantIdentificationClient,
)
from plant_health_api.shared.utils.validators import validate_coordinates, validate_required_text

__all__ = [
    "AnalysisResult",
    "AnalyzeImageCommandHandler",
    "RecordDetectionCommandHandler",
    "RemoveDetectionCommandHandler",
    "UpdateDetectionCommandHandler",
]

logger = logging.getLogger(__name__)


class RecordDetectionCommandHandler:
    """recordDetection: validate, store the event and bump the owner's stats."""

    def __init__(self, session_manager: DatabaseSessionManager = Depends(get_session_manager)):
        self._sessions = session_manager

    async def handle(self, command: RecordDetectionCommand) -> DetectionEvent:
        disease_info = None
        if any((command.symptoms, command.diagnosis, command.treatment, command.prevention)):
            disease_info = DiseaseInfo(
                symptoms=command.symptoms or [],
                diagnosis=command.diagnosis or [],
                treatment=command.treatment or [],
                prevention=command.prevention or [],
                source="ai",
            )
        detection = build_new_detection(
            user_id=command.user_id,
            plant_name=command.plant_name,
            disease_name=command.disease_name,
            confidence=command.confidence,
            image_url=command.image_url,
            latitude=command.latitude,
            longitude=command.longitude,
            disease_info=disease_info,
            notes=command.notes,
        )
        return await self.record(detection)

    async def record(self, detection: NewDetection) -> DetectionEvent:
        async with user_stats_locks.acquire(detection.user_id):
            async with self._sessions.get_session() as session:
                updater = RunningAggregateUpdater(DetectionRepositoryImpl(session), UserRepositoryImpl(session))
                event, _ = await updater.record_detection(detection)
        return event


class RemoveDetectionCommandHandler:
    """removeDetection: delete an owned event and subtract it from the stats."""

    def __init__(self, session_manager: DatabaseSessionManager = Depends(get_session_manager)):
        self._sessions = session_manager

    async def handle(self, command: RemoveDetectionCommand) -> UserStats:
        async with user_stats_locks.acquire(command.user_id):
            async with self._sessions.get_session() as session:
                updater = RunningAggregateUpdater(DetectionRepositoryImpl(session), UserRepositoryImpl(session))
                return await updater.remove_detection(command.user_id, command.detection_id)


class UpdateDetectionCommandHandler:
    """
    Correct the names or notes of a detection.

    Confidence, owner, id and timestamp are never changed, so UserStats
    stay untouched.
    """

    def __init__(self, session_manager: DatabaseSessionManager = Depends(get_session_manager)):
        self._sessions = session_manager

    async def handle(self, command: UpdateDetectionCommand) -> DetectionEvent:
        changes = command.changes()
        if not changes:
            raise ValidationError("Nothing to update", constraint="plant_name, disease_name or notes required")
        for field in ("plant_name", "disease_name"):
            if field in changes:
                changes[field] = validate_required_text(changes[field], field)
        if "notes" in changes:
            changes["notes"] = changes["notes"].strip() or None

        async with self._sessions.get_session() as session:
            repository = DetectionRepositoryImpl(session)
            existing = await repository.get(command.detection_id)
            if existing is None:
                raise NotFoundError("Detection not found", resource_type="detection", resource_id=command.detection_id)
            ensure_owner(existing, command.user_id)
            updated = await repository.update_metadata(command.detection_id, changes)

        logger.info(f"Detection {command.detection_id} corrected by {command.user_id}: {sorted(changes)}")
        return updated


class AnalysisResult(BaseModel):
    identification: IdentificationResult
    disease_info: DiseaseInfo
    detection: Optional[DetectionEvent] = None


class AnalyzeImageCommandHandler:
    """
    analyzeImage: identify, enrich, then optionally record.

    Identification failures propagate (there is nothing to store without
    them); enrichment failures only downgrade the care lists to placeholders.
    """

    def __init__(
        self,
        plant_id_client: PlantIdentificationClient = Depends(get_plant_id_client),
        disease_info_service: DiseaseInfoService = Depends(get_disease_info_service),
        record_handler: RecordDetectionCommandHandler = Depends(RecordDetectionCommandHandler),
    ):
        self._plant_id = plant_id_client
        self._disease_info = disease_info_service
        self._record = record_handler

    async def handle(self, command: AnalyzeImageCommand) -> AnalysisResult:
        settings = get_settings()
        latitude = command.latitude if command.latitude is not None else settings.DEFAULT_LATITUDE
        longitude = command.longitude if command.longitude is not None else settings.DEFAULT_LONGITUDE
        validate_coordinates(latitude, longitude)

        identification = await self._plant_id.identify(command.image_base64, latitude, longitude)
        disease_info = await self._disease_info.get_disease_info(
            identification.plant_name, identification.disease_name
        )

        detection = None
        if command.save:
            new_detection = build_new_detection(
                user_id=command.user_id,
                plant_name=identification.plant_name,
                disease_name=identification.disease_name,
                confidence=identification.confidence,
                image_url=command.image_url,
                latitude=latitude,
                longitude=longitude,
                disease_info=disease_info,
            )
            detection = await self._record.record(new_detection)

        return AnalysisResult(identification=identification, disease_info=disease_info, detection=detection)
