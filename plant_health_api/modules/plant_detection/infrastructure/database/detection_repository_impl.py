# 📄 File: plant_health_api/modules/plant_detection/infrastructure/database/detection_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# The worker that stores plant scans in the database and reads them back, newest first,
# filtered by plant, disease or date.
# 🧪 Purpose (Technical Summary):
# SQLAlchemy async implementation of DetectionRepository. Assigns per-user monotonic
# created_at values and lists with a deterministic (created_at DESC, id DESC) order.
# 🔗 Dependencies:
# SQLAlchemy async session, DetectionModel, detection domain models, shared exceptions
# 🔄 Connected Modules / Calls From:
# Running aggregate updater, plant_detection handlers, ai_assistant chat context

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from plant_health_api.modules.plant_detection.domain.models.detection import (
    DetectionEvent,
    DetectionSummary,
    GeoLocation,
    HistoryFilters,
    NewDetection,
)
from plant_health_api.modules.plant_detection.domain.repositories.detection_repository import DetectionRepository
from plant_health_api.modules.plant_detection.infrastructure.database.models import DetectionModel
from plant_health_api.shared.core.exceptions import NotFoundError, RepositoryError
from plant_health_api.shared.utils.helpers import ensure_utc, generate_id, utc_now

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("plant_name", "disease_name", "notes")

_LISTING_ORDER = (DetectionModel.created_at.desc(), DetectionModel.id.desc())


class DetectionRepositoryImpl(DetectionRepository):
    """
    SQLAlchemy implementation of the DetectionRepository interface.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, detection: NewDetection) -> DetectionEvent:
        created_at = await self._next_timestamp(detection.user_id)
        info = detection.disease_info

        model = DetectionModel(
            id=generate_id(),
            user_id=detection.user_id,
            plant_name=detection.plant_name,
            disease_name=detection.disease_name,
            confidence=detection.confidence,
            image_url=detection.image_url,
            latitude=detection.location.latitude if detection.location else None,
            longitude=detection.location.longitude if detection.location else None,
            symptoms=list(info.symptoms),
            diagnosis=list(info.diagnosis),
            treatment=list(info.treatment),
            prevention=list(info.prevention),
            disease_info_source=info.source,
            notes=detection.notes,
            created_at=created_at,
        )

        try:
            self._session.add(model)
            await self._session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Database error storing detection for user {detection.user_id}: {e}")
            raise RepositoryError("Failed to store detection", operation="add", entity="detection") from e

        logger.debug(f"Stored detection {model.id} for user {detection.user_id}")
        return self._model_to_domain(model)

    async def _next_timestamp(self, user_id: str) -> datetime:
        """Current UTC time, nudged forward past the user's latest detection if needed."""
        try:
            result = await self._session.execute(
                select(func.max(DetectionModel.created_at)).where(DetectionModel.user_id == user_id)
            )
            latest = ensure_utc(result.scalar_one_or_none())
        except SQLAlchemyError as e:
            raise RepositoryError("Failed to read latest detection time", operation="add", entity="detection") from e

        now = utc_now()
        if latest is not None and now <= latest:
            return latest + timedelta(microseconds=1)
        return now

    async def get(self, detection_id: str) -> Optional[DetectionEvent]:
        try:
            model = await self._session.get(DetectionModel, detection_id)
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving detection {detection_id}: {e}")
            raise RepositoryError("Failed to retrieve detection", operation="get", entity="detection") from e
        return self._model_to_domain(model) if model else None

    async def update_metadata(self, detection_id: str, changes: Dict[str, Any]) -> DetectionEvent:
        model = await self._session.get(DetectionModel, detection_id)
        if model is None:
            raise NotFoundError("Detection not found", resource_type="detection", resource_id=detection_id)

        for field, value in changes.items():
            if field not in EDITABLE_FIELDS:
                raise ValueError(f"Field {field} cannot be edited")
            setattr(model, field, value)
        model.updated_at = utc_now()

        try:
            await self._session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Database error updating detection {detection_id}: {e}")
            raise RepositoryError("Failed to update detection", operation="update", entity="detection") from e
        return self._model_to_domain(model)

    async def delete(self, detection_id: str) -> bool:
        try:
            result = await self._session.execute(
                delete(DetectionModel)
                .where(DetectionModel.id == detection_id)
                .execution_options(synchronize_session=False)
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error deleting detection {detection_id}: {e}")
            raise RepositoryError("Failed to delete detection", operation="delete", entity="detection") from e
        return result.rowcount > 0

    def _filtered(self, stmt, filters: HistoryFilters):
        stmt = stmt.where(DetectionModel.user_id == filters.user_id)
        if filters.plant_name:
            stmt = stmt.where(DetectionModel.plant_name == filters.plant_name)
        if filters.disease_name:
            stmt = stmt.where(DetectionModel.disease_name == filters.disease_name)
        if filters.start_date:
            stmt = stmt.where(DetectionModel.created_at >= ensure_utc(filters.start_date))
        if filters.end_date:
            stmt = stmt.where(DetectionModel.created_at <= ensure_utc(filters.end_date))
        return stmt

    async def query(self, filters: HistoryFilters, offset: int, limit: int) -> List[DetectionEvent]:
        stmt = self._filtered(select(DetectionModel), filters).order_by(*_LISTING_ORDER)
        stmt = stmt.offset(offset).limit(limit)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Database error querying history for {filters.user_id}: {e}")
            raise RepositoryError("Failed to query history", operation="query", entity="detection") from e
        return [self._model_to_domain(model) for model in result.scalars().all()]

    async def count(self, filters: HistoryFilters) -> int:
        stmt = self._filtered(select(func.count()).select_from(DetectionModel), filters)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise RepositoryError("Failed to count history", operation="count", entity="detection") from e
        return int(result.scalar_one())

    async def list_for_user(
        self,
        user_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[DetectionEvent]:
        filters = HistoryFilters(user_id=user_id, start_date=start_date, end_date=end_date)
        stmt = self._filtered(select(DetectionModel), filters).order_by(*_LISTING_ORDER)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Database error listing detections for {user_id}: {e}")
            raise RepositoryError("Failed to list detections", operation="list_for_user", entity="detection") from e
        return [self._model_to_domain(model) for model in result.scalars().all()]

    async def list_summaries(self) -> List[DetectionSummary]:
        stmt = select(
            DetectionModel.id,
            DetectionModel.user_id,
            DetectionModel.plant_name,
            DetectionModel.disease_name,
            DetectionModel.confidence,
            DetectionModel.created_at,
        ).order_by(*_LISTING_ORDER)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Database error listing detection summaries: {e}")
            raise RepositoryError("Failed to list detections", operation="list_summaries", entity="detection") from e

        return [
            DetectionSummary(
                id=row.id,
                user_id=row.user_id,
                plant_name=row.plant_name,
                disease_name=row.disease_name,
                confidence=row.confidence,
                created_at=ensure_utc(row.created_at),
            )
            for row in result.all()
        ]

    @staticmethod
    def _model_to_domain(model: DetectionModel) -> DetectionEvent:
        location = None
        if model.latitude is not None and model.longitude is not None:
            location = GeoLocation(latitude=model.latitude, longitude=model.longitude)

        return DetectionEvent(
            id=model.id,
            user_id=model.user_id,
            plant_name=model.plant_name,
            disease_name=model.disease_name,
            confidence=model.confidence,
            image_url=model.image_url,
            location=location,
            symptoms=list(model.symptoms or []),
            diagnosis=list(model.diagnosis or []),
            treatment=list(model.treatment or []),
            prevention=list(model.prevention or []),
            notes=model.notes,
            disease_info_source=model.disease_info_source or "placeholder",
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )
