# 📄 File: plant_health_api/modules/user_management/infrastructure/database/user_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# The worker that actually reads and writes users in the database, including bumping a
# user's detection counters in one step so two scans at once never overwrite each other.
# 🧪 Purpose (Technical Summary):
# SQLAlchemy async implementation of UserRepository. Stats changes are single
# UPDATE ... SET col = col +/- x ... RETURNING statements; user creation is an
# INSERT ... ON CONFLICT DO NOTHING so concurrent first requests are harmless.
# 🔗 Dependencies:
# SQLAlchemy async session, UserModel, domain models, shared exceptions
# 🔄 Connected Modules / Calls From:
# user_management handlers, plant_detection aggregate updater and analytics handlers

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import case, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from plant_health_api.modules.user_management.domain.models.user import (
    User,
    UserPreferences,
    UserStats,
)
from plant_health_api.modules.user_management.domain.repositories.user_repository import UserRepository
from plant_health_api.modules.user_management.infrastructure.database.models import UserModel
from plant_health_api.shared.core.exceptions import NotFoundError, RepositoryError
from plant_health_api.shared.utils.helpers import ensure_utc, utc_now

logger = logging.getLogger(__name__)

_INSERT_BY_DIALECT = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}

_STATS_COLUMNS = (
    UserModel.total_detections,
    UserModel.successful_detections,
    UserModel.sum_confidence,
    UserModel.last_detection_at,
)


class UserRepositoryImpl(UserRepository):
    """
    SQLAlchemy implementation of the UserRepository interface.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize the user repository.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session

    async def get_by_id(self, user_id: str) -> Optional[User]:
        try:
            result = await self._session.execute(
                select(UserModel).where(UserModel.user_id == user_id)
            )
            user_model = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving user {user_id}: {e}")
            raise RepositoryError("Failed to retrieve user", operation="get_by_id", entity="user") from e

        return self._model_to_domain(user_model) if user_model else None

    async def get_or_create(self, user_id: str, email: Optional[str] = None) -> User:
        existing = await self.get_by_id(user_id)
        if existing is not None:
            return existing

        now = utc_now()
        values = {
            "user_id": user_id,
            "email": email,
            "total_detections": 0,
            "successful_detections": 0,
            "sum_confidence": 0.0,
            "preferences": UserPreferences().model_dump(),
            "created_at": now,
            "updated_at": now,
        }

        try:
            dialect = self._session.get_bind().dialect.name
            insert_factory = _INSERT_BY_DIALECT.get(dialect)
            if insert_factory is not None:
                stmt = insert_factory(UserModel).values(**values).on_conflict_do_nothing(
                    index_elements=[UserModel.user_id]
                )
                await self._session.execute(stmt)
            else:
                self._session.add(UserModel(**values))
                await self._session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Database error creating user {user_id}: {e}")
            raise RepositoryError("Failed to create user", operation="get_or_create", entity="user") from e

        logger.info(f"Registered user {user_id} with zeroed stats")
        created = await self.get_by_id(user_id)
        if created is None:
            raise RepositoryError("User vanished after creation", operation="get_or_create", entity="user")
        return created

    async def apply_detection(
        self,
        user_id: str,
        confidence: float,
        successful: bool,
        detected_at: datetime,
    ) -> UserStats:
        stmt = (
            update(UserModel)
            .where(UserModel.user_id == user_id)
            .values(
                total_detections=UserModel.total_detections + 1,
                successful_detections=UserModel.successful_detections + (1 if successful else 0),
                sum_confidence=UserModel.sum_confidence + confidence,
                last_detection_at=detected_at,
                updated_at=detected_at,
            )
            .returning(*_STATS_COLUMNS)
            .execution_options(synchronize_session=False)
        )
        return await self._execute_stats_update(stmt, user_id, "apply_detection")

    async def revert_detection(self, user_id: str, confidence: float, successful: bool) -> UserStats:
        total = UserModel.total_detections
        remaining_total = case((total > 0, total - 1), else_=0)

        successful_count = UserModel.successful_detections
        if successful:
            successful_count = successful_count - 1

        stmt = (
            update(UserModel)
            .where(UserModel.user_id == user_id)
            .values(
                total_detections=remaining_total,
                successful_detections=case(
                    (successful_count <= 0, 0),
                    (successful_count > remaining_total, remaining_total),
                    else_=successful_count,
                ),
                sum_confidence=case(
                    (total <= 1, 0.0),
                    (UserModel.sum_confidence - confidence < 0, 0.0),
                    else_=UserModel.sum_confidence - confidence,
                ),
                updated_at=utc_now(),
            )
            .returning(*_STATS_COLUMNS)
            .execution_options(synchronize_session=False)
        )
        return await self._execute_stats_update(stmt, user_id, "revert_detection")

    async def _execute_stats_update(self, stmt, user_id: str, operation: str) -> UserStats:
        try:
            result = await self._session.execute(stmt)
            row = result.one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Database error during {operation} for user {user_id}: {e}")
            raise RepositoryError("Failed to update user stats", operation=operation, entity="user") from e

        if row is None:
            raise NotFoundError("User not found", resource_type="user", resource_id=user_id)

        return UserStats(
            total_detections=row.total_detections,
            successful_detections=row.successful_detections,
            sum_confidence=max(row.sum_confidence, 0.0),
            last_detection_at=ensure_utc(row.last_detection_at),
        )

    async def update_preferences(self, user_id: str, preferences: UserPreferences) -> User:
        try:
            result = await self._session.execute(
                update(UserModel)
                .where(UserModel.user_id == user_id)
                .values(preferences=preferences.model_dump(), updated_at=utc_now())
                .execution_options(synchronize_session=False)
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error updating preferences for {user_id}: {e}")
            raise RepositoryError("Failed to update preferences", operation="update_preferences", entity="user") from e

        if result.rowcount == 0:
            raise NotFoundError("User not found", resource_type="user", resource_id=user_id)

        self._session.expire_all()
        user = await self.get_by_id(user_id)
        return user

    async def count_users(self) -> int:
        try:
            result = await self._session.execute(select(func.count()).select_from(UserModel))
        except SQLAlchemyError as e:
            raise RepositoryError("Failed to count users", operation="count_users", entity="user") from e
        return int(result.scalar_one())

    async def count_active_users(self, since: datetime) -> int:
        try:
            result = await self._session.execute(
                select(func.count())
                .select_from(UserModel)
                .where(UserModel.last_detection_at >= ensure_utc(since))
            )
        except SQLAlchemyError as e:
            raise RepositoryError("Failed to count active users", operation="count_active_users", entity="user") from e
        return int(result.scalar_one())

    @staticmethod
    def _model_to_domain(model: UserModel) -> User:
        return User(
            user_id=model.user_id,
            email=model.email,
            stats=UserStats(
                total_detections=model.total_detections or 0,
                successful_detections=model.successful_detections or 0,
                sum_confidence=max(model.sum_confidence or 0.0, 0.0),
                last_detection_at=ensure_utc(model.last_detection_at),
            ),
            preferences=UserPreferences(**(model.preferences or {})),
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )
