# 📄 File: plant_health_api/modules/user_management/domain/repositories/user_repository.py
# 🧭 Purpose (Layman Explanation):
# Lists what the service needs to be able to do with stored users (find them, create them on
# first visit, bump their detection counters) without saying which database does it.
# 🧪 Purpose (Technical Summary):
# Repository interface for User entities, including the atomic UserStats increment/decrement
# operations used by the running aggregate updater.
# 🔗 Dependencies:
# Domain models (User, UserStats, UserPreferences), typing, abc
# 🔄 Connected Modules / Calls From:
# Application handlers, plant_detection aggregate updater, infrastructure implementation

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ..models.user import User, UserPreferences, UserStats


class UserRepository(ABC):
    """
    Repository interface for User entity data access operations.

    Implementation Notes:
    - Methods return domain entities, not database models
    - Stats changes must be applied atomically by the storage layer,
      never as a read followed by a write
    """

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User ID to find

        Returns:
            User entity if found, None otherwise
        """

    @abstractmethod
    async def get_or_create(self, user_id: str, email: Optional[str] = None) -> User:
        """
        Return the user, creating it with zeroed stats and default
        preferences when it does not exist yet.

        Safe to call concurrently for the same id.
        """

    @abstractmethod
    async def apply_detection(
        self,
        user_id: str,
        confidence: float,
        successful: bool,
        detected_at: datetime,
    ) -> UserStats:
        """
        Atomically add one detection to the user's stats.

        Args:
            user_id: Owner of the detection
            confidence: Detection confidence in [0, 1]
            successful: Whether the detection counts as successful
            detected_at: New last_detection_at value

        Returns:
            UserStats after the update

        Raises:
            NotFoundError: If the user does not exist
            RepositoryError: If database operation fails
        """

    @abstractmethod
    async def revert_detection(self, user_id: str, confidence: float, successful: bool) -> UserStats:
        """
        Atomically remove one detection from the user's stats.

        Counters and the confidence sum are floored at zero. The confidence
        sum resets to zero when the last detection is removed.

        Raises:
            NotFoundError: If the user does not exist
            RepositoryError: If database operation fails
        """

    @abstractmethod
    async def update_preferences(self, user_id: str, preferences: UserPreferences) -> User:
        """Replace the stored preferences."""

    @abstractmethod
    async def count_users(self) -> int:
        """Total number of known users."""

    @abstractmethod
    async def count_active_users(self, since: datetime) -> int:
        """Users whose last detection happened at or after `since`."""
