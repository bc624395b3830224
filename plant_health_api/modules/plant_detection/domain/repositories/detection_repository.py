# 📄 File: plant_health_api/modules/plant_detection/domain/repositories/detection_repository.py
# 🧭 Purpose (Layman Explanation):
# Lists what the service needs from the store of plant scans: save one, find one, fix its
# names, delete it, and page through a user's scans newest first.
# 🧪 Purpose (Technical Summary):
# Repository interface for the Detection Record Store.
# 🔗 Dependencies:
# Detection domain models, typing, abc
# 🔄 Connected Modules / Calls From:
# Running aggregate updater, history and analytics handlers, infrastructure implementation

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..models.detection import DetectionEvent, DetectionSummary, HistoryFilters, NewDetection


class DetectionRepository(ABC):
    """
    Repository interface for DetectionEvent storage.

    Implementation Notes:
    - created_at is assigned by the store and strictly increases per user
    - Listing order is created_at descending, then id descending
    """

    @abstractmethod
    async def add(self, detection: NewDetection) -> DetectionEvent:
        """
        Persist a new detection, assigning id and created_at.

        Raises:
            RepositoryError: If database operation fails
        """

    @abstractmethod
    async def get(self, detection_id: str) -> Optional[DetectionEvent]:
        """Find a detection by id regardless of owner."""

    @abstractmethod
    async def update_metadata(self, detection_id: str, changes: Dict[str, Any]) -> DetectionEvent:
        """
        Apply a metadata correction (plant name, disease name, notes).

        Raises:
            NotFoundError: If the detection does not exist
        """

    @abstractmethod
    async def delete(self, detection_id: str) -> bool:
        """Delete a detection. Returns False when nothing was deleted."""

    @abstractmethod
    async def query(self, filters: HistoryFilters, offset: int, limit: int) -> List[DetectionEvent]:
        """One page of the filtered history in listing order."""

    @abstractmethod
    async def count(self, filters: HistoryFilters) -> int:
        """Total number of detections matching the filters."""

    @abstractmethod
    async def list_for_user(
        self,
        user_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[DetectionEvent]:
        """Every detection of a user in listing order, optionally within a date range."""

    @abstractmethod
    async def list_summaries(self) -> List[DetectionSummary]:
        """Analytics projection of every stored detection across all users."""
