# 📄 File: plant_health_api/modules/plant_detection/domain/models/detection.py
# 🧭 Purpose (Layman Explanation):
# Describes one plant scan result (which plant, which disease, how sure, what to do about it)
# and the shapes of the history pages and charts built from many scans.
# 🧪 Purpose (Technical Summary):
# Pydantic domain models for DetectionEvent, history filtering/pagination and the analytics
# views (ranked entities, activity buckets, personal and global overviews).
# 🔗 Dependencies:
# pydantic, datetime, typing
# 🔄 Connected Modules / Calls From:
# detection repository, analytics service, application handlers, API schemas

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

DiseaseInfoSource = Literal["ai", "placeholder"]


class GeoLocation(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class DiseaseInfo(BaseModel):
    """
    Care guidance attached to a detection.

    `source` is "ai" when the lists came from the generative text service and
    "placeholder" when enrichment failed or returned nothing usable.
    """

    symptoms: List[str] = Field(default_factory=list)
    diagnosis: List[str] = Field(default_factory=list)
    treatment: List[str] = Field(default_factory=list)
    prevention: List[str] = Field(default_factory=list)
    source: DiseaseInfoSource = "placeholder"


class DetectionEvent(BaseModel):
    """
    One plant disease analysis result owned by a single user.

    id, user_id and created_at never change after creation; only the names
    and notes can be corrected by the owner.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    plant_name: str
    disease_name: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    image_url: Optional[str] = None
    location: Optional[GeoLocation] = None
    symptoms: List[str] = Field(default_factory=list)
    diagnosis: List[str] = Field(default_factory=list)
    treatment: List[str] = Field(default_factory=list)
    prevention: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    disease_info_source: DiseaseInfoSource = "placeholder"
    created_at: datetime
    updated_at: Optional[datetime] = None


class NewDetection(BaseModel):
    """Validated detection data about to be stored; the store assigns id and timestamps."""

    user_id: str
    plant_name: str
    disease_name: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    image_url: Optional[str] = None
    location: Optional[GeoLocation] = None
    disease_info: DiseaseInfo = Field(default_factory=DiseaseInfo)
    notes: Optional[str] = None


class DetectionSummary(BaseModel):
    """The fields analytics needs, without the care lists."""

    id: str
    user_id: str
    plant_name: str
    disease_name: str
    confidence: float
    created_at: datetime


class HistoryFilters(BaseModel):
    user_id: str
    plant_name: Optional[str] = None
    disease_name: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class HistoryPage(BaseModel):
    events: List[DetectionEvent]
    total: int
    page: int
    limit: int
    pages: int


class RankedEntity(BaseModel):
    name: str
    count: int
    percentage: float


class ActivityBucket(BaseModel):
    period: str
    count: int


class MonthlyGrowth(BaseModel):
    period: str
    detections: int
    users: int


class PersonalOverview(BaseModel):
    """
    Ground-truth statistics recomputed from a user's events.

    success_rate and average_confidence are percentages in [0, 100].
    """

    total_detections: int = 0
    successful_detections: int = 0
    success_rate: float = 0.0
    average_confidence: float = 0.0
    top_diseases: List[RankedEntity] = Field(default_factory=list)
    top_plants: List[RankedEntity] = Field(default_factory=list)


class PersonalAnalytics(BaseModel):
    overview: PersonalOverview
    monthly_activity: List[ActivityBucket] = Field(default_factory=list)
    weekly_activity: List[ActivityBucket] = Field(default_factory=list)
    recent_activity: List[DetectionSummary] = Field(default_factory=list)


class GlobalOverview(BaseModel):
    """Community wide statistics. average_accuracy is a percentage."""

    total_users: int = 0
    active_users: int = 0
    total_detections: int = 0
    average_accuracy: float = 0.0
    average_detections_per_user: float = 0.0
    top_diseases: List[RankedEntity] = Field(default_factory=list)
    top_plants: List[RankedEntity] = Field(default_factory=list)
    monthly_growth: List[MonthlyGrowth] = Field(default_factory=list)
    generated_at: Optional[datetime] = None
