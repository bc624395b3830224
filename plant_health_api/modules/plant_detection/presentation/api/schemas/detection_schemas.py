# 📄 File: plant_health_api/modules/plant_detection/presentation/api/schemas/detection_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of scan data as sent to and from the mobile app: a photo to analyze, a result
# to save, a name correction, a saved scan and a page of history.
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the detection and history endpoints, with conversion
# from domain models.
# 🔗 Dependencies:
# pydantic, plant_detection domain models, plant identification result
# 🔄 Connected Modules / Calls From:
# presentation.api.v1.detections, presentation.api.v1.history

"""
Detection API Schemas

Request Schemas:
- AnalyzeImageRequest: base64 photo plus optional coordinates
- DetectionCreateRequest: manual save of a result
- DetectionUpdateRequest: plant/disease name or notes correction

Response Schemas:
- DetectionResponse: one stored detection
- AnalyzeImageResponse: identification, care lists and the stored detection
- HistoryResponse: one page of history with pagination metadata
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from plant_health_api.modules.plant_detection.application.handlers.command_handlers import AnalysisResult
from plant_health_api.modules.plant_detection.domain.models.detection import (
    DetectionEvent,
    GeoLocation,
    HistoryPage,
)


class DetectionResponse(BaseModel):
    id: str
    user_id: str
    plant_name: str
    disease_name: str
    confidence: float
    image_url: Optional[str] = None
    location: Optional[GeoLocation] = None
    symptoms: List[str] = Field(default_factory=list)
    diagnosis: List[str] = Field(default_factory=list)
    treatment: List[str] = Field(default_factory=list)
    prevention: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    disease_info_source: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, event: DetectionEvent) -> "DetectionResponse":
        return cls(**event.model_dump())


class AnalyzeImageRequest(BaseModel):
    """Photo to analyze. Coordinates default to the configured location."""

    image: str = Field(..., min_length=1, description="Base64 image or data URI")
    latitude: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(default=None, ge=-180.0, le=180.0)
    image_url: Optional[str] = Field(default=None, max_length=2048, description="Stored copy of the photo")
    save: bool = Field(default=True, description="Record the result in the user's history")


class IdentifiedEntity(BaseModel):
    name: str
    confidence: float


class AnalyzedDisease(IdentifiedEntity):
    symptoms: List[str]
    diagnosis: List[str]
    treatment: List[str]
    prevention: List[str]
    info_source: str


class AnalyzeImageResponse(BaseModel):
    plant: IdentifiedEntity
    disease: AnalyzedDisease
    similar_images: List[str] = Field(default_factory=list)
    saved: bool
    detection: Optional[DetectionResponse] = None

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalyzeImageResponse":
        identification = result.identification
        info = result.disease_info
        return cls(
            plant=IdentifiedEntity(name=identification.plant_name, confidence=identification.plant_confidence),
            disease=AnalyzedDisease(
                name=identification.disease_name,
                confidence=identification.confidence,
                symptoms=info.symptoms,
                diagnosis=info.diagnosis,
                treatment=info.treatment,
                prevention=info.prevention,
                info_source=info.source,
            ),
            similar_images=identification.similar_images,
            saved=result.detection is not None,
            detection=DetectionResponse.from_domain(result.detection) if result.detection else None,
        )


class DetectionCreateRequest(BaseModel):
    plant_name: str = Field(..., min_length=1, max_length=255)
    disease_name: str = Field(..., min_length=1, max_length=255)
    confidence: float = Field(..., ge=0.0, le=1.0)
    image_url: Optional[str] = Field(default=None, max_length=2048)
    latitude: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(default=None, ge=-180.0, le=180.0)
    symptoms: Optional[List[str]] = None
    diagnosis: Optional[List[str]] = None
    treatment: Optional[List[str]] = None
    prevention: Optional[List[str]] = None
    notes: Optional[str] = Field(default=None, max_length=2000)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "plant_name": "Tomato",
                "disease_name": "Early Blight",
                "confidence": 0.85,
                "latitude": 49.207,
                "longitude": 16.608,
            }
        }
    )


class DetectionUpdateRequest(BaseModel):
    """Only names and notes can be corrected."""

    plant_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    disease_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    notes: Optional[str] = Field(default=None, max_length=2000)

    model_config = ConfigDict(extra="forbid")


class PaginationResponse(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class HistoryResponse(BaseModel):
    detections: List[DetectionResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: HistoryPage) -> "HistoryResponse":
        return cls(
            detections=[DetectionResponse.from_domain(event) for event in page.events],
            pagination=PaginationResponse(page=page.page, limit=page.limit, total=page.total, pages=page.pages),
        )
