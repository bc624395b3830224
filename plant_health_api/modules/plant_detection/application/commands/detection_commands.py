# 📄 File: plant_health_api/modules/plant_detection/application/commands/detection_commands.py
# 🧭 Purpose (Layman Explanation):
# The "do something with a scan" requests: analyze a photo, save a result by hand, fix a
# mislabeled plant or disease name, or delete a scan.
# 🧪 Purpose (Technical Summary):
# CQRS command definitions for the plant_detection module. Range checks on confidence and
# names happen in the aggregate updater so internal callers get the same errors.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# application.handlers.command_handlers, presentation.api.v1.detections

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class AnalyzeImageCommand(BaseModel):
    user_id: str
    image_base64: str = Field(..., min_length=1)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    image_url: Optional[str] = None
    save: bool = True


class RecordDetectionCommand(BaseModel):
    """Manual save of a detection result."""

    user_id: str
    plant_name: str
    disease_name: str
    confidence: float
    image_url: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    symptoms: Optional[List[str]] = None
    diagnosis: Optional[List[str]] = None
    treatment: Optional[List[str]] = None
    prevention: Optional[List[str]] = None
    notes: Optional[str] = None


class UpdateDetectionCommand(BaseModel):
    """
    Metadata correction. Fields left as None are not changed.
    """

    user_id: str
    detection_id: str
    plant_name: Optional[str] = None
    disease_name: Optional[str] = None
    notes: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(include={"plant_name", "disease_name", "notes"}, exclude_none=True)


class RemoveDetectionCommand(BaseModel):
    user_id: str
    detection_id: str
