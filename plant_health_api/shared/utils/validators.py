# 📄 File: plant_health_api/shared/utils/validators.py
# 🧭 Purpose (Layman Explanation):
# Checks that the numbers and names coming into the service make sense before anything is saved:
# a confidence between 0 and 1, a plant name that is not blank, a real place on the map.
# 🧪 Purpose (Technical Summary):
# Reusable validation functions that raise the shared ValidationError with field, value and
# constraint details, used by domain services ahead of any persistence.
# 🔗 Dependencies:
# plant_health_api.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# Running aggregate updater, history query engine, chat and weather services

from typing import Optional

from plant_health_api.shared.core.exceptions import ValidationError


def validate_confidence(confidence: float, field: str = "confidence") -> float:
    """Confidence must be a finite number within [0, 1]."""
    if confidence is None or isinstance(confidence, bool):
        raise ValidationError("Confidence is required", field=field, value=confidence)
    try:
        value = float(confidence)
    except (TypeError, ValueError):
        raise ValidationError("Confidence must be a number", field=field, value=confidence)
    if value != value or not 0.0 <= value <= 1.0:
        raise ValidationError(
            "Confidence must be between 0 and 1",
            field=field,
            value=confidence,
            constraint="0 <= confidence <= 1",
        )
    return value


def validate_required_text(value: Optional[str], field: str, max_length: int = 255) -> str:
    """Strip the value and reject blanks or overly long strings."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required", field=field, constraint="non-empty")
    cleaned = str(value).strip()
    if len(cleaned) > max_length:
        raise ValidationError(
            f"{field} must be at most {max_length} characters",
            field=field,
            constraint=f"max_length={max_length}",
        )
    return cleaned


def validate_coordinates(latitude: float, longitude: float) -> None:
    if not -90.0 <= latitude <= 90.0:
        raise ValidationError(
            "Latitude must be between -90 and 90",
            field="latitude",
            value=latitude,
            constraint="-90 <= latitude <= 90",
        )
    if not -180.0 <= longitude <= 180.0:
        raise ValidationError(
            "Longitude must be between -180 and 180",
            field="longitude",
            value=longitude,
            constraint="-180 <= longitude <= 180",
        )


def validate_page(page: int, limit: int) -> None:
    """Reject non-positive page numbers and page sizes."""
    if page < 1:
        raise ValidationError("Page must be at least 1", field="page", value=page, constraint="page >= 1")
    if limit < 1:
        raise ValidationError("Limit must be at least 1", field="limit", value=limit, constraint="limit >= 1")
