# 📄 File: plant_health_api/modules/plant_detection/presentation/api/v1/detections.py
# 🧭 Purpose (Layman Explanation):
# Web endpoints behind the detection screen: analyze a leaf photo, save a result, open a
# saved scan, fix its names, or delete it.
# 🧪 Purpose (Technical Summary):
# FastAPI routes for analyzeImage, recordDetection, getDetection, updateDetection and
# removeDetection. Analysis is rate limited per user with slowapi.
# 🔗 Dependencies:
# FastAPI router, slowapi limiter, plant_detection handlers and schemas, auth dependencies
# 🔄 Connected Modules / Calls From:
# api.v1.router

"""
Detections API Endpoints

- POST /detections/analyze: identify plant and disease from a photo
- POST /detections: save a detection result
- GET /detections/{detection_id}: one saved detection
- PATCH /detections/{detection_id}: correct plant/disease name or notes
- DELETE /detections/{detection_id}: delete and update the running statistics
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from plant_health_api.api.middleware.rate_limiting import analyze_limit, limiter
from plant_health_api.modules.plant_detection.application.commands.detection_commands import (
    AnalyzeImageCommand,
    RecordDetectionCommand,
    RemoveDetectionCommand,
    UpdateDetectionCommand,
)
from plant_health_api.modules.plant_detection.application.handlers.command_handlers import (
    AnalyzeImageCommandHandler,
    RecordDetectionCommandHandler,
    RemoveDetectionCommandHandler,
    UpdateDetectionCommandHandler,
)
from plant_health_api.modules.plant_detection.application.handlers.query_handlers import GetDetectionQueryHandler
from plant_health_api.modules.plant_detection.application.queries.detection_queries import GetDetectionQuery
from plant_health_api.modules.plant_detection.presentation.api.schemas.detection_schemas import (
    AnalyzeImageRequest,
    AnalyzeImageResponse,
    DetectionCreateRequest,
    DetectionResponse,
    DetectionUpdateRequest,
)
from plant_health_api.modules.user_management.presentation.dependencies import get_registered_user
from plant_health_api.shared.core.dependencies import CurrentUser, get_current_user

logger = logging.getLogger(__name__)

detections_router = APIRouter()

_ERROR_RESPONSES = {
    401: {"description": "Authentication required"},
    403: {"description": "Detection belongs to another user"},
    404: {"description": "Detection not found"},
}


@detections_router.post(
    "/analyze",
    response_model=AnalyzeImageResponse,
    summary="Analyze a plant photo",
    responses={
        422: {"description": "Invalid image or coordinates"},
        429: {"description": "Too many analyses"},
        502: {"description": "Identification service error"},
        504: {"description": "Identification service timed out, retry later"},
    },
)
@limiter.limit(analyze_limit)
async def analyze_image(
    request: Request,
    body: AnalyzeImageRequest,
    current_user: CurrentUser = Depends(get_registered_user),
    handler: AnalyzeImageCommandHandler = Depends(AnalyzeImageCommandHandler),
) -> AnalyzeImageResponse:
    """
    Identify the plant and disease in a photo and attach care guidance.

    The result is stored in the caller's history unless `save` is false.
    A failing guidance lookup never prevents saving; the care lists are then
    generic placeholders.
    """
    command = AnalyzeImageCommand(
        user_id=current_user.user_id,
        image_base64=body.image,
        latitude=body.latitude,
        longitude=body.longitude,
        image_url=body.image_url,
        save=body.save,
    )
    result = await handler.handle(command)
    return AnalyzeImageResponse.from_result(result)


@detections_router.post(
    "",
    response_model=DetectionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a detection",
    responses={422: {"description": "Confidence outside [0, 1] or blank names"}},
)
async def create_detection(
    body: DetectionCreateRequest,
    current_user: CurrentUser = Depends(get_registered_user),
    handler: RecordDetectionCommandHandler = Depends(RecordDetectionCommandHandler),
) -> DetectionResponse:
    command = RecordDetectionCommand(user_id=current_user.user_id, **body.model_dump())
    event = await handler.handle(command)
    return DetectionResponse.from_domain(event)


@detections_router.get(
    "/{detection_id}",
    response_model=DetectionResponse,
    summary="Get a detection",
    responses=_ERROR_RESPONSES,
)
async def get_detection(
    detection_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    handler: GetDetectionQueryHandler = Depends(GetDetectionQueryHandler),
) -> DetectionResponse:
    event = await handler.handle(
        GetDetectionQuery(requesting_user_id=current_user.user_id, detection_id=detection_id)
    )
    return DetectionResponse.from_domain(event)


@detections_router.patch(
    "/{detection_id}",
    response_model=DetectionResponse,
    summary="Correct a detection",
    responses=_ERROR_RESPONSES,
)
async def update_detection(
    detection_id: str,
    body: DetectionUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    handler: UpdateDetectionCommandHandler = Depends(UpdateDetectionCommandHandler),
) -> DetectionResponse:
    """Change the plant name, disease name or notes. Statistics are not affected."""
    command = UpdateDetectionCommand(
        user_id=current_user.user_id,
        detection_id=detection_id,
        **body.model_dump(exclude_none=True),
    )
    event = await handler.handle(command)
    return DetectionResponse.from_domain(event)


@detections_router.delete(
    "/{detection_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a detection",
    responses=_ERROR_RESPONSES,
)
async def delete_detection(
    detection_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    handler: RemoveDetectionCommandHandler = Depends(RemoveDetectionCommandHandler),
) -> Response:
    await handler.handle(RemoveDetectionCommand(user_id=current_user.user_id, detection_id=detection_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
