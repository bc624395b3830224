from .analytics import analytics_router
from .detections import detections_router
from .history import history_router

__all__ = ["analytics_router", "detections_router", "history_router"]
