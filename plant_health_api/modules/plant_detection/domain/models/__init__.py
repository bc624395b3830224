from .detection import (
    ActivityBucket,
    DetectionEvent,
    DetectionSummary,
    DiseaseInfo,
    GeoLocation,
    GlobalOverview,
    HistoryFilters,
    HistoryPage,
    MonthlyGrowth,
    NewDetection,
    PersonalAnalytics,
    PersonalOverview,
    RankedEntity,
)

__all__ = [
    "ActivityBucket",
    "DetectionEvent",
    "DetectionSummary",
    "DiseaseInfo",
    "GeoLocation",
    "GlobalOverview",
    "HistoryFilters",
    "HistoryPage",
    "MonthlyGrowth",
    "NewDetection",
    "PersonalAnalytics",
    "PersonalOverview",
    "RankedEntity",
]
