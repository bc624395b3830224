from .detection_queries import (
    GetDetectionQuery,
    GlobalOverviewQuery,
    HistoryStatsQuery,
    PersonalAnalyticsQuery,
    QueryHistoryQuery,
)

__all__ = [
    "GetDetectionQuery",
    "GlobalOverviewQuery",
    "HistoryStatsQuery",
    "PersonalAnalyticsQuery",
    "QueryHistoryQuery",
]
