# 📄 File: plant_health_api/modules/plant_detection/domain/services/analytics_service.py
# 🧭 Purpose (Layman Explanation):
# Turns a pile of plant scans into the charts on the analytics screen: the most common
# diseases and plants, scans per month and per week, and the overall success numbers.
# 🧪 Purpose (Technical Summary):
# Pure aggregation functions over detection events. No I/O; handlers load the events and
# call these. Time buckets use UTC, percentages are kept at full precision.
# 🔗 Dependencies:
# collections.Counter, detection domain models, shared helpers
# 🔄 Connected Modules / Calls From:
# plant_detection query handlers (history stats, personal analytics, global overview)

"""
Analytics Aggregator

Ranked frequency tables and time bucketed activity computed from a set of
detection events. Every function is deterministic for a given input:

- ties in rankings are broken by name
- activity buckets are returned in chronological order
- an empty input yields empty tables and zeroed overviews
"""

from collections import Counter, defaultdict
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set

from plant_health_api.modules.plant_detection.domain.models.detection import (
    ActivityBucket,
    DetectionSummary,
    GlobalOverview,
    MonthlyGrowth,
    PersonalAnalytics,
    PersonalOverview,
    RankedEntity,
)
from plant_health_api.modules.user_management.domain.models.user import is_successful_detection
from plant_health_api.shared.utils.helpers import iso_week_key, month_key

DEFAULT_TOP_N = 5
RECENT_ACTIVITY_SIZE = 10


def by_disease(event) -> str:
    return event.disease_name


def by_plant(event) -> str:
    return event.plant_name


def top_entities(
    events: Sequence,
    key: Callable[[object], str],
    n: int = DEFAULT_TOP_N,
) -> List[RankedEntity]:
    """
    Rank the values produced by `key` by how often they occur.

    Args:
        events: Detection events (anything with the attributes `key` reads)
        key: Extracts the grouping value, e.g. by_disease
        n: Maximum number of entries returned

    Returns:
        Up to n entries sorted by count descending, then name ascending.
        percentage is count / len(events) * 100.
    """
    total = len(events)
    if total == 0 or n <= 0:
        return []

    counts = Counter(key(event) for event in events)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [
        RankedEntity(name=name, count=count, percentage=count / total * 100)
        for name, count in ranked[:n]
    ]


def _bucketed(events: Iterable, bucket: Callable[[datetime], str]) -> List[ActivityBucket]:
    counts = Counter(bucket(event.created_at) for event in events)
    return [ActivityBucket(period=period, count=counts[period]) for period in sorted(counts)]


def monthly_activity(events: Iterable) -> List[ActivityBucket]:
    """Detections per UTC calendar month ("YYYY-MM"), oldest month first."""
    return _bucketed(events, month_key)


def weekly_activity(events: Iterable) -> List[ActivityBucket]:
    """Detections per ISO week in UTC ("YYYY-Www"), oldest week first."""
    return _bucketed(events, iso_week_key)


def personal_overview(events: Sequence) -> PersonalOverview:
    """
    Recompute a user's statistics from their events.

    This deliberately ignores the stored running aggregates so callers get
    a view that reflects exactly the events currently stored.
    """
    total = len(events)
    if total == 0:
        return PersonalOverview()

    successful = sum(1 for event in events if is_successful_detection(event.confidence))
    confidence_sum = sum(event.confidence for event in events)

    return PersonalOverview(
        total_detections=total,
        successful_detections=successful,
        success_rate=successful / total * 100,
        average_confidence=confidence_sum / total * 100,
        top_diseases=top_entities(events, by_disease),
        top_plants=top_entities(events, by_plant),
    )


def personal_analytics(events: Sequence) -> PersonalAnalytics:
    """
    Full analytics screen for one user.

    Args:
        events: The user's events, newest first
    """
    recent = [
        DetectionSummary(
            id=event.id,
            user_id=event.user_id,
            plant_name=event.plant_name,
            disease_name=event.disease_name,
            confidence=event.confidence,
            created_at=event.created_at,
        )
        for event in events[:RECENT_ACTIVITY_SIZE]
    ]
    return PersonalAnalytics(
        overview=personal_overview(events),
        monthly_activity=monthly_activity(events),
        weekly_activity=weekly_activity(events),
        recent_activity=recent,
    )


def monthly_growth(events: Iterable) -> List[MonthlyGrowth]:
    """Detections and distinct active users per UTC month, oldest first."""
    detections: Counter = Counter()
    users: Dict[str, Set[str]] = defaultdict(set)
    for event in events:
        period = month_key(event.created_at)
        detections[period] += 1
        users[period].add(event.user_id)

    return [
        MonthlyGrowth(period=period, detections=detections[period], users=len(users[period]))
        for period in sorted(detections)
    ]


def global_overview(
    events: Sequence[DetectionSummary],
    total_users: int,
    active_users: int,
    generated_at: Optional[datetime] = None,
) -> GlobalOverview:
    """
    Community statistics across every user's detections.

    Args:
        events: Every stored detection
        total_users: Number of known users
        active_users: Users with a detection inside the activity window
        generated_at: Timestamp recorded on the result
    """
    total = len(events)
    if total == 0:
        return GlobalOverview(
            total_users=total_users,
            active_users=active_users,
            generated_at=generated_at,
        )

    return GlobalOverview(
        total_users=total_users,
        active_users=active_users,
        total_detections=total,
        average_accuracy=sum(event.confidence for event in events) / total * 100,
        average_detections_per_user=total / total_users if total_users else 0.0,
        top_diseases=top_entities(events, by_disease),
        top_plants=top_entities(events, by_plant),
        monthly_growth=monthly_growth(events),
        generated_at=generated_at,
    )
