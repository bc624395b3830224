# tests/test_detection_store.py
import asyncio
import unittest
from datetime import datetime, timedelta, timezone

from sqlalchemy import update

from plant_health_api.modules.plant_detection.application.commands.detection_commands import (
    RecordDetectionCommand,
    RemoveDetectionCommand,
    UpdateDetectionCommand,
)
from plant_health_api.modules.plant_detection.application.handlers.command_handlers import (
    RecordDetectionCommandHandler,
    RemoveDetectionCommandHandler,
    UpdateDetectionCommandHandler,
)
from plant_health_api.modules.plant_detection.application.handlers.query_handlers import (
    GetDetectionQueryHandler,
    GlobalOverviewQueryHandler,
    HistoryStatsQueryHandler,
    QueryHistoryQueryHandler,
)
from plant_health_api.modules.plant_detection.application.queries.detection_queries import (
    GetDetectionQuery,
    GlobalOverviewQuery,
    HistoryStatsQuery,
    QueryHistoryQuery,
)
from plant_health_api.modules.plant_detection.infrastructure.database.models import DetectionModel
from plant_health_api.modules.user_management.application.handlers.query_handlers import GetUserStatsQueryHandler
from plant_health_api.modules.user_management.application.queries.get_user_stats import GetUserStatsQuery
from plant_health_api.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
from plant_health_api.shared.config.redis import CacheManager
from plant_health_api.shared.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from plant_health_api.shared.infrastructure.database.session import session_manager
from tests.utils import close_test_database, open_test_database

SCENARIO = [
    ("Tomato", "Early Blight", 0.9),
    ("Tomato", "Early Blight", 0.85),
    ("Potato", "Late Blight", 0.4),
]


class DatabaseTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.db_url = await open_test_database()
        self.record_handler = RecordDetectionCommandHandler(session_manager)
        self.remove_handler = RemoveDetectionCommandHandler(session_manager)
        self.history_handler = QueryHistoryQueryHandler(session_manager)
        self.stats_handler = GetUserStatsQueryHandler(session_manager)

    async def asyncTearDown(self):
        await close_test_database(self.db_url)

    async def record(self, plant, disease, confidence, user_id="user-1"):
        return await self.record_handler.handle(
            RecordDetectionCommand(user_id=user_id, plant_name=plant, disease_name=disease, confidence=confidence)
        )

    async def stats(self, user_id="user-1"):
        return await self.stats_handler.handle(GetUserStatsQuery(user_id=user_id))

    async def history(self, page=1, limit=20, user_id="user-1", **filters):
        return await self.history_handler.handle(
            QueryHistoryQuery(requesting_user_id=user_id, user_id=user_id, page=page, limit=limit, **filters)
        )


class TestRecordDetection(DatabaseTestCase):
    async def test_scenario_updates_running_stats(self):
        for plant, disease, confidence in SCENARIO:
            await self.record(plant, disease, confidence)

        stats = await self.stats()
        self.assertEqual(stats.total_detections, 3)
        self.assertEqual(stats.successful_detections, 2)
        self.assertAlmostEqual(stats.average_confidence, 0.716667, places=5)
        self.assertAlmostEqual(stats.success_rate, 66.6667, places=3)
        self.assertIsNotNone(stats.last_detection_at)

    async def test_unknown_user_has_zero_stats(self):
        stats = await self.stats("nobody")
        self.assertEqual(stats.total_detections, 0)
        self.assertEqual(stats.average_confidence, 0.0)

    async def test_invalid_confidence_is_rejected_without_side_effects(self):
        with self.assertRaises(ValidationError):
            await self.record("Tomato", "Early Blight", 1.5)
        with self.assertRaises(ValidationError):
            await self.record("   ", "Early Blight", 0.7)

        self.assertEqual((await self.stats()).total_detections, 0)
        self.assertEqual((await self.history()).total, 0)

    async def test_concurrent_records_are_all_counted(self):
        events = await asyncio.gather(*(self.record("Tomato", "Early Blight", 0.6) for _ in range(20)))

        stats = await self.stats()
        self.assertEqual(stats.total_detections, 20)
        self.assertEqual(stats.successful_detections, 20)

        created = sorted(event.created_at for event in events)
        self.assertEqual(len(set(created)), 20)
        self.assertTrue(all(a < b for a, b in zip(created, created[1:])))

    async def test_stats_match_stored_events(self):
        for plant, disease, confidence in SCENARIO:
            await self.record(plant, disease, confidence)

        page = await self.history(limit=100)
        stats = await self.stats()
        self.assertEqual(stats.total_detections, page.total)
        self.assertAlmostEqual(
            stats.average_confidence,
            sum(event.confidence for event in page.events) / page.total,
            places=6,
        )


class TestRemoveDetection(DatabaseTestCase):
    async def test_remove_subtracts_from_stats(self):
        events = [await self.record(*row) for row in SCENARIO]

        stats = await self.remove_handler.handle(
            RemoveDetectionCommand(user_id="user-1", detection_id=events[2].id)
        )
        self.assertEqual(stats.total_detections, 2)
        self.assertEqual(stats.successful_detections, 2)
        self.assertAlmostEqual(stats.average_confidence, 0.875, places=6)

        with self.assertRaises(NotFoundError):
            await self.remove_handler.handle(RemoveDetectionCommand(user_id="user-1", detection_id=events[2].id))

    async def test_remove_by_other_user_is_denied(self):
        event = await self.record("Tomato", "Early Blight", 0.9)
        before = await self.stats()

        with self.assertRaises(AuthorizationError):
            await self.remove_handler.handle(RemoveDetectionCommand(user_id="user-2", detection_id=event.id))

        after = await self.stats()
        self.assertEqual(before.total_detections, after.total_detections)
        self.assertEqual((await self.history()).total, 1)

    async def test_remove_missing_detection(self):
        with self.assertRaises(NotFoundError):
            await self.remove_handler.handle(RemoveDetectionCommand(user_id="user-1", detection_id="missing"))

    async def test_revert_floors_at_zero(self):
        async with session_manager.get_session() as session:
            users = UserRepositoryImpl(session)
            await users.get_or_create("user-1")
            stats = await users.revert_detection("user-1", confidence=0.9, successful=True)

        self.assertEqual(stats.total_detections, 0)
        self.assertEqual(stats.successful_detections, 0)
        self.assertEqual(stats.sum_confidence, 0.0)


class TestHistoryQuery(DatabaseTestCase):
    async def test_pages_cover_every_detection_once(self):
        recorded = [await self.record("Tomato", "Early Blight", 0.6) for _ in range(25)]

        pages = [await self.history(page=n, limit=10) for n in (1, 2, 3)]
        self.assertEqual([p.pages for p in pages], [3, 3, 3])
        self.assertEqual([len(p.events) for p in pages], [10, 10, 5])

        seen = [event.id for p in pages for event in p.events]
        self.assertEqual(len(seen), len(set(seen)))
        self.assertEqual(set(seen), {event.id for event in recorded})

        timestamps = [event.created_at for p in pages for event in p.events]
        self.assertEqual(timestamps, sorted(timestamps, reverse=True))

        self.assertEqual((await self.history(page=4, limit=10)).events, [])

    async def test_repeated_reads_are_identical(self):
        for plant, disease, confidence in SCENARIO:
            await self.record(plant, disease, confidence)

        first = await self.history(limit=2)
        second = await self.history(limit=2)
        self.assertEqual([e.id for e in first.events], [e.id for e in second.events])

    async def test_disease_filter_applies_to_total(self):
        for plant, disease, confidence in SCENARIO:
            await self.record(plant, disease, confidence)

        page = await self.history(disease_name="Early Blight")
        self.assertEqual(page.total, 2)
        self.assertTrue(all(e.disease_name == "Early Blight" for e in page.events))

        self.assertEqual((await self.history(plant_name="Pepper")).total, 0)

    async def test_date_range_is_inclusive(self):
        event = await self.record("Tomato", "Early Blight", 0.6)

        page = await self.history(start_date=event.created_at, end_date=event.created_at)
        self.assertEqual(page.total, 1)

        later = event.created_at + timedelta(seconds=1)
        self.assertEqual((await self.history(start_date=later)).total, 0)

    async def test_latest_recorded_detection_is_first(self):
        await self.record("Potato", "Late Blight", 0.4)
        recorded = await self.record("Tomato", "Early Blight", 0.9)

        page = await self.history(limit=1)
        self.assertEqual(len(page.events), 1)
        self.assertEqual(page.events[0].id, recorded.id)
        self.assertEqual(page.events[0].disease_name, "Early Blight")

    async def test_equal_timestamps_are_ordered_by_id(self):
        for plant, disease, confidence in SCENARIO * 2:
            await self.record(plant, disease, confidence)

        moment = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
        async with session_manager.get_session() as session:
            await session.execute(update(DetectionModel).values(created_at=moment))

        first = await self.history(limit=4)
        second = await self.history(page=2, limit=4)
        ids = [e.id for e in first.events + second.events]
        self.assertEqual(len(ids), 6)
        self.assertEqual(ids, sorted(ids, reverse=True))

    async def test_date_bounds_with_other_offsets(self):
        event = await self.record("Tomato", "Early Blight", 0.6)
        plus_two = timezone(timedelta(hours=2))

        start = event.created_at.astimezone(plus_two)
        page = await self.history(start_date=start, end_date=start)
        self.assertEqual(page.total, 1)

        later = (event.created_at + timedelta(seconds=1)).astimezone(plus_two)
        self.assertEqual((await self.history(start_date=later)).total, 0)

    async def test_limit_is_capped(self):
        await self.record("Tomato", "Early Blight", 0.6)
        self.assertEqual((await self.history(limit=500)).limit, 100)

    async def test_other_users_history_is_denied(self):
        with self.assertRaises(AuthorizationError):
            await self.history_handler.handle(QueryHistoryQuery(requesting_user_id="user-1", user_id="user-2"))

    async def test_empty_history(self):
        page = await self.history()
        self.assertEqual((page.total, page.pages, page.events), (0, 0, []))

    async def test_history_stats_for_period(self):
        for plant, disease, confidence in SCENARIO:
            await self.record(plant, disease, confidence)

        handler = HistoryStatsQueryHandler(session_manager)
        overview = await handler.handle(HistoryStatsQuery(requesting_user_id="user-1", user_id="user-1"))
        self.assertEqual(overview.total_detections, 3)
        self.assertEqual(overview.top_diseases[0].name, "Early Blight")

        future = datetime.now(timezone.utc) + timedelta(days=1)
        empty = await handler.handle(
            HistoryStatsQuery(requesting_user_id="user-1", user_id="user-1", start_date=future)
        )
        self.assertEqual(empty.total_detections, 0)


class TestUpdateDetection(DatabaseTestCase):
    async def test_correction_changes_names_but_not_stats(self):
        event = await self.record("Tomato", "Early Blight", 0.9)
        before = await self.stats()

        handler = UpdateDetectionCommandHandler(session_manager)
        updated = await handler.handle(
            UpdateDetectionCommand(user_id="user-1", detection_id=event.id, disease_name="Septoria Leaf Spot")
        )

        self.assertEqual(updated.disease_name, "Septoria Leaf Spot")
        self.assertEqual(updated.created_at, event.created_at)
        self.assertEqual(updated.confidence, event.confidence)
        after = await self.stats()
        self.assertEqual(before.total_detections, after.total_detections)
        self.assertAlmostEqual(before.sum_confidence, after.sum_confidence)

        fetched = await GetDetectionQueryHandler(session_manager).handle(
            GetDetectionQuery(requesting_user_id="user-1", detection_id=event.id)
        )
        self.assertEqual(fetched.disease_name, "Septoria Leaf Spot")

    async def test_empty_correction_is_rejected(self):
        event = await self.record("Tomato", "Early Blight", 0.9)
        with self.assertRaises(ValidationError):
            await UpdateDetectionCommandHandler(session_manager).handle(
                UpdateDetectionCommand(user_id="user-1", detection_id=event.id)
            )

    async def test_other_user_cannot_read_or_correct(self):
        event = await self.record("Tomato", "Early Blight", 0.9)
        with self.assertRaises(AuthorizationError):
            await GetDetectionQueryHandler(session_manager).handle(
                GetDetectionQuery(requesting_user_id="user-2", detection_id=event.id)
            )
        with self.assertRaises(AuthorizationError):
            await UpdateDetectionCommandHandler(session_manager).handle(
                UpdateDetectionCommand(user_id="user-2", detection_id=event.id, plant_name="Potato")
            )


class TestGlobalOverview(DatabaseTestCase):
    async def test_overview_without_cache(self):
        await self.record("Tomato", "Early Blight", 0.9, user_id="user-1")
        await self.record("Tomato", "Early Blight", 0.7, user_id="user-1")
        await self.record("Potato", "Late Blight", 0.5, user_id="user-2")

        handler = GlobalOverviewQueryHandler(session_manager, CacheManager(None))
        overview = await handler.handle(GlobalOverviewQuery())

        self.assertEqual(overview.total_users, 2)
        self.assertEqual(overview.active_users, 2)
        self.assertEqual(overview.total_detections, 3)
        self.assertAlmostEqual(overview.average_accuracy, 70.0)
        self.assertAlmostEqual(overview.average_detections_per_user, 1.5)
        self.assertEqual(overview.top_diseases[0].name, "Early Blight")
        self.assertIsNotNone(overview.generated_at)


if __name__ == "__main__":
    unittest.main()
