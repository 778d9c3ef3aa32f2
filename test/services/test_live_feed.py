# =====================================================
# test/services/test_live_feed.py
# =====================================================
from datetime import date, datetime, timezone
from types import SimpleNamespace
import asyncio
import uuid

import pytest

from sectorlog.database.connection import SessionLocal
from sectorlog.models.reading import Shift
from sectorlog.services.daily_status import watch_daily_status
from sectorlog.services.live_feed import ReadingFeed, ReadingQuery, make_snapshot_loader

NOW = datetime(2026, 3, 10, 12, 0, 0)


class CountingLoader:
    """Loader finto: ogni chiamata ritorna un nuovo snapshot numerato"""

    def __init__(self, readings=None):
        self.calls = 0
        self.readings = readings or []

    def __call__(self, query):
        self.calls += 1
        return list(self.readings)


def failing_loader(query):
    raise RuntimeError("permission denied")


class TestReadingQuery:

    def test_today_window(self):
        start, end = ReadingQuery(sector_id=uuid.uuid4()).resolve_window(NOW, timezone.utc)
        assert start == datetime(2026, 3, 10)
        assert end == datetime(2026, 3, 10, 23, 59, 59, 999999)

    def test_selected_day(self):
        query = ReadingQuery(sector_id=uuid.uuid4(), day=date(2026, 3, 1))
        start, _ = query.resolve_window(NOW, timezone.utc)
        assert start == datetime(2026, 3, 1)

    def test_trailing_days_open_ended(self):
        query = ReadingQuery(sector_id=uuid.uuid4(), trailing_days=7)
        start, end = query.resolve_window(NOW, timezone.utc)
        assert start == datetime(2026, 3, 4)
        assert end is None


class TestSubscription:

    async def test_initial_snapshot_then_updates(self):
        feed = ReadingFeed()
        loader = CountingLoader()
        sector_id = uuid.uuid4()

        async with feed.subscribe(ReadingQuery(sector_id=sector_id), loader) as subscription:
            await subscription.__anext__()
            assert loader.calls == 1

            assert feed.publish(sector_id) == 1
            await asyncio.wait_for(subscription.__anext__(), timeout=1)
            assert loader.calls == 2

        assert feed.active_count == 0

    async def test_publish_only_matching_sector(self):
        feed = ReadingFeed()
        loader = CountingLoader()
        sector_id = uuid.uuid4()

        async with feed.subscribe(ReadingQuery(sector_id=sector_id), loader) as subscription:
            await subscription.__anext__()

            assert feed.publish(uuid.uuid4()) == 0
            with pytest.raises(asyncio.TimeoutError):
                await asyncio.wait_for(subscription.__anext__(), timeout=0.05)

    async def test_close_ends_iteration(self):
        feed = ReadingFeed()
        subscription = feed.subscribe(ReadingQuery(sector_id=uuid.uuid4()), CountingLoader())
        await subscription.__anext__()

        subscription.close()

        assert subscription.closed
        assert feed.active_count == 0
        with pytest.raises(StopAsyncIteration):
            await subscription.__anext__()

    async def test_failing_loader_closes_only_its_subscription(self):
        feed = ReadingFeed()
        sector_id = uuid.uuid4()
        broken = feed.subscribe(ReadingQuery(sector_id=sector_id), failing_loader)
        healthy = feed.subscribe(ReadingQuery(sector_id=sector_id), CountingLoader())

        snapshots = [snapshot async for snapshot in broken]
        assert snapshots == []
        assert broken.closed

        snapshot = await healthy.__anext__()
        assert snapshot.readings == []
        assert feed.active_count == 1
        healthy.close()

    async def test_publish_from_worker_thread(self):
        feed = ReadingFeed()
        loader = CountingLoader()
        sector_id = uuid.uuid4()

        async with feed.subscribe(ReadingQuery(sector_id=sector_id), loader) as subscription:
            await subscription.__anext__()
            await asyncio.to_thread(feed.publish, sector_id)
            await asyncio.wait_for(subscription.__anext__(), timeout=1)

        assert loader.calls == 2


class TestSnapshotLoader:

    def test_loads_window_with_own_session(self, sample_sector, make_reading, zone):
        make_reading(sample_sector, timestamp=datetime(2026, 3, 10, 8, 0), shift=Shift.MORNING)
        make_reading(sample_sector, timestamp=datetime(2026, 3, 9, 8, 0), shift=Shift.MORNING)

        load = make_snapshot_loader(SessionLocal, zone, lambda: NOW)
        readings = load(ReadingQuery(sector_id=sample_sector.id))

        assert len(readings) == 1
        assert readings[0].shift == Shift.MORNING
        assert readings[0].is_compliant is True


class TestWatchDailyStatus:

    async def test_merges_sectors_and_isolates_failures(self):
        feed = ReadingFeed()
        healthy = SimpleNamespace(id=uuid.uuid4(), name="Healthy")
        broken = SimpleNamespace(id=uuid.uuid4(), name="Broken")

        def loader(query):
            if query.sector_id == broken.id:
                raise RuntimeError("permission denied")
            return [SimpleNamespace(sector_id=healthy.id, shift=Shift.MORNING.value)]

        stream = watch_daily_status(feed, [healthy, broken], loader)
        status = await asyncio.wait_for(stream.__anext__(), timeout=1)

        assert status[healthy.id].shifts[Shift.MORNING] is True
        assert status[broken.id].completed == 0

        await stream.aclose()
        assert feed.active_count == 0

    async def test_no_sectors(self):
        statuses = [status async for status in watch_daily_status(ReadingFeed(), [], CountingLoader())]
        assert statuses == [{}]
