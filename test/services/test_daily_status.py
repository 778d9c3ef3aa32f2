# =====================================================
# test/services/test_daily_status.py
# =====================================================
from datetime import date, datetime, timezone
from types import SimpleNamespace
import uuid

from sqlalchemy.exc import OperationalError

from sectorlog.models.reading import Shift
from sectorlog.repositories.reading_repository import ReadingRepository
from sectorlog.services.daily_status import DailyStatusAggregator, compute_daily_status, sector_status
from sectorlog.services.repository_factory import RepositoryFactory

NOW = datetime(2026, 3, 10, 12, 0, 0)


def fake_reading(sector, shift):
    return SimpleNamespace(sector_id=sector.id, shift=Shift(shift).value)


def fake_sector(name="Sector"):
    return SimpleNamespace(id=uuid.uuid4(), name=name)


class TestSectorStatus:

    def test_no_readings_all_shifts_false(self):
        sector = fake_sector()
        status = sector_status(sector, [])

        assert status.shifts == {Shift.MORNING: False, Shift.AFTERNOON: False, Shift.NIGHT: False}
        assert status.redundant == {}
        assert status.completed == 0

    def test_completed_shifts(self):
        sector = fake_sector()
        status = sector_status(sector, [fake_reading(sector, Shift.MORNING), fake_reading(sector, Shift.NIGHT)])

        assert status.shifts[Shift.MORNING] is True
        assert status.shifts[Shift.AFTERNOON] is False
        assert status.shifts[Shift.NIGHT] is True
        assert status.completed == 2

    def test_redundant_readings_are_counted(self):
        sector = fake_sector()
        readings = [fake_reading(sector, Shift.MORNING)] * 3

        status = sector_status(sector, readings)
        assert status.shifts[Shift.MORNING] is True
        assert status.redundant == {Shift.MORNING: 2}

    def test_other_sectors_readings_ignored(self):
        sector, other = fake_sector(), fake_sector()
        status = sector_status(sector, [fake_reading(other, Shift.MORNING)])
        assert status.completed == 0


class TestComputeDailyStatus:

    def test_idempotent(self):
        first, second = fake_sector("First"), fake_sector("Second")
        readings = {
            first.id: [fake_reading(first, Shift.AFTERNOON)],
            second.id: [fake_reading(second, Shift.MORNING), fake_reading(second, Shift.NIGHT)],
        }

        assert compute_daily_status([first, second], readings) == compute_daily_status([first, second], readings)

    def test_order_independent(self):
        sector = fake_sector()
        readings = [fake_reading(sector, Shift.NIGHT), fake_reading(sector, Shift.MORNING)]

        forward = compute_daily_status([sector], {sector.id: readings})
        backward = compute_daily_status([sector], {sector.id: list(reversed(readings))})
        assert forward == backward

    def test_sector_without_entry(self):
        sector = fake_sector()
        result = compute_daily_status([sector], {})
        assert not any(result[sector.id].shifts.values())


class TestDailyStatusAggregator:

    def test_compute_from_store(self, repositories, sample_sector, make_reading):
        make_reading(sample_sector, timestamp=datetime(2026, 3, 10, 7, 0), shift=Shift.MORNING)
        make_reading(sample_sector, timestamp=datetime(2026, 3, 9, 21, 0), shift=Shift.NIGHT)

        window, status = DailyStatusAggregator(repositories, timezone.utc).compute([sample_sector], NOW)

        assert window.day == date(2026, 3, 10)
        assert status[sample_sector.id].shifts == {
            Shift.MORNING: True,
            Shift.AFTERNOON: False,
            Shift.NIGHT: False,
        }

    def test_failing_sector_does_not_stop_others(self, test_db, sample_sector, make_reading, monkeypatch):
        broken = fake_sector("Broken")
        make_reading(sample_sector, shift=Shift.AFTERNOON, timestamp=datetime(2026, 3, 10, 15, 0))

        repositories = RepositoryFactory(test_db)
        real_window_filter = ReadingRepository._window_filter

        def flaky_window_filter(self, sector_id, start, end):
            if sector_id == broken.id:
                raise OperationalError("SELECT", {}, Exception("connection lost"))
            return real_window_filter(self, sector_id, start, end)

        monkeypatch.setattr(ReadingRepository, "_window_filter", flaky_window_filter)

        _, status = DailyStatusAggregator(repositories, timezone.utc).compute([broken, sample_sector], NOW)

        assert status[broken.id].completed == 0
        assert status[sample_sector.id].shifts[Shift.AFTERNOON] is True
