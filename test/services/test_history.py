# =====================================================
# test/services/test_history.py
# =====================================================
from datetime import date, datetime, timezone
from types import SimpleNamespace
from zoneinfo import ZoneInfo

from sectorlog.services.history import build_history, round_one_decimal


def reading(timestamp, temperature, humidity=50.0):
    return SimpleNamespace(timestamp=timestamp, temperature=temperature, humidity=humidity)


class TestRounding:

    def test_half_rounds_away_from_zero(self):
        assert round_one_decimal(22.25) == 22.3
        assert round_one_decimal(-0.25) == -0.3
        assert round_one_decimal(18.0) == 18.0

    def test_float_representation(self):
        # 0.15 non è rappresentabile esattamente
        assert round_one_decimal(21.0 + 1 / 3) == 21.3


class TestBuildHistory:

    def test_daily_averages(self):
        readings = [
            reading(datetime(2026, 3, 10, 8, 0), 20.0, 40.0),
            reading(datetime(2026, 3, 10, 14, 0), 22.0, 50.0),
            reading(datetime(2026, 3, 10, 22, 0), 24.0, 61.0),
            reading(datetime(2026, 3, 11, 8, 0), 18.0, 45.0),
        ]

        points = build_history(readings, timezone.utc)

        assert len(points) == 2
        assert points[0].day == date(2026, 3, 10)
        assert points[0].temperature == 22.0
        assert points[0].humidity == 50.3
        assert points[0].readings == 3
        assert points[0].label == "10/03"
        assert points[1].day == date(2026, 3, 11)
        assert points[1].temperature == 18.0

    def test_sorted_by_date_not_label(self):
        readings = [
            reading(datetime(2026, 3, 2, 8, 0), 20.0),
            reading(datetime(2026, 2, 28, 8, 0), 19.0),
        ]

        points = build_history(readings, timezone.utc)
        assert [p.label for p in points] == ["28/02", "02/03"]

    def test_empty_days_not_filled(self):
        readings = [
            reading(datetime(2026, 3, 1, 8, 0), 20.0),
            reading(datetime(2026, 3, 5, 8, 0), 21.0),
        ]
        assert len(build_history(readings, timezone.utc)) == 2

    def test_no_readings(self):
        assert build_history([], timezone.utc) == []

    def test_grouped_by_local_day(self):
        sao_paulo = ZoneInfo("America/Sao_Paulo")
        readings = [
            reading(datetime(2026, 3, 10, 20, 0), 20.0),
            # 01:00 UTC dell'11 = 22:00 del 10 a São Paulo
            reading(datetime(2026, 3, 11, 1, 0), 24.0),
        ]

        points = build_history(readings, sao_paulo)
        assert len(points) == 1
        assert points[0].temperature == 22.0
