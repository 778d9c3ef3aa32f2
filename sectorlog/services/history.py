# =====================================================
# sectorlog/services/history.py - History Aggregator
# =====================================================
from collections import defaultdict
from datetime import date, tzinfo
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List

from sectorlog.schemas.report import HistoryPoint
from .day_window import local_day_of

_ONE_DECIMAL = Decimal("0.1")


def round_one_decimal(value: float) -> float:
    """Arrotondamento a una cifra, metà lontano da zero"""
    return float(Decimal(value).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def build_history(readings: Iterable, zone: tzinfo) -> List[HistoryPoint]:
    """
    Un punto per giorno locale con almeno una lettura: media di
    temperatura e umidità. Nessun riempimento dei giorni vuoti.
    """
    grouped: Dict[date, List] = defaultdict(list)
    for reading in readings:
        grouped[local_day_of(reading.timestamp, zone)].append(reading)

    points = []
    for day in sorted(grouped):
        day_readings = grouped[day]
        count = len(day_readings)
        points.append(HistoryPoint(
            day=day,
            label=day.strftime("%d/%m"),
            temperature=round_one_decimal(sum(float(r.temperature) for r in day_readings) / count),
            humidity=round_one_decimal(sum(float(r.humidity) for r in day_readings) / count),
            readings=count,
        ))
    return points
