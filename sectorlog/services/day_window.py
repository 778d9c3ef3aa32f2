# =====================================================
# sectorlog/services/day_window.py - Local day boundaries
# =====================================================
"""
Confini del giorno locale.

Le letture sono salvate con timestamp UTC naive (orologio del server).
"Oggi" è sempre mezzanotte-mezzanotte nel fuso configurato
(SECTORLOG_TIMEZONE) e viene ricalcolato ad ogni valutazione.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from sectorlog.config import TIMEZONE

Clock = Callable[[], datetime]

_ONE_MICROSECOND = timedelta(microseconds=1)


def utc_now() -> datetime:
    """Orologio server, UTC naive (formato di storage)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_zone(name: str = TIMEZONE) -> tzinfo:
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def to_local(timestamp: datetime, zone: tzinfo) -> datetime:
    """UTC naive (o aware) -> datetime aware nel fuso locale"""
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(zone)


def local_day_of(timestamp: datetime, zone: tzinfo) -> date:
    return to_local(timestamp, zone).date()


def _local_midnight_utc(day: date, zone: tzinfo) -> datetime:
    midnight = datetime.combine(day, time.min, tzinfo=zone)
    return midnight.astimezone(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class DayWindow:
    """Intervallo chiuso [start, end] in UTC naive per un giorno locale"""
    day: date
    start: datetime
    end: datetime

    def contains(self, timestamp: datetime) -> bool:
        return self.start <= timestamp <= self.end


def day_window(day: date, zone: tzinfo) -> DayWindow:
    start = _local_midnight_utc(day, zone)
    next_start = _local_midnight_utc(day + timedelta(days=1), zone)
    return DayWindow(day=day, start=start, end=next_start - _ONE_MICROSECOND)


def today_window(now: datetime, zone: tzinfo) -> DayWindow:
    return day_window(local_day_of(now, zone), zone)


def trailing_window_start(now: datetime, days: int, zone: tzinfo) -> datetime:
    """Mezzanotte locale di (oggi - days + 1), in UTC naive"""
    if days < 1:
        raise ValueError("days must be >= 1")
    first_day = local_day_of(now, zone) - timedelta(days=days - 1)
    return _local_midnight_utc(first_day, zone)


def resolve_day(day: Optional[date], now: datetime, zone: tzinfo) -> date:
    return day if day is not None else local_day_of(now, zone)
