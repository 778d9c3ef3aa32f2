# =====================================================
# sectorlog/services/report_exporter.py - CSV Report Exporter
# =====================================================
from datetime import date, tzinfo
from typing import Iterable
import re

from sectorlog.models.reading import Shift
from .day_window import to_local

CSV_HEADERS = (
    "Time",
    "Shift",
    "Temperature (°C)",
    "Temp OK",
    "Humidity (%)",
    "Humidity OK",
    "Observations",
)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_number(value) -> str:
    """22.0 -> "22", 30.5 -> "30.5" """
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_flag(value: bool) -> str:
    return "true" if value else "false"


def quote_observation(text) -> str:
    return '"' + (text or "").replace('"', '""') + '"'


def export_readings_csv(readings: Iterable, zone: tzinfo) -> str:
    """
    CSV deterministico: header + una riga per lettura, ordinate per timestamp.

    Solo la colonna osservazioni è quotata.
    """
    ordered = sorted(readings, key=lambda r: (r.timestamp, str(r.id)))
    lines = [",".join(CSV_HEADERS)]
    for reading in ordered:
        lines.append(",".join([
            to_local(reading.timestamp, zone).strftime(TIMESTAMP_FORMAT),
            Shift(reading.shift).value,
            format_number(reading.temperature),
            format_flag(reading.temperature_ok),
            format_number(reading.humidity),
            format_flag(reading.humidity_ok),
            quote_observation(reading.observation),
        ]))
    return "\n".join(lines)


def export_filename(sector_name: str, day: date) -> str:
    safe_name = re.sub(r"[^\w\-]+", "_", sector_name).strip("_") or "sector"
    return f"readings_{safe_name}_{day.isoformat()}.csv"
