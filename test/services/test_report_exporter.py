# =====================================================
# test/services/test_report_exporter.py
# =====================================================
from datetime import date, datetime, timezone
from types import SimpleNamespace
from zoneinfo import ZoneInfo
import uuid

from sectorlog.services.report_exporter import (
    export_filename,
    export_readings_csv,
    format_number,
    quote_observation,
)

HEADER = "Time,Shift,Temperature (°C),Temp OK,Humidity (%),Humidity OK,Observations"


def reading(timestamp, shift, temperature, temperature_ok, humidity, humidity_ok, observation=""):
    return SimpleNamespace(
        id=uuid.uuid4(),
        timestamp=timestamp,
        shift=shift,
        temperature=temperature,
        temperature_ok=temperature_ok,
        humidity=humidity,
        humidity_ok=humidity_ok,
        observation=observation,
    )


class TestExportReadingsCsv:

    def test_two_readings_sorted_and_escaped(self):
        r1 = reading(datetime(2026, 3, 10, 8, 0), "Morning", 22.0, True, 55.0, True, 'He said "hi"')
        r2 = reading(datetime(2026, 3, 10, 14, 0), "Afternoon", 30.5, False, 40.0, True)

        csv_text = export_readings_csv([r2, r1], timezone.utc)
        lines = csv_text.split("\n")

        assert lines == [
            HEADER,
            '2026-03-10 08:00:00,Morning,22,true,55,true,"He said ""hi"""',
            '2026-03-10 14:00:00,Afternoon,30.5,false,40,true,""',
        ]

    def test_deterministic(self):
        readings = [
            reading(datetime(2026, 3, 10, 8, 0), "Morning", 22.0, True, 55.0, True, "a"),
            reading(datetime(2026, 3, 10, 20, 0), "Night", 19.5, True, 50.0, True, "b, c"),
        ]

        assert export_readings_csv(readings, timezone.utc) == export_readings_csv(list(reversed(readings)), timezone.utc)

    def test_header_only(self):
        assert export_readings_csv([], timezone.utc) == HEADER

    def test_local_time_column(self):
        rome = ZoneInfo("Europe/Rome")
        r = reading(datetime(2026, 3, 10, 7, 0), "Morning", 21.0, True, 50.0, True)

        line = export_readings_csv([r], rome).split("\n")[1]
        assert line.startswith("2026-03-10 08:00:00,")


class TestFormatting:

    def test_format_number(self):
        assert format_number(22.0) == "22"
        assert format_number(30.5) == "30.5"
        assert format_number(-1.25) == "-1.25"

    def test_quote_observation(self):
        assert quote_observation(None) == '""'
        assert quote_observation('x "y"') == '"x ""y"""'

    def test_export_filename(self):
        assert export_filename("Cold Room/A", date(2026, 3, 10)) == "readings_Cold_Room_A_2026-03-10.csv"
        assert export_filename("***", date(2026, 3, 10)) == "readings_sector_2026-03-10.csv"
