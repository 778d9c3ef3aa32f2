# =====================================================
# sectorlog/services/submission_guard.py - Reading Submission Guard
# =====================================================
"""
Validazione e persistenza delle letture inviate dal link condiviso.

Protocollo in due passi (read-then-write):
1. query one-shot: esiste già una lettura per (settore, turno) nel giorno
   locale corrente? -> DuplicateShiftError, nessuna scrittura
2. insert con timestamp del server e flag di range congelati

I due passi non sono atomici: due invii concorrenti possono superare
entrambi il passo 1. Il vincolo uq_readings_sector_day_shift chiude
la finestra e l'IntegrityError viene riportato come DuplicateShiftError.
"""
from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional
import logging
import numbers
import uuid

from sectorlog.database.exceptions import DuplicateEntityError, DuplicateShiftError, EntityNotFoundError
from sectorlog.models.reading import Reading, Shift
from sectorlog.models.sector import Sector
from sectorlog.schemas.reading import ReadingSubmission
from .day_window import Clock, get_zone, today_window, utc_now
from .repository_factory import RepositoryFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RangeCheck:
    """None = valore non ancora inserito (né ok né fuori range)"""
    temperature_ok: Optional[bool]
    humidity_ok: Optional[bool]

    @property
    def evaluable(self) -> bool:
        return self.temperature_ok is not None and self.humidity_ok is not None


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and value == value


def check_ranges(sector: Sector, temperature=None, humidity=None) -> RangeCheck:
    """Confronto a intervallo chiuso con le soglie correnti del settore"""
    temperature_ok = sector.is_temperature_valid(float(temperature)) if _is_number(temperature) else None
    humidity_ok = sector.is_humidity_valid(float(humidity)) if _is_number(humidity) else None
    return RangeCheck(temperature_ok=temperature_ok, humidity_ok=humidity_ok)


class ReadingSubmissionGuard:
    """Decide accept/reject di una lettura e la persiste"""

    def __init__(
        self,
        repositories: RepositoryFactory,
        clock: Clock = utc_now,
        zone: Optional[tzinfo] = None,
        feed=None,
    ):
        self.repositories = repositories
        self.clock = clock
        self.zone = zone or get_zone()
        self.feed = feed

    def get_sector(self, sector_id: uuid.UUID) -> Sector:
        sector = self.repositories.sectors.get_by_id(sector_id)
        if sector is None:
            raise EntityNotFoundError(f"Sector {sector_id} not found")
        return sector

    def preview(self, sector_id: uuid.UUID, temperature=None, humidity=None) -> RangeCheck:
        """Valutazione dei range senza scrittura (avvisi inline nel form)"""
        return check_ranges(self.get_sector(sector_id), temperature, humidity)

    def submit(self, sector_id: uuid.UUID, submission: ReadingSubmission) -> Reading:
        sector = self.get_sector(sector_id)
        shift = Shift(submission.shift)

        now = self.clock()
        window = today_window(now, self.zone)

        # Step 1: controllo one-shot, nessuna transazione con lo step 2
        if self.repositories.readings.exists_for_shift(sector.id, shift, window.start, window.end):
            logger.info("Duplicate %s reading rejected for sector %s on %s", shift.value, sector.id, window.day)
            raise DuplicateShiftError(sector.id, shift.value, window.day)

        checks = check_ranges(sector, submission.temperature, submission.humidity)

        # Step 2: insert
        try:
            reading = self.repositories.readings.create({
                "sector_id": sector.id,
                "admin_id": sector.admin_id,
                "timestamp": now,
                "local_day": window.day,
                "temperature": submission.temperature,
                "humidity": submission.humidity,
                "shift": shift.value,
                "observation": submission.observation or "",
                "temperature_ok": checks.temperature_ok,
                "humidity_ok": checks.humidity_ok,
            })
        except DuplicateEntityError as e:
            logger.warning("Concurrent %s reading for sector %s rejected by unique constraint", shift.value, sector.id)
            raise DuplicateShiftError(sector.id, shift.value, window.day) from e

        logger.info(
            "Reading %s stored for sector %s (%s, temp_ok=%s, humidity_ok=%s)",
            reading.id, sector.id, shift.value, reading.temperature_ok, reading.humidity_ok,
        )
        if self.feed is not None:
            self.feed.publish(sector.id)
        return reading
