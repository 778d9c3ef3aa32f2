# =====================================================
# sectorlog/models/reading.py - SQLAlchemy 2.0
# =====================================================
from sqlalchemy import String, Float, Boolean, Date, ForeignKey, CheckConstraint, UniqueConstraint, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import date, datetime
import enum
import uuid

from .base import BaseModel

# Forward references
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from .sector import Sector

class Shift(str, enum.Enum):
    """I tre turni giornalieri: chiave di deduplica delle letture"""
    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    NIGHT = "Night"

class Reading(BaseModel):
    """
    Reading model - una lettura temperatura/umidità per turno.

    I flag temperature_ok / humidity_ok sono uno snapshot delle soglie
    del settore al momento dell'invio: modifiche successive al settore
    non li ricalcolano.
    """

    __tablename__ = "readings"

    # ==========================================
    # FOREIGN KEYS & RELATIONSHIPS
    # ==========================================

    sector_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("sectors.id", ondelete="CASCADE"),
        index=True
    )

    # Copiato dal settore all'invio (il collaboratore non è autenticato)
    admin_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), index=True)

    sector: Mapped["Sector"] = relationship("Sector", back_populates="readings")

    # ==========================================
    # TIMESTAMP
    # ==========================================

    timestamp: Mapped[datetime] = mapped_column(index=True)  # UTC naive, orologio server
    local_day: Mapped[date] = mapped_column(Date)  # giorno nel fuso configurato

    # ==========================================
    # MEASUREMENTS
    # ==========================================

    temperature: Mapped[float] = mapped_column(Float)
    humidity: Mapped[float] = mapped_column(Float)
    shift: Mapped[str] = mapped_column(String(20))
    observation: Mapped[str] = mapped_column(String(500), default="")

    # ==========================================
    # RANGE FLAGS (snapshot)
    # ==========================================

    temperature_ok: Mapped[bool] = mapped_column(Boolean)
    humidity_ok: Mapped[bool] = mapped_column(Boolean)

    # ==========================================
    # CONSTRAINTS
    # ==========================================

    __table_args__ = (
        CheckConstraint(
            "shift IN ('Morning', 'Afternoon', 'Night')",
            name='chk_reading_shift_valid'
        ),
        CheckConstraint('humidity BETWEEN 0 AND 100', name='chk_reading_humidity_range'),
        UniqueConstraint('sector_id', 'local_day', 'shift', name='uq_readings_sector_day_shift'),
        Index('ix_readings_sector_timestamp', 'sector_id', 'timestamp'),
    )

    # ==========================================
    # BUSINESS LOGIC
    # ==========================================

    def __str__(self) -> str:
        return f"Reading(sector={self.sector_id}, shift={self.shift}, time={self.timestamp})"

    @property
    def is_compliant(self) -> bool:
        """Entrambi i valori nei range del settore"""
        return self.temperature_ok and self.humidity_ok
