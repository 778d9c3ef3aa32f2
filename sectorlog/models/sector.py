# =====================================================
# sectorlog/models/sector.py - SQLAlchemy 2.0
# =====================================================
from sqlalchemy import String, Float, ForeignKey, CheckConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import List, Dict
import uuid

from .base import BaseModel

# Forward references
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from .reading import Reading

class Sector(BaseModel):
    """
    Sector model - luogo fisico monitorato.

    Definisce le soglie ideali di temperatura/umidità usate per
    valutare ogni lettura al momento dell'invio.
    """

    __tablename__ = "sectors"

    # ==========================================
    # OWNERSHIP & RELATIONSHIPS
    # ==========================================

    admin_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True
    )

    readings: Mapped[List["Reading"]] = relationship(
        "Reading",
        back_populates="sector",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # ==========================================
    # BASIC INFO
    # ==========================================

    name: Mapped[str] = mapped_column(String(100))
    location: Mapped[str] = mapped_column(String(200))
    responsible_name: Mapped[str] = mapped_column(String(100))

    # ==========================================
    # TEMPERATURE/HUMIDITY BOUNDS
    # ==========================================

    temp_min: Mapped[float] = mapped_column(Float)
    temp_max: Mapped[float] = mapped_column(Float)
    humidity_min: Mapped[float] = mapped_column(Float)
    humidity_max: Mapped[float] = mapped_column(Float)

    # ==========================================
    # CONSTRAINTS
    # ==========================================

    __table_args__ = (
        CheckConstraint('humidity_min >= 0 AND humidity_max <= 100', name='chk_sector_humidity_bounds'),
    )

    # ==========================================
    # BUSINESS LOGIC
    # ==========================================

    def __str__(self) -> str:
        return f"Sector(name={self.name}, location={self.location})"

    @property
    def share_path(self) -> str:
        """Path del link di registrazione condiviso con i collaboratori"""
        return f"/record/{self.id}"

    def is_temperature_valid(self, temp: float) -> bool:
        """Intervallo chiuso: i valori di soglia sono accettati"""
        return float(self.temp_min) <= temp <= float(self.temp_max)

    def is_humidity_valid(self, humidity: float) -> bool:
        """Intervallo chiuso: i valori di soglia sono accettati"""
        return float(self.humidity_min) <= humidity <= float(self.humidity_max)

    def get_bounds(self) -> Dict[str, float]:
        return {
            "temp_min": float(self.temp_min),
            "temp_max": float(self.temp_max),
            "humidity_min": float(self.humidity_min),
            "humidity_max": float(self.humidity_max),
        }
