# =====================================================
# sectorlog/schemas/report.py - Dashboard / report schemas
# =====================================================
from pydantic import BaseModel, Field
from typing import Dict, List
from datetime import date
from enum import Enum
import uuid

from sectorlog.models.reading import Shift

class HistoryPeriodEnum(str, Enum):
    WEEK = "week"
    MONTH = "month"

    @property
    def days(self) -> int:
        return 7 if self is HistoryPeriodEnum.WEEK else 30

class SectorShiftStatus(BaseModel):
    """Turni completati oggi per un settore"""
    sector_id: uuid.UUID
    name: str
    shifts: Dict[Shift, bool]
    redundant: Dict[Shift, int] = Field(default_factory=dict, description="Extra readings per shift")

    @property
    def completed(self) -> int:
        return sum(1 for done in self.shifts.values() if done)

class DailyStatusResponse(BaseModel):
    day: date
    sectors: List[SectorShiftStatus]

class HistoryPoint(BaseModel):
    """Media giornaliera per il grafico storico"""
    day: date
    label: str = Field(..., description="dd/MM")
    temperature: float
    humidity: float
    readings: int

class HistoryResponse(BaseModel):
    sector_id: uuid.UUID
    period: HistoryPeriodEnum
    points: List[HistoryPoint]
