# =====================================================
# sectorlog/schemas/reading.py - Pydantic Schemas
# =====================================================
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from typing import Optional
from datetime import date, datetime
import uuid

from sectorlog.config import OBSERVATION_MAX_LENGTH
from sectorlog.models.reading import Shift

class ReadingSubmission(BaseModel):
    """Lettura inviata dal collaboratore tramite link condiviso"""
    model_config = ConfigDict(allow_inf_nan=False)

    temperature: float = Field(..., description="Temperature in Celsius")
    humidity: float = Field(..., ge=0, le=100, description="Humidity percentage")
    shift: Shift = Field(..., description="Morning, Afternoon or Night")
    observation: Optional[str] = Field(None, max_length=OBSERVATION_MAX_LENGTH, description="Free-text notes")

    @field_validator('observation')
    @classmethod
    def strip_observation(cls, v):
        if v is None:
            return v
        return v.strip()

class RangeCheckRequest(BaseModel):
    """Anteprima: valori ancora vuoti restano non valutabili"""
    model_config = ConfigDict(allow_inf_nan=False)

    temperature: Optional[float] = None
    humidity: Optional[float] = None

class RangeCheckResponse(BaseModel):
    temperature_ok: Optional[bool]
    humidity_ok: Optional[bool]

class ReadingResponse(BaseModel):
    """Schema for reading API responses"""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    sector_id: uuid.UUID
    timestamp: datetime
    local_day: date
    temperature: float
    humidity: float
    shift: Shift
    observation: str = ""
    temperature_ok: bool
    humidity_ok: bool

    @computed_field
    @property
    def is_compliant(self) -> bool:
        return self.temperature_ok and self.humidity_ok
