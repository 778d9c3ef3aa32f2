# =====================================================
# sectorlog/schemas/sector.py - Pydantic Schemas
# =====================================================
from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator
from typing import Optional
from datetime import datetime
import uuid

from sectorlog.config import DEFAULT_SECTOR_BOUNDS, PUBLIC_BASE_URL


def validate_bounds(temp_min, temp_max, humidity_min, humidity_max) -> None:
    """Invarianti dei range: max > min per temperatura e umidità"""
    if temp_max <= temp_min:
        raise ValueError('Temperature max must be greater than temperature min')
    if humidity_max <= humidity_min:
        raise ValueError('Humidity max must be greater than humidity min')


class SectorBase(BaseModel):
    """Base schema for Sector"""
    model_config = ConfigDict(allow_inf_nan=False)

    name: str = Field(..., min_length=1, max_length=100, description="Sector name")
    location: str = Field(..., min_length=1, max_length=200, description="Physical location")
    responsible_name: str = Field(..., min_length=1, max_length=100, description="Responsible person")
    temp_min: float = Field(DEFAULT_SECTOR_BOUNDS["temp_min"], description="Minimum ideal temperature (°C)")
    temp_max: float = Field(DEFAULT_SECTOR_BOUNDS["temp_max"], description="Maximum ideal temperature (°C)")
    humidity_min: float = Field(DEFAULT_SECTOR_BOUNDS["humidity_min"], ge=0, le=100, description="Minimum ideal humidity (%)")
    humidity_max: float = Field(DEFAULT_SECTOR_BOUNDS["humidity_max"], ge=0, le=100, description="Maximum ideal humidity (%)")

    @model_validator(mode="after")
    def validate_ranges(self):
        validate_bounds(self.temp_min, self.temp_max, self.humidity_min, self.humidity_max)
        return self


class SectorCreate(SectorBase):
    """Schema for creating sector (owner = current admin)"""
    pass


class SectorUpdate(BaseModel):
    """
    Schema for updating sector.

    Gli invarianti dei range sono verificati sul risultato del merge
    con i valori salvati (SectorRegistry.update).
    """
    model_config = ConfigDict(allow_inf_nan=False)

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    location: Optional[str] = Field(None, min_length=1, max_length=200)
    responsible_name: Optional[str] = Field(None, min_length=1, max_length=100)
    temp_min: Optional[float] = None
    temp_max: Optional[float] = None
    humidity_min: Optional[float] = Field(None, ge=0, le=100)
    humidity_max: Optional[float] = Field(None, ge=0, le=100)


class SectorResponse(SectorBase):
    """Schema for sector API responses"""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    admin_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def share_path(self) -> str:
        return f"/record/{self.id}"


class SectorPublic(BaseModel):
    """Dati minimi per la pagina di registrazione (senza autenticazione)"""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    temp_min: float
    temp_max: float
    humidity_min: float
    humidity_max: float


class ShareLink(BaseModel):
    sector_id: uuid.UUID
    path: str
    url: str

    @classmethod
    def for_sector(cls, sector_id: uuid.UUID, base_url: str = PUBLIC_BASE_URL) -> "ShareLink":
        path = f"/record/{sector_id}"
        return cls(sector_id=sector_id, path=path, url=f"{base_url}{path}")


class SectorDeleted(BaseModel):
    sector_id: uuid.UUID
    readings_deleted: int
