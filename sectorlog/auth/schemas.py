# =====================================================
# sectorlog/auth/schemas.py - FastAPI-Users Schemas
# =====================================================
import uuid
from typing import Optional
from pydantic import Field
from fastapi_users import schemas

class UserRead(schemas.BaseUser[uuid.UUID]):
    """Schema per leggere dati amministratore (response API)."""
    display_name: Optional[str] = None

class UserCreate(schemas.BaseUserCreate):
    """Schema per registrazione amministratore."""
    display_name: Optional[str] = Field(None, max_length=100)

class UserUpdate(schemas.BaseUserUpdate):
    """Schema per aggiornare il profilo."""
    display_name: Optional[str] = Field(None, max_length=100)
