# =====================================================
# sectorlog/models/user.py - FastAPI-Users administrator
# =====================================================
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from typing import Optional

from fastapi_users.db import SQLAlchemyBaseUserTableUUID
from .base import BaseModel

class User(SQLAlchemyBaseUserTableUUID, BaseModel):
    """
    Amministratore con FastAPI-Users compatibility.

    Eredita da SQLAlchemyBaseUserTableUUID che fornisce:
    - id, email (unique), hashed_password
    - is_active, is_verified, is_superuser

    I settori referenziano l'amministratore tramite Sector.admin_id;
    nessuna relationship ORM (la tabella utenti vive sulla sessione async).
    """

    __tablename__ = "users"

    display_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    def __str__(self) -> str:
        return f"User(email={self.email})"
