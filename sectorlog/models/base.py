# =====================================================
# sectorlog/models/base.py
# =====================================================
from sqlalchemy import Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from datetime import datetime
import uuid

class Base(DeclarativeBase):
    """SQLAlchemy 2.0 declarative base"""
    pass

class BaseModel(Base):
    """
    Base model per tutti i modelli.

    - id UUID generato lato applicazione (Uuid: nativo su PostgreSQL,
      CHAR(32) su SQLite)
    - created_at / updated_at assegnati dal database
    """

    __abstract__ = True

    # Primary key con UUID
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )

    # Timestamps automatici
    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now()
    )

    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now()
    )

    def __repr__(self) -> str:
        """Rappresentazione debug"""
        return f"<{self.__class__.__name__}(id={self.id})>"
