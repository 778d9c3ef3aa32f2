# =====================================================
# sectorlog/repositories/sector_repository.py
# =====================================================
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import and_

from sectorlog.models.sector import Sector
from sectorlog.database.exceptions import handle_database_errors
from .base import BaseRepository
import uuid

class SectorRepository(BaseRepository[Sector]):
    """Repository per Sectors con query per amministratore"""

    entity_name = "Sector"

    def __init__(self, db: Session):
        super().__init__(Sector, db)

    @handle_database_errors()
    def get_by_admin(self, admin_id: uuid.UUID) -> List[Sector]:
        """Settori di proprietà dell'amministratore, ordinati per nome"""
        return self.db.query(Sector).filter(Sector.admin_id == admin_id).order_by(
            Sector.name, Sector.id
        ).all()

    @handle_database_errors()
    def get_owned(self, sector_id: uuid.UUID, admin_id: uuid.UUID) -> Optional[Sector]:
        """Settore solo se appartiene all'amministratore"""
        return self.db.query(Sector).filter(
            and_(Sector.id == sector_id, Sector.admin_id == admin_id)
        ).first()

    @handle_database_errors()
    def search_by_name(self, admin_id: uuid.UUID, search_term: str) -> List[Sector]:
        """Search sectors by name"""
        return self.db.query(Sector).filter(
            and_(
                Sector.admin_id == admin_id,
                Sector.name.ilike(f"%{search_term}%")
            )
        ).order_by(Sector.name).all()
