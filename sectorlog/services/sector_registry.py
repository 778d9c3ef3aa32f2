# =====================================================
# sectorlog/services/sector_registry.py - Sector Registry
# =====================================================
from typing import List, Optional
import logging
import uuid

from sectorlog.database.exceptions import EntityNotFoundError, ValidationError
from sectorlog.models.sector import Sector
from sectorlog.schemas.sector import SectorCreate, SectorUpdate, validate_bounds
from .unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SectorRegistry:
    """
    CRUD sui settori dell'amministratore corrente.

    Un settore di un altro amministratore è trattato come inesistente.
    """

    def __init__(self, uow: UnitOfWork, feed=None):
        self.uow = uow
        self.repositories = uow.repositories
        self.feed = feed

    def list_for_admin(self, admin_id: uuid.UUID, search: Optional[str] = None) -> List[Sector]:
        if search:
            return self.repositories.sectors.search_by_name(admin_id, search)
        return self.repositories.sectors.get_by_admin(admin_id)

    def get_owned(self, sector_id: uuid.UUID, admin_id: uuid.UUID) -> Sector:
        sector = self.repositories.sectors.get_owned(sector_id, admin_id)
        if sector is None:
            raise EntityNotFoundError(f"Sector {sector_id} not found")
        return sector

    def get_public(self, sector_id: uuid.UUID) -> Sector:
        """Lookup senza autenticazione per il link di registrazione"""
        sector = self.repositories.sectors.get_by_id(sector_id)
        if sector is None:
            raise EntityNotFoundError(f"Sector {sector_id} not found")
        return sector

    def create(self, admin_id: uuid.UUID, data: SectorCreate) -> Sector:
        sector = self.repositories.sectors.create({**data.model_dump(), "admin_id": admin_id})
        logger.info("Sector %s (%s) created by %s", sector.id, sector.name, admin_id)
        return sector

    def update(self, sector_id: uuid.UUID, admin_id: uuid.UUID, changes: SectorUpdate) -> Sector:
        sector = self.get_owned(sector_id, admin_id)
        update_data = changes.model_dump(exclude_unset=True, exclude_none=True)

        bounds = sector.get_bounds()
        bounds.update({key: update_data[key] for key in bounds if key in update_data})
        try:
            validate_bounds(**bounds)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        # Le letture esistenti conservano i flag calcolati all'invio
        sector = self.repositories.sectors.update(sector.id, update_data)
        logger.info("Sector %s updated: %s", sector_id, sorted(update_data))
        return sector

    def delete(self, sector_id: uuid.UUID, admin_id: uuid.UUID) -> int:
        """Cancella settore e tutte le sue letture in un'unica transazione"""
        sector = self.get_owned(sector_id, admin_id)

        with self.uow.transaction() as uow:
            deleted = uow.repositories.readings.delete_by_sector(sector.id, commit=False)
            uow.repositories.sectors.delete(sector.id, commit=False)

        logger.info("Sector %s deleted with %d readings", sector_id, deleted)
        if self.feed is not None:
            self.feed.publish(sector_id)
        return deleted
