# =====================================================
# sectorlog/services/unit_of_work.py - Transaction Management
# =====================================================
from contextlib import contextmanager
from sqlalchemy.orm import Session
from .repository_factory import RepositoryFactory

class UnitOfWork:
    """
    Unit of Work pattern per transaction management.

    PATTERN: Gestisce transazioni e rollback automatico.
    Dentro transaction() i repository vanno usati con commit=False.

    Usage:
        with UnitOfWork(db).transaction() as uow:
            uow.repositories.readings.delete_by_sector(sector_id, commit=False)
            uow.repositories.sectors.delete(sector_id, commit=False)
    """

    def __init__(self, db: Session):
        self.db = db
        self.repositories = RepositoryFactory(db)

    def commit(self):
        """Commit transaction"""
        self.db.commit()

    def rollback(self):
        """Rollback transaction"""
        self.db.rollback()

    @contextmanager
    def transaction(self):
        """Context manager per transazioni automatiche"""
        try:
            yield self
            self.commit()
        except Exception:
            self.rollback()
            raise
