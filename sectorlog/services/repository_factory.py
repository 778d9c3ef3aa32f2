# =====================================================
# sectorlog/services/repository_factory.py - Dependency Injection Helper
# =====================================================
from sqlalchemy.orm import Session

from ..repositories import SectorRepository
from ..repositories import ReadingRepository

class RepositoryFactory:
    """
    Factory per creare repository con dependency injection.

    PATTERN: Centralizza creazione repository per easy testing e DI
    """

    def __init__(self, db: Session):
        self.db = db

    @property
    def sectors(self) -> SectorRepository:
        return SectorRepository(self.db)

    @property
    def readings(self) -> ReadingRepository:
        return ReadingRepository(self.db)
