# =====================================================
# sectorlog/repositories/__init__.py - Export tutti i repository
# =====================================================

from .base import BaseRepository
from .sector_repository import SectorRepository
from .reading_repository import ReadingRepository

__all__ = [
    "BaseRepository",
    "SectorRepository",
    "ReadingRepository",
]
