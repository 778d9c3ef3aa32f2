# =====================================================
# sectorlog/repositories/reading_repository.py
# =====================================================
from typing import Dict, Iterable, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import and_
from datetime import datetime

from sectorlog.models.reading import Reading, Shift
from sectorlog.database.exceptions import handle_database_errors
from .base import BaseRepository
import uuid

class ReadingRepository(BaseRepository[Reading]):
    """
    Repository per Readings.

    Tutti i timestamp sono UTC naive; i confini del giorno locale
    vengono calcolati dal chiamante (services.day_window).
    """

    entity_name = "Reading"

    def __init__(self, db: Session):
        super().__init__(Reading, db)

    def _window_filter(self, sector_id: uuid.UUID, start: datetime, end: Optional[datetime]):
        conditions = [Reading.sector_id == sector_id, Reading.timestamp >= start]
        if end is not None:
            conditions.append(Reading.timestamp <= end)
        return and_(*conditions)

    @handle_database_errors()
    def get_in_window(
        self,
        sector_id: uuid.UUID,
        start: datetime,
        end: Optional[datetime] = None,
        shift: Optional[Shift] = None,
    ) -> List[Reading]:
        """Letture del settore in [start, end], ordinate per timestamp crescente"""
        query = self.db.query(Reading).filter(self._window_filter(sector_id, start, end))
        if shift is not None:
            query = query.filter(Reading.shift == Shift(shift).value)
        return query.order_by(Reading.timestamp, Reading.id).all()

    @handle_database_errors()
    def exists_for_shift(self, sector_id: uuid.UUID, shift: Shift, start: datetime, end: datetime) -> bool:
        """Lettura già presente per il turno nella finestra (controllo one-shot)"""
        return self.db.query(Reading.id).filter(
            and_(
                self._window_filter(sector_id, start, end),
                Reading.shift == Shift(shift).value,
            )
        ).first() is not None

    @handle_database_errors()
    def get_for_sectors_in_window(
        self,
        sector_ids: Iterable[uuid.UUID],
        start: datetime,
        end: datetime,
    ) -> Dict[uuid.UUID, List[Reading]]:
        """Letture raggruppate per settore (dashboard one-shot)"""
        ids = list(sector_ids)
        grouped: Dict[uuid.UUID, List[Reading]] = {sector_id: [] for sector_id in ids}
        if not ids:
            return grouped

        rows = self.db.query(Reading).filter(
            and_(
                Reading.sector_id.in_(ids),
                Reading.timestamp >= start,
                Reading.timestamp <= end,
            )
        ).order_by(Reading.timestamp).all()
        for reading in rows:
            grouped[reading.sector_id].append(reading)
        return grouped

    @handle_database_errors()
    def count_by_sector(self, sector_id: uuid.UUID) -> int:
        return self.db.query(Reading).filter(Reading.sector_id == sector_id).count()

    @handle_database_errors()
    def delete_by_sector(self, sector_id: uuid.UUID, commit: bool = True) -> int:
        """Cancella tutte le letture del settore, ritorna quante"""
        deleted = self.db.query(Reading).filter(Reading.sector_id == sector_id).delete(
            synchronize_session=False
        )
        if commit:
            self.db.commit()
        else:
            self.db.flush()
        return deleted
