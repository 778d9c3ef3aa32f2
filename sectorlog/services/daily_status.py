# =====================================================
# sectorlog/services/daily_status.py - Daily Status Aggregator
# =====================================================
"""
Turni completati oggi, per settore.

Lo stato di ogni settore è derivato da zero ad ogni snapshot: lo stesso
insieme di letture produce sempre lo stesso risultato, indipendentemente
dall'ordine di arrivo degli aggiornamenti tra settori diversi.
"""
from collections import Counter
from datetime import tzinfo
from typing import AsyncIterator, Dict, Iterable, Mapping, Sequence, Tuple
import asyncio
import logging
import uuid

from sectorlog.database.exceptions import DatabaseError
from sectorlog.models.reading import Shift
from sectorlog.models.sector import Sector
from sectorlog.schemas.report import SectorShiftStatus
from .day_window import DayWindow, today_window
from .live_feed import ReadingFeed, ReadingQuery, SnapshotLoader
from .repository_factory import RepositoryFactory

logger = logging.getLogger(__name__)

SHIFTS = tuple(Shift)


def empty_status(sector: Sector) -> SectorShiftStatus:
    return SectorShiftStatus(
        sector_id=sector.id,
        name=sector.name,
        shifts={shift: False for shift in SHIFTS},
    )


def sector_status(sector: Sector, readings: Iterable) -> SectorShiftStatus:
    """Un turno è completato se esiste almeno una lettura; i doppioni sono solo contati"""
    counts = Counter(Shift(reading.shift) for reading in readings if reading.sector_id == sector.id)
    return SectorShiftStatus(
        sector_id=sector.id,
        name=sector.name,
        shifts={shift: counts[shift] > 0 for shift in SHIFTS},
        redundant={shift: counts[shift] - 1 for shift in SHIFTS if counts[shift] > 1},
    )


def compute_daily_status(
    sectors: Sequence[Sector],
    readings_by_sector: Mapping[uuid.UUID, Iterable],
) -> Dict[uuid.UUID, SectorShiftStatus]:
    """Funzione pura: settori + letture di oggi -> stato per settore"""
    return {
        sector.id: sector_status(sector, readings_by_sector.get(sector.id, ()))
        for sector in sectors
    }


class DailyStatusAggregator:
    """Calcolo one-shot sullo store, un settore alla volta"""

    def __init__(self, repositories: RepositoryFactory, zone: tzinfo):
        self.repositories = repositories
        self.zone = zone

    def compute(self, sectors: Sequence[Sector], now) -> Tuple[DayWindow, Dict[uuid.UUID, SectorShiftStatus]]:
        # Confini ricalcolati ad ogni esecuzione
        window = today_window(now, self.zone)
        result: Dict[uuid.UUID, SectorShiftStatus] = {}
        for sector in sectors:
            try:
                readings = self.repositories.readings.get_in_window(sector.id, window.start, window.end)
            except DatabaseError as e:
                logger.warning("Daily status unavailable for sector %s: %s", sector.id, e)
                readings = []
            result[sector.id] = sector_status(sector, readings)
        return window, result


async def watch_daily_status(
    feed: ReadingFeed,
    sectors: Sequence[Sector],
    loader: SnapshotLoader,
) -> AsyncIterator[Dict[uuid.UUID, SectorShiftStatus]]:
    """
    Stato live: una subscription per settore, unite in un'unica sequenza.

    Ogni snapshot ricalcola solo il settore interessato e produce la mappa
    completa. Una subscription che fallisce lascia il suo settore a
    "nessun turno" senza fermare le altre. Tutte le subscription vengono
    chiuse quando il consumatore smette di iterare.
    """
    status = {sector.id: empty_status(sector) for sector in sectors}
    if not sectors:
        yield dict(status)
        return

    queue: asyncio.Queue = asyncio.Queue()
    subscriptions = [feed.subscribe(ReadingQuery(sector_id=sector.id), loader) for sector in sectors]

    async def pump(sector: Sector, subscription) -> None:
        try:
            async for snapshot in subscription:
                await queue.put((sector, snapshot.readings))
        finally:
            await queue.put((sector, None))

    tasks = [
        asyncio.create_task(pump(sector, subscription))
        for sector, subscription in zip(sectors, subscriptions)
    ]
    remaining = len(tasks)
    try:
        while remaining:
            sector, readings = await queue.get()
            if readings is None:
                remaining -= 1
                continue
            status[sector.id] = sector_status(sector, readings)
            yield dict(status)
    finally:
        for subscription in subscriptions:
            subscription.close()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
