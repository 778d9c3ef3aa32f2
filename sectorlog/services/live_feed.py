# =====================================================
# sectorlog/services/live_feed.py - Live snapshot subscriptions
# =====================================================
"""
Hub publish/subscribe in-process per gli aggiornamenti live.

Una subscription è legata a una query (settore + giorno, oppure settore +
finestra di N giorni) ed è un async iterator di Snapshot: il primo è lo
stato iniziale, poi uno nuovo ad ogni publish() sul settore. Ogni snapshot
è il risultato completo della query: i consumatori ricalcolano la vista,
non applicano delta.

publish() è thread-safe: le scritture avvengono nel threadpool di FastAPI
mentre le subscription vivono nell'event loop.
"""
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Callable, List, Optional, Sequence, Tuple
import asyncio
import logging
import threading
import uuid

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from sectorlog.schemas.reading import ReadingResponse
from .day_window import Clock, day_window, resolve_day, trailing_window_start, utc_now
from .repository_factory import RepositoryFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadingQuery:
    """
    Chiave di una subscription.

    - day=None, trailing_days=None: "oggi", ricalcolato ad ogni load
    - day=<date>: quel giorno locale
    - trailing_days=N: da mezzanotte di (oggi - N + 1), senza fine
    """
    sector_id: uuid.UUID
    day: Optional[date] = None
    trailing_days: Optional[int] = None

    def resolve_window(self, now: datetime, zone: tzinfo) -> Tuple[datetime, Optional[datetime]]:
        if self.trailing_days is not None:
            return trailing_window_start(now, self.trailing_days, zone), None
        window = day_window(resolve_day(self.day, now, zone), zone)
        return window.start, window.end


@dataclass(frozen=True)
class Snapshot:
    query: ReadingQuery
    readings: List[ReadingResponse] = field(default_factory=list)


SnapshotLoader = Callable[[ReadingQuery], Sequence[ReadingResponse]]


def make_snapshot_loader(
    session_factory: Callable[[], Session],
    zone: tzinfo,
    clock: Clock = utc_now,
) -> SnapshotLoader:
    """Loader che apre una sessione dedicata per ogni snapshot"""

    def load(query: ReadingQuery) -> List[ReadingResponse]:
        db = session_factory()
        try:
            start, end = query.resolve_window(clock(), zone)
            readings = RepositoryFactory(db).readings.get_in_window(query.sector_id, start, end)
            return [ReadingResponse.model_validate(reading) for reading in readings]
        finally:
            db.close()

    return load


class Subscription:
    """Stream cancellabile di Snapshot per una query"""

    def __init__(self, feed: "ReadingFeed", query: ReadingQuery, loader: SnapshotLoader):
        self.feed = feed
        self.query = query
        self._loader = loader
        self._loop = asyncio.get_running_loop()
        self._changed = asyncio.Event()
        self._started = False
        self.closed = False

    def __aiter__(self):
        return self

    async def __anext__(self) -> Snapshot:
        if self._started:
            await self._changed.wait()
        self._started = True
        if self.closed:
            raise StopAsyncIteration
        self._changed.clear()

        try:
            readings = await run_in_threadpool(self._loader, self.query)
        except Exception:
            # Fallisce solo questa subscription: la vista resta vuota
            logger.exception("Subscription for sector %s failed, closing it", self.query.sector_id)
            self.close()
            raise StopAsyncIteration
        return Snapshot(query=self.query, readings=list(readings))

    def notify(self) -> None:
        """Chiamabile da qualsiasi thread"""
        if self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._changed.set)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.feed.unsubscribe(self)
        self.notify()

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.close()


class ReadingFeed:
    """Registro delle subscription attive, indicizzate per settore"""

    def __init__(self):
        self._lock = threading.Lock()
        self._subscriptions: List[Subscription] = []

    def subscribe(self, query: ReadingQuery, loader: SnapshotLoader) -> Subscription:
        subscription = Subscription(self, query, loader)
        with self._lock:
            self._subscriptions.append(subscription)
        logger.debug("Subscribed to sector %s (%d active)", query.sector_id, self.active_count)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

    def publish(self, sector_id: uuid.UUID) -> int:
        """Sveglia le subscription del settore; ritorna quante"""
        with self._lock:
            targets = [s for s in self._subscriptions if s.query.sector_id == sector_id]
        for subscription in targets:
            subscription.notify()
        return len(targets)

    @property
    def active_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)


# Istanza condivisa dall'applicazione
reading_feed = ReadingFeed()
