# =====================================================
# sectorlog/routes/dependencies.py - Service Dependencies
# =====================================================
"""
Contesto esplicito per ogni operazione: sessione, orologio, fuso e feed
arrivano come dependency FastAPI (sovrascrivibili nei test).
"""
from datetime import tzinfo
from typing import Callable

from fastapi import Depends
from sqlalchemy.orm import Session

from sectorlog.database.connection import get_db, get_session_factory
from sectorlog.services.day_window import Clock, get_zone, utc_now
from sectorlog.services.live_feed import ReadingFeed, SnapshotLoader, make_snapshot_loader, reading_feed
from sectorlog.services.repository_factory import RepositoryFactory
from sectorlog.services.sector_registry import SectorRegistry
from sectorlog.services.submission_guard import ReadingSubmissionGuard
from sectorlog.services.unit_of_work import UnitOfWork


def get_clock() -> Clock:
    return utc_now


def get_timezone() -> tzinfo:
    return get_zone()


def get_feed() -> ReadingFeed:
    return reading_feed


def get_repositories(db: Session = Depends(get_db)) -> RepositoryFactory:
    return RepositoryFactory(db)


def get_snapshot_loader(
    session_factory: Callable[[], Session] = Depends(get_session_factory),
    zone: tzinfo = Depends(get_timezone),
    clock: Clock = Depends(get_clock),
) -> SnapshotLoader:
    return make_snapshot_loader(session_factory, zone, clock)


def get_sector_registry(
    db: Session = Depends(get_db),
    feed: ReadingFeed = Depends(get_feed),
) -> SectorRegistry:
    return SectorRegistry(UnitOfWork(db), feed=feed)


def get_submission_guard(
    repositories: RepositoryFactory = Depends(get_repositories),
    clock: Clock = Depends(get_clock),
    zone: tzinfo = Depends(get_timezone),
    feed: ReadingFeed = Depends(get_feed),
) -> ReadingSubmissionGuard:
    return ReadingSubmissionGuard(repositories, clock=clock, zone=zone, feed=feed)
