# =====================================================
# sectorlog/routes/records.py - Public record page (shared link)
# =====================================================
"""
Endpoint del link condiviso /record/<sectorId>.

Nessuna autenticazione: chiunque abbia il link può inviare letture.
Un id sconosciuto o cancellato risponde 404 (stato terminale).
"""
from datetime import tzinfo
from typing import List
import uuid

from fastapi import APIRouter, Depends, status

from sectorlog.database.exceptions import EntityNotFoundError
from sectorlog.schemas.reading import RangeCheckRequest, RangeCheckResponse, ReadingResponse, ReadingSubmission
from sectorlog.schemas.sector import SectorPublic
from sectorlog.services.day_window import Clock, today_window
from sectorlog.services.live_feed import ReadingFeed, ReadingQuery, SnapshotLoader
from sectorlog.services.repository_factory import RepositoryFactory
from sectorlog.services.submission_guard import ReadingSubmissionGuard
from .dependencies import (
    get_clock,
    get_feed,
    get_repositories,
    get_snapshot_loader,
    get_submission_guard,
    get_timezone,
)
from .streaming import sse_response

router = APIRouter(prefix="/api/v1/record", tags=["Record"])


def parse_sector_id(sector_id: str) -> uuid.UUID:
    # Link alterato o troncato: stesso esito di un settore cancellato
    try:
        return uuid.UUID(sector_id)
    except ValueError:
        raise EntityNotFoundError(f"Sector {sector_id} not found") from None


@router.get("/{sector_id}", response_model=SectorPublic, summary="Sector details for the record form")
def get_record_sector(
    sector_id: str,
    guard: ReadingSubmissionGuard = Depends(get_submission_guard),
):
    return guard.get_sector(parse_sector_id(sector_id))


@router.post("/{sector_id}/check", response_model=RangeCheckResponse, summary="Preview range flags")
def check_reading(
    sector_id: str,
    values: RangeCheckRequest,
    guard: ReadingSubmissionGuard = Depends(get_submission_guard),
):
    result = guard.preview(parse_sector_id(sector_id), values.temperature, values.humidity)
    return RangeCheckResponse(temperature_ok=result.temperature_ok, humidity_ok=result.humidity_ok)


@router.post(
    "/{sector_id}/readings",
    response_model=ReadingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a shift reading",
)
def submit_reading(
    sector_id: str,
    submission: ReadingSubmission,
    guard: ReadingSubmissionGuard = Depends(get_submission_guard),
):
    return guard.submit(parse_sector_id(sector_id), submission)


@router.get("/{sector_id}/today", response_model=List[ReadingResponse], summary="Today's readings")
def get_today_readings(
    sector_id: str,
    guard: ReadingSubmissionGuard = Depends(get_submission_guard),
    repositories: RepositoryFactory = Depends(get_repositories),
    clock: Clock = Depends(get_clock),
    zone: tzinfo = Depends(get_timezone),
):
    sector = guard.get_sector(parse_sector_id(sector_id))
    window = today_window(clock(), zone)
    return repositories.readings.get_in_window(sector.id, window.start, window.end)


@router.get("/{sector_id}/today/stream", summary="Live stream of today's readings")
def stream_today_readings(
    sector_id: str,
    guard: ReadingSubmissionGuard = Depends(get_submission_guard),
    feed: ReadingFeed = Depends(get_feed),
    loader: SnapshotLoader = Depends(get_snapshot_loader),
):
    sector = guard.get_sector(parse_sector_id(sector_id))
    return sse_response(snapshot_events(feed, ReadingQuery(sector_id=sector.id), loader), event="readings")


async def snapshot_events(feed: ReadingFeed, query: ReadingQuery, loader: SnapshotLoader):
    """Readings di ogni snapshot; la subscription vive quanto lo stream"""
    async with feed.subscribe(query, loader) as subscription:
        async for snapshot in subscription:
            yield snapshot.readings
