# =====================================================
# sectorlog/routes/sectors.py - Sector management (administrators)
# =====================================================
from datetime import date, tzinfo
from typing import Dict, List, Optional
import uuid

from fastapi import APIRouter, Depends, Query, Response, status

from sectorlog.auth.config import current_active_user
from sectorlog.config import DEFAULT_SECTOR_BOUNDS
from sectorlog.models.user import User
from sectorlog.schemas.reading import ReadingResponse
from sectorlog.schemas.report import HistoryPeriodEnum, HistoryResponse
from sectorlog.schemas.sector import SectorCreate, SectorDeleted, SectorResponse, SectorUpdate, ShareLink
from sectorlog.services.day_window import Clock, day_window, resolve_day, trailing_window_start
from sectorlog.services.history import build_history
from sectorlog.services.live_feed import ReadingFeed, ReadingQuery, SnapshotLoader
from sectorlog.services.report_exporter import export_filename, export_readings_csv
from sectorlog.services.repository_factory import RepositoryFactory
from sectorlog.services.sector_registry import SectorRegistry
from .dependencies import get_clock, get_feed, get_repositories, get_sector_registry, get_snapshot_loader, get_timezone
from .records import snapshot_events
from .streaming import sse_response

router = APIRouter(prefix="/api/v1/sectors", tags=["Sectors"])


# ==========================================
# SECTOR CRUD
# ==========================================

@router.get("", response_model=List[SectorResponse], summary="List my sectors")
def list_sectors(
    search: Optional[str] = Query(None, max_length=100, description="Filter by name"),
    current_user: User = Depends(current_active_user),
    registry: SectorRegistry = Depends(get_sector_registry),
):
    return registry.list_for_admin(current_user.id, search)


@router.get("/defaults", response_model=Dict[str, float], summary="Default bounds for new sectors")
def get_sector_defaults(current_user: User = Depends(current_active_user)):
    return DEFAULT_SECTOR_BOUNDS


@router.post("", response_model=SectorResponse, status_code=status.HTTP_201_CREATED, summary="Create sector")
def create_sector(
    sector_in: SectorCreate,
    current_user: User = Depends(current_active_user),
    registry: SectorRegistry = Depends(get_sector_registry),
):
    return registry.create(current_user.id, sector_in)


@router.get("/{sector_id}", response_model=SectorResponse, summary="Get sector")
def get_sector(
    sector_id: uuid.UUID,
    current_user: User = Depends(current_active_user),
    registry: SectorRegistry = Depends(get_sector_registry),
):
    return registry.get_owned(sector_id, current_user.id)


@router.patch("/{sector_id}", response_model=SectorResponse, summary="Update sector")
def update_sector(
    sector_id: uuid.UUID,
    changes: SectorUpdate,
    current_user: User = Depends(current_active_user),
    registry: SectorRegistry = Depends(get_sector_registry),
):
    return registry.update(sector_id, current_user.id, changes)


@router.delete("/{sector_id}", response_model=SectorDeleted, summary="Delete sector and its readings")
def delete_sector(
    sector_id: uuid.UUID,
    current_user: User = Depends(current_active_user),
    registry: SectorRegistry = Depends(get_sector_registry),
):
    deleted = registry.delete(sector_id, current_user.id)
    return SectorDeleted(sector_id=sector_id, readings_deleted=deleted)


@router.get("/{sector_id}/share-link", response_model=ShareLink, summary="Shareable record link")
def get_share_link(
    sector_id: uuid.UUID,
    current_user: User = Depends(current_active_user),
    registry: SectorRegistry = Depends(get_sector_registry),
):
    sector = registry.get_owned(sector_id, current_user.id)
    return ShareLink.for_sector(sector.id)


# ==========================================
# READINGS, EXPORT, HISTORY
# ==========================================

@router.get("/{sector_id}/readings", response_model=List[ReadingResponse], summary="Readings of one day")
def list_day_readings(
    sector_id: uuid.UUID,
    day: Optional[date] = Query(None, description="Local day (default: today)"),
    current_user: User = Depends(current_active_user),
    registry: SectorRegistry = Depends(get_sector_registry),
    repositories: RepositoryFactory = Depends(get_repositories),
    clock: Clock = Depends(get_clock),
    zone: tzinfo = Depends(get_timezone),
):
    sector = registry.get_owned(sector_id, current_user.id)
    window = day_window(resolve_day(day, clock(), zone), zone)
    return repositories.readings.get_in_window(sector.id, window.start, window.end)


@router.get("/{sector_id}/readings/stream", summary="Live stream of one day's readings")
def stream_day_readings(
    sector_id: uuid.UUID,
    day: Optional[date] = Query(None, description="Local day (default: today)"),
    current_user: User = Depends(current_active_user),
    registry: SectorRegistry = Depends(get_sector_registry),
    feed: ReadingFeed = Depends(get_feed),
    loader: SnapshotLoader = Depends(get_snapshot_loader),
):
    sector = registry.get_owned(sector_id, current_user.id)
    query = ReadingQuery(sector_id=sector.id, day=day)
    return sse_response(snapshot_events(feed, query, loader), event="readings")


@router.get("/{sector_id}/readings/export", summary="Export one day's readings as CSV")
def export_day_readings(
    sector_id: uuid.UUID,
    day: Optional[date] = Query(None, description="Local day (default: today)"),
    current_user: User = Depends(current_active_user),
    registry: SectorRegistry = Depends(get_sector_registry),
    repositories: RepositoryFactory = Depends(get_repositories),
    clock: Clock = Depends(get_clock),
    zone: tzinfo = Depends(get_timezone),
):
    sector = registry.get_owned(sector_id, current_user.id)
    window = day_window(resolve_day(day, clock(), zone), zone)
    readings = repositories.readings.get_in_window(sector.id, window.start, window.end)
    return Response(
        content=export_readings_csv(readings, zone),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(sector.name, window.day)}"'},
    )


@router.get("/{sector_id}/history", response_model=HistoryResponse, summary="Daily averages for charts")
def get_history(
    sector_id: uuid.UUID,
    period: HistoryPeriodEnum = Query(HistoryPeriodEnum.WEEK),
    current_user: User = Depends(current_active_user),
    registry: SectorRegistry = Depends(get_sector_registry),
    repositories: RepositoryFactory = Depends(get_repositories),
    clock: Clock = Depends(get_clock),
    zone: tzinfo = Depends(get_timezone),
):
    sector = registry.get_owned(sector_id, current_user.id)
    start = trailing_window_start(clock(), period.days, zone)
    readings = repositories.readings.get_in_window(sector.id, start)
    return HistoryResponse(sector_id=sector.id, period=period, points=build_history(readings, zone))
