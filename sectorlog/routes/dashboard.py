# =====================================================
# sectorlog/routes/dashboard.py - Daily shift status
# =====================================================
from datetime import tzinfo

from fastapi import APIRouter, Depends

from sectorlog.auth.config import current_active_user
from sectorlog.models.user import User
from sectorlog.schemas.report import DailyStatusResponse
from sectorlog.services.daily_status import DailyStatusAggregator, watch_daily_status
from sectorlog.services.day_window import Clock, local_day_of
from sectorlog.services.live_feed import ReadingFeed, SnapshotLoader
from sectorlog.services.repository_factory import RepositoryFactory
from .dependencies import get_clock, get_feed, get_repositories, get_snapshot_loader, get_timezone
from .streaming import sse_response

router = APIRouter(prefix="/api/v1/dashboard", tags=["Dashboard"])


@router.get("/status", response_model=DailyStatusResponse, summary="Shifts completed today per sector")
def get_daily_status(
    current_user: User = Depends(current_active_user),
    repositories: RepositoryFactory = Depends(get_repositories),
    clock: Clock = Depends(get_clock),
    zone: tzinfo = Depends(get_timezone),
):
    sectors = repositories.sectors.get_by_admin(current_user.id)
    window, status = DailyStatusAggregator(repositories, zone).compute(sectors, clock())
    return DailyStatusResponse(day=window.day, sectors=[status[sector.id] for sector in sectors])


@router.get("/status/stream", summary="Live shift status for all my sectors")
def stream_daily_status(
    current_user: User = Depends(current_active_user),
    repositories: RepositoryFactory = Depends(get_repositories),
    feed: ReadingFeed = Depends(get_feed),
    loader: SnapshotLoader = Depends(get_snapshot_loader),
    clock: Clock = Depends(get_clock),
    zone: tzinfo = Depends(get_timezone),
):
    sectors = repositories.sectors.get_by_admin(current_user.id)

    async def events():
        async for status in watch_daily_status(feed, sectors, loader):
            yield DailyStatusResponse(
                day=local_day_of(clock(), zone),
                sectors=[status[sector.id] for sector in sectors],
            )

    return sse_response(events(), event="status")
