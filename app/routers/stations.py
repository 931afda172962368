"""
Stations router.

This module contains the station listing used by the map and the per-station
event statistics shown in the side panel.
"""

from typing import Optional, Union
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import settings
from app.core.errors import APIError
from app.crud.event import event as event_crud
from app.crud.station import station as station_crud
from app.database import get_db
from app.schemas.base import ErrorResponse
from app.schemas.event import (
    EventSummary,
    StationEventsCountResponse,
    StationEventsResponse,
)
from app.schemas.station import Pagination, Station, StationListResponse
from app.utils.logging_config import get_logger
from app.utils.params import (
    MAX_PAGE,
    clean_path_value,
    parse_boolean,
    parse_positive_int,
    resolve_peak_range,
)

logger = get_logger(__name__)

router = APIRouter(
    prefix="/stations",
    tags=["Stations"],
    responses={
        500: {"model": ErrorResponse, "description": "Query failed"},
    },
)

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

RATE_LIMIT = f"{settings.RATE_LIMIT_REQUESTS}/{settings.RATE_LIMIT_WINDOW}seconds"


@router.get("", response_model=StationListResponse)
@limiter.limit(RATE_LIMIT)
async def list_stations(
    request: Request,
    q: Optional[str] = Query(None, description="Keyword matched against ids, names, river and basin"),
    has_data: Optional[str] = Query(None, alias="hasData", description="1 for stations with events, 0 for without"),
    page: Optional[str] = Query(None, description="1-based page number"),
    page_size: Optional[str] = Query(None, alias="pageSize", description="Stations per page (max 1000)"),
    db: AsyncSession = Depends(get_db),
):
    """
    List stations, stations with data first.

    Invalid paging values fall back to their defaults and an unknown
    ``hasData`` value is ignored.
    """
    keyword = (q or "").strip()
    page_no = parse_positive_int(page, 1, MAX_PAGE)
    size = parse_positive_int(
        page_size, settings.STATIONS_DEFAULT_PAGE_SIZE, settings.STATIONS_MAX_PAGE_SIZE
    )
    logger.info(f"Stations request: q='{keyword}', hasData={has_data}, page={page_no}, pageSize={size}")

    try:
        items, total, total_pages = await station_crud.list_stations(
            db, keyword=keyword, has_data=has_data, page=page_no, page_size=size
        )
        response = StationListResponse(
            items=[Station.model_validate(item) for item in items],
            pagination=Pagination(
                page=page_no, page_size=size, total=total, total_pages=total_pages
            ),
        )
    except Exception as exc:
        logger.exception("Station listing failed")
        raise APIError("Failed to query stations.", details=str(exc)) from exc

    return response


@router.get(
    "/{station_id}/events",
    response_model=Union[StationEventsResponse, StationEventsCountResponse],
    response_model_exclude_unset=True,
    responses={400: {"model": ErrorResponse, "description": "Missing station id"}},
)
@limiter.limit(RATE_LIMIT)
async def get_station_events(
    request: Request,
    station_id: str,
    limit: Optional[str] = Query(None, description="Number of recent events (default 20, max 100)"),
    include_recent: Optional[str] = Query(None, alias="includeRecent"),
    include_matched_series: Optional[str] = Query(None, alias="includeMatchedSeries"),
    include_matched_events: Optional[str] = Query(None, alias="includeMatchedEvents"),
    count_only: Optional[str] = Query(None, alias="countOnly"),
    peak_start: Optional[str] = Query(None, alias="peakStart", description="YYYY-MM-DD"),
    peak_end: Optional[str] = Query(None, alias="peakEnd", description="YYYY-MM-DD"),
    db: AsyncSession = Depends(get_db),
):
    """
    Event statistics for one station.

    ``summary`` combines the all-time totals with statistics over events whose
    peak falls between ``peakStart`` and ``peakEnd``. ``countOnly`` returns
    just the matched count. ``recentEvents`` is always present and empty when
    ``includeRecent`` is off; ``matchedSeries`` and ``matchedEventsDetail``
    appear only when their flag is on.
    """
    clean_id = clean_path_value(station_id)
    if not clean_id:
        raise APIError("stationId is required.", status_code=status.HTTP_400_BAD_REQUEST)

    recent_limit = parse_positive_int(
        limit, settings.RECENT_EVENTS_DEFAULT_LIMIT, settings.RECENT_EVENTS_MAX_LIMIT
    )
    want_recent = parse_boolean(include_recent, True)
    want_series = parse_boolean(include_matched_series, False)
    want_detail = parse_boolean(include_matched_events, False)
    want_count = parse_boolean(count_only, False)
    event_filter = resolve_peak_range(peak_start, peak_end)

    logger.info(
        f"Station events request: station={clean_id}, range={event_filter.start_ts}..{event_filter.end_ts}, "
        f"countOnly={want_count}, recent={want_recent}, series={want_series}, detail={want_detail}"
    )

    try:
        filtered = await event_crud.station_filtered_summary(
            db, station_id=clean_id, event_filter=event_filter
        )
        if want_count:
            return StationEventsCountResponse(
                station_id=clean_id, matched_events=filtered["matched_events"]
            )

        totals = await event_crud.station_summary(db, station_id=clean_id)
        response = StationEventsResponse(
            station_id=clean_id,
            summary=EventSummary(**totals, **filtered),
        )
        response.recent_events = (
            await event_crud.station_recent_events(db, station_id=clean_id, limit=recent_limit)
            if want_recent else []
        )
        if want_series:
            response.matched_series = await event_crud.station_matched_series(
                db, station_id=clean_id, event_filter=event_filter
            )
        if want_detail:
            response.matched_events_detail = await event_crud.station_matched_events_detail(
                db, station_id=clean_id, event_filter=event_filter
            )
    except Exception as exc:
        logger.exception(f"Station events query failed for {clean_id}")
        raise APIError("Failed to query station events.", details=str(exc)) from exc

    return response
