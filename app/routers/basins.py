"""
Basins router.

This module contains event statistics aggregated over every station of a
basin. A basin is not stored on its own: it is the set of stations sharing
a basin name.
"""

from typing import Optional, Union
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import settings
from app.core.errors import APIError
from app.crud.event import event as event_crud
from app.database import get_db
from app.schemas.base import ErrorResponse
from app.schemas.event import (
    BasinEventsCountResponse,
    BasinEventsResponse,
    EventSummary,
)
from app.utils.logging_config import get_logger
from app.utils.params import clean_path_value, parse_boolean, resolve_peak_range

logger = get_logger(__name__)

router = APIRouter(
    prefix="/basins",
    tags=["Basins"],
    responses={
        400: {"model": ErrorResponse, "description": "Missing basin name"},
        500: {"model": ErrorResponse, "description": "Query failed"},
    },
)

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


@router.get(
    "/{basin_name}/events",
    response_model=Union[BasinEventsResponse, BasinEventsCountResponse],
    response_model_exclude_unset=True,
)
@limiter.limit(f"{settings.RATE_LIMIT_REQUESTS}/{settings.RATE_LIMIT_WINDOW}seconds")
async def get_basin_events(
    request: Request,
    basin_name: str,
    include_matched_series: Optional[str] = Query(None, alias="includeMatchedSeries"),
    include_matched_events: Optional[str] = Query(None, alias="includeMatchedEvents"),
    count_only: Optional[str] = Query(None, alias="countOnly"),
    peak_start: Optional[str] = Query(None, alias="peakStart", description="YYYY-MM-DD"),
    peak_end: Optional[str] = Query(None, alias="peakEnd", description="YYYY-MM-DD"),
    db: AsyncSession = Depends(get_db),
):
    """
    Event statistics for all stations of a basin.

    The basin name must match exactly. ``recentEvents`` is always an empty
    list; the other parameters behave as on the station endpoint.
    """
    clean_basin = clean_path_value(basin_name)
    if not clean_basin:
        raise APIError("basinName is required.", status_code=status.HTTP_400_BAD_REQUEST)

    want_series = parse_boolean(include_matched_series, False)
    want_detail = parse_boolean(include_matched_events, False)
    want_count = parse_boolean(count_only, False)
    event_filter = resolve_peak_range(peak_start, peak_end)

    logger.info(
        f"Basin events request: basin={clean_basin}, range={event_filter.start_ts}..{event_filter.end_ts}, "
        f"countOnly={want_count}, series={want_series}, detail={want_detail}"
    )

    try:
        filtered = await event_crud.basin_filtered_summary(
            db, basin_name=clean_basin, event_filter=event_filter
        )
        if want_count:
            return BasinEventsCountResponse(
                basin_name=clean_basin, matched_events=filtered["matched_events"]
            )

        totals = await event_crud.basin_summary(db, basin_name=clean_basin)
        response = BasinEventsResponse(
            basin_name=clean_basin,
            summary=EventSummary(**totals, **filtered),
            recent_events=[],
        )
        if want_series:
            response.matched_series = await event_crud.basin_matched_series(
                db, basin_name=clean_basin, event_filter=event_filter
            )
        if want_detail:
            response.matched_events_detail = await event_crud.basin_matched_events_detail(
                db, basin_name=clean_basin, event_filter=event_filter
            )
    except Exception as exc:
        logger.exception(f"Basin events query failed for {clean_basin}")
        raise APIError("Failed to query basin events.", details=str(exc)) from exc

    return response
