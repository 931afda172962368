"""
Event schemas.

This module contains Pydantic schemas for station and basin event queries.

Optional list fields on the envelopes are left unset when the caller did not
ask for them; routes serialize with ``exclude_unset`` so that an unrequested
list is absent while a requested but empty one is ``[]``.
"""

from typing import List, Optional

from app.schemas.base import BaseSchema, CamelSchema


class EventSummary(CamelSchema):
    """
    Unfiltered totals merged with aggregates over the matched events.

    ``total_events`` and the four time bounds ignore the peak range;
    ``matched_events`` and the value statistics honour it.
    """
    total_events: int
    matched_events: int
    first_start_time: Optional[str] = None
    last_end_time: Optional[str] = None
    min_peak_time: Optional[str] = None
    max_peak_time: Optional[str] = None
    max_peak_value: Optional[float] = None
    avg_peak_value: Optional[float] = None
    avg_rise_time: Optional[float] = None
    avg_fall_time: Optional[float] = None


class SeriesPoint(BaseSchema):
    """Single point of the peak timeline."""
    id: int
    peak_time: str
    peak_value: float
    peak_time_str: Optional[str] = None


class EventRow(BaseSchema):
    """Event as returned by the recent-events list."""
    id: int
    start_time: Optional[str] = None
    peak_time: Optional[str] = None
    end_time: Optional[str] = None
    start_value: Optional[float] = None
    peak_value: Optional[float] = None
    end_value: Optional[float] = None
    rise_time: Optional[float] = None
    fall_time: Optional[float] = None
    peak_time_str: Optional[str] = None


class StationEventDetail(EventRow):
    """Matched event of a single station."""
    station_id: Optional[str] = None


class BasinEventDetail(StationEventDetail):
    """Matched event of a basin, carrying the owning station's basin."""
    basin_name: Optional[str] = None


class StationEventsResponse(CamelSchema):
    """Full response of the station events endpoint."""
    station_id: str
    summary: EventSummary
    recent_events: List[EventRow] = []
    matched_series: Optional[List[SeriesPoint]] = None
    matched_events_detail: Optional[List[StationEventDetail]] = None


class StationEventsCountResponse(CamelSchema):
    """Count-only response of the station events endpoint."""
    station_id: str
    matched_events: int


class BasinEventsResponse(CamelSchema):
    """Full response of the basin events endpoint."""
    basin_name: str
    summary: EventSummary
    recent_events: List[EventRow] = []
    matched_series: Optional[List[SeriesPoint]] = None
    matched_events_detail: Optional[List[BasinEventDetail]] = None


class BasinEventsCountResponse(CamelSchema):
    """Count-only response of the basin events endpoint."""
    basin_name: str
    matched_events: int
