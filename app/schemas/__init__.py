# Pydantic schemas package

from app.schemas.base import BaseSchema, CamelSchema, ErrorResponse
from app.schemas.station import Station, Pagination, StationListResponse
from app.schemas.event import (
    EventSummary, SeriesPoint, EventRow,
    StationEventDetail, BasinEventDetail,
    StationEventsResponse, StationEventsCountResponse,
    BasinEventsResponse, BasinEventsCountResponse,
)

__all__ = [
    # Base schemas
    "BaseSchema", "CamelSchema", "ErrorResponse",

    # Station schemas
    "Station", "Pagination", "StationListResponse",

    # Event schemas
    "EventSummary", "SeriesPoint", "EventRow",
    "StationEventDetail", "BasinEventDetail",
    "StationEventsResponse", "StationEventsCountResponse",
    "BasinEventsResponse", "BasinEventsCountResponse",
]
