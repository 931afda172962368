"""
Station schemas.

This module contains Pydantic schemas for the station listing endpoint.
"""

from typing import List, Optional

from app.schemas.base import BaseSchema, CamelSchema


class Station(BaseSchema):
    """Monitoring station as exposed by the API."""
    station_id: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    basin_name: Optional[str] = None
    river_name: Optional[str] = None
    station_name: Optional[str] = None
    station_name2: Optional[str] = None
    station_name3: Optional[str] = None
    description: Optional[str] = None
    has_data: Optional[int] = 0


class Pagination(CamelSchema):
    """Pagination block of a station listing."""
    page: int
    page_size: int
    total: int
    total_pages: int


class StationListResponse(CamelSchema):
    """Paginated station listing."""
    items: List[Station]
    pagination: Pagination
